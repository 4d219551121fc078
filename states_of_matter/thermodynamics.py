#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Thermodynamics and Phase Mapping
================================================================================

Project:        States of Matter Engine
Module:         thermodynamics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Everything that translates between the dimensionless model and the real
world:
- Phases of matter and the temperature that goes with each
- Model temperature to Kelvin and model pressure to atmospheres
- Hexatic order parameter as a crystallinity diagnostic
"""

import logging
from enum import Enum
from typing import Tuple

import numpy as np
from numba import jit

from .constants import (
    SOLID_TEMPERATURE,
    LIQUID_TEMPERATURE,
    GAS_TEMPERATURE,
    TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE,
    CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE,
)
from .particles import MoleculeType

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Phases of matter the molecules can be initialized into."""
    SOLID = "solid"
    LIQUID = "liquid"
    GAS = "gas"


PHASE_TEMPERATURES = {
    Phase.SOLID: SOLID_TEMPERATURE,
    Phase.LIQUID: LIQUID_TEMPERATURE,
    Phase.GAS: GAS_TEMPERATURE,
}

# Kelvin is never reported below this once above the minimum model temperature
MIN_REPORTED_KELVIN = 0.5


def coerce_phase(phase) -> Phase:
    """
    Accept a Phase or its string value; anything else falls back to solid.
    """
    if isinstance(phase, Phase):
        return phase
    try:
        return Phase(phase)
    except ValueError:
        logger.warning("Invalid phase %r specified, using solid", phase)
        return Phase.SOLID


def map_temperature_to_phase(temperature: float) -> Phase:
    """
    Phase implied by a model temperature.

    The boundaries sit halfway between the solid, liquid and gas
    temperatures.
    """
    if temperature < SOLID_TEMPERATURE + (LIQUID_TEMPERATURE - SOLID_TEMPERATURE) / 2:
        return Phase.SOLID
    if temperature < LIQUID_TEMPERATURE + (GAS_TEMPERATURE - LIQUID_TEMPERATURE) / 2:
        return Phase.LIQUID
    return Phase.GAS


def calculate_min_model_temperature(molecule_type: MoleculeType) -> float:
    """Model temperature that corresponds to half a Kelvin for the species."""
    return 0.5 * TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE / molecule_type.triple_point_in_kelvin


def convert_temperature_to_kelvin(
    temperature: float,
    molecule_type: MoleculeType,
    min_model_temperature: float
) -> float:
    """
    Map a model temperature onto the species' Kelvin scale.

    Piecewise linear through two anchors: the model triple point maps to
    the species triple point and the model critical point to the species
    critical point.

    Args:
        temperature: Model temperature (set-point)
        molecule_type: Species being simulated
        min_model_temperature: Model temperature treated as absolute zero

    Returns:
        Temperature in Kelvin
    """
    triple_point = molecule_type.triple_point_in_kelvin
    critical_point = molecule_type.critical_point_in_kelvin

    if temperature <= min_model_temperature:
        return 0.0

    if temperature < TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE:
        kelvin = temperature * triple_point / TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE
        return max(kelvin, MIN_REPORTED_KELVIN)

    if temperature < CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE:
        slope = ((critical_point - triple_point)
                 / (CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE - TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE))
        offset = triple_point - slope * TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE
        return temperature * slope + offset

    return temperature * critical_point / CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE


def convert_pressure_to_atmospheres(pressure: float, molecule_type: MoleculeType) -> float:
    return pressure * molecule_type.pressure_to_atmospheres


@jit(nopython=True, cache=True)
def calculate_local_order_parameter(
    positions: np.ndarray,
    cutoff: float = 1.5
) -> np.ndarray:
    """
    Calculate the hexatic order parameter for each particle.

    ψ₆ = |⟨exp(6iθ)⟩| over the neighbors inside the cutoff, where θ is the
    angle to each neighbor. A perfect hexagonal lattice gives 1, a liquid
    or gas gives something near 0. The container has walls, so there is
    no minimum image wrapping.

    Args:
        positions: Nx2 array of positions (normalized units)
        cutoff: Neighbor cutoff distance

    Returns:
        Array of order parameters for each particle
    """
    n_particles = positions.shape[0]
    order_params = np.zeros(n_particles)
    cutoff_sq = cutoff * cutoff

    for i in range(n_particles):
        sum_real = 0.0
        sum_imag = 0.0
        n_neighbors = 0

        for j in range(n_particles):
            if i == j:
                continue

            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            r_sq = dx * dx + dy * dy

            if r_sq < cutoff_sq and r_sq > 1e-10:
                theta = np.arctan2(dy, dx)
                sum_real += np.cos(6.0 * theta)
                sum_imag += np.sin(6.0 * theta)
                n_neighbors += 1

        if n_neighbors > 0:
            avg_real = sum_real / n_neighbors
            avg_imag = sum_imag / n_neighbors
            order_params[i] = np.sqrt(avg_real * avg_real + avg_imag * avg_imag)

    return order_params


def calculate_global_order_parameter(positions: np.ndarray, cutoff: float = 1.5) -> float:
    """Average of the local hexatic order parameters, 0 for no particles."""
    if len(positions) == 0:
        return 0.0
    local_order = calculate_local_order_parameter(np.ascontiguousarray(positions), cutoff)
    return float(np.mean(local_order))


def describe_state(temperature_in_kelvin: float, pressure_in_atmospheres: float,
                   order_parameter: float) -> Tuple[Phase, str]:
    """
    One-line description of the current state for command line reports.

    The phase guess uses crystallinity, not temperature, so it reflects
    what the molecules are actually doing.
    """
    if order_parameter > 0.6:
        phase = Phase.SOLID
    elif order_parameter > 0.3:
        phase = Phase.LIQUID
    else:
        phase = Phase.GAS
    description = (f"{phase.value.capitalize()}-like: T={temperature_in_kelvin:.1f} K, "
                   f"P={pressure_in_atmospheres:.2f} atm, ψ₆={order_parameter:.2f}")
    return phase, description
