#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Phase State Changers
================================================================================

Project:        States of Matter Engine
Module:         phase_changer.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Lay out every molecule in the data set as a solid, liquid or gas:

- Solid: hexagonal crystal centered on the floor, low thermal noise
- Liquid: a compact blob of concentric rings a quarter of the way up
- Gas: random positions across the whole container, random orientations

Random placement that keeps failing falls back on a grid scan for an open
spot. A molecule that cannot be placed anywhere is removed, so the caller
may end up with fewer molecules than it started with.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .constants import (
    SOLID_TEMPERATURE,
    LIQUID_TEMPERATURE,
    GAS_TEMPERATURE,
    MAX_PLACEMENT_ATTEMPTS,
    MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE,
)
from .thermodynamics import Phase, coerce_phase

logger = logging.getLogger(__name__)

# Ring spacing of the liquid blob relative to the crystal spacing
LIQUID_SPACING_FACTOR = 0.9


class PhaseStateChanger:
    """
    Places molecules into a starting configuration for a phase.

    Subclasses only change the crystal geometry.
    """

    min_inter_particle_distance = 1.12
    solid_row_spacing_factor = 0.866

    def __init__(self, model, data_set, position_updater, rng: np.random.Generator):
        self.model = model
        self.data_set = data_set
        self.position_updater = position_updater
        self.rng = rng

    def set_phase(self, phase) -> None:
        """
        Re-initialize every molecule for the given phase.

        Unknown phases are logged and treated as solid.
        """
        phase = coerce_phase(phase)
        if phase is Phase.SOLID:
            self.set_phase_solid()
        elif phase is Phase.LIQUID:
            self.set_phase_liquid()
        else:
            self.set_phase_gas()

        # Placement guarantees separation, so everything can interact.
        data_set = self.data_set
        data_set.number_of_safe_molecules = data_set.number_of_molecules
        self.position_updater.update_atom_positions(data_set)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def set_phase_solid(self) -> None:
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules
        spacing = self.min_inter_particle_distance
        molecules_per_layer = max(int(np.sqrt(number_of_molecules)), 1)

        crystal_width = molecules_per_layer * spacing
        start_x = self.model.normalized_container_width / 2 - crystal_width / 2
        start_y = spacing

        positions = data_set.molecule_center_of_mass_positions
        angles = data_set.molecule_rotation_angles
        for i in range(number_of_molecules):
            row, column = divmod(i, molecules_per_layer)
            x = start_x + column * spacing
            if row % 2 == 1:
                x += spacing / 2
            y = start_y + row * spacing * self.solid_row_spacing_factor
            positions[i] = (x, y)
            angles[i] = np.pi * ((row + column) % 2)

        self._set_thermal_motion(SOLID_TEMPERATURE)

    def set_phase_liquid(self) -> None:
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules
        center_x = self.model.normalized_container_width / 2
        center_y = self.model.normalized_container_height / 4
        ring_spacing = self.min_inter_particle_distance * LIQUID_SPACING_FACTOR

        current_layer = 0
        on_current_layer = 0
        fit_on_current_layer = 1
        number_placed = 0

        positions = data_set.molecule_center_of_mass_positions
        angles = data_set.molecule_rotation_angles
        for _ in range(number_of_molecules):
            location = None
            for _ in range(MAX_PLACEMENT_ATTEMPTS):
                distance_from_center = current_layer * ring_spacing
                angle = (on_current_layer / fit_on_current_layer * 2 * np.pi
                         + fit_on_current_layer / (4 * np.pi))
                x = center_x + distance_from_center * np.cos(angle)
                y = center_y + distance_from_center * np.sin(angle)

                on_current_layer += 1
                if on_current_layer >= fit_on_current_layer:
                    current_layer += 1
                    on_current_layer = 0
                    fit_on_current_layer = int(current_layer * 2 * np.pi / ring_spacing)

                if self._is_clear_of_walls(x, y):
                    location = (x, y)
                    break

            if location is None:
                location = self.find_open_molecule_location(number_placed)
            if location is None:
                continue

            positions[number_placed] = location
            angles[number_placed] = self.rng.uniform(0, 2 * np.pi)
            number_placed += 1

        self._remove_unplaced_molecules(number_placed)
        self._set_thermal_motion(LIQUID_TEMPERATURE)

    def set_phase_gas(self) -> None:
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules
        margin = MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE
        range_x = self.model.normalized_container_width - 2 * margin
        range_y = self.model.normalized_container_height - 2 * margin
        number_placed = 0

        positions = data_set.molecule_center_of_mass_positions
        angles = data_set.molecule_rotation_angles
        for _ in range(number_of_molecules):
            location = None
            for _ in range(MAX_PLACEMENT_ATTEMPTS):
                x = margin + self.rng.random() * range_x
                y = margin + self.rng.random() * range_y
                if self._is_position_open(x, y, number_placed, self.min_inter_particle_distance):
                    location = (x, y)
                    break

            if location is None:
                location = self.find_open_molecule_location(number_placed)
            if location is None:
                continue

            positions[number_placed] = location
            angles[number_placed] = self.rng.uniform(0, 2 * np.pi)
            number_placed += 1

        self._remove_unplaced_molecules(number_placed)
        self._set_thermal_motion(GAS_TEMPERATURE)

    # ------------------------------------------------------------------
    # Placement helpers
    # ------------------------------------------------------------------

    def find_open_molecule_location(self, number_placed: int) -> Optional[Tuple[float, float]]:
        """
        Grid scan for a spot far enough from the molecules placed so far.

        Expensive, so only used when random placement keeps failing.

        Args:
            number_placed: Molecules [0, number_placed) already have positions

        Returns:
            (x, y) of the first open grid cell, or None if there is none
        """
        if self.data_set.atoms_per_molecule == 1:
            min_distance = 1.2
        else:
            min_distance = 1.5

        margin = MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE
        range_x = self.model.normalized_container_width - 2 * margin
        range_y = self.model.normalized_container_height - 2 * margin
        columns = max(int(np.ceil(range_x / min_distance)), 0)
        rows = max(int(np.ceil(range_y / min_distance)), 0)

        for i in range(columns):
            for j in range(rows):
                x = margin + i * min_distance
                y = margin + j * min_distance
                if self._is_position_open(x, y, number_placed, min_distance):
                    return x, y

        logger.error("No open positions available for molecule")
        return None

    def _is_position_open(self, x: float, y: float, number_placed: int, min_distance: float) -> bool:
        if number_placed == 0:
            return True
        placed = self.data_set.molecule_center_of_mass_positions[:number_placed]
        distances = np.hypot(placed[:, 0] - x, placed[:, 1] - y)
        return bool(distances.min() >= min_distance)

    def _is_clear_of_walls(self, x: float, y: float) -> bool:
        margin = MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE
        return (margin < x < self.model.normalized_container_width - margin
                and margin < y < self.model.normalized_container_height - margin)

    def _remove_unplaced_molecules(self, number_placed: int) -> None:
        number_of_molecules = self.data_set.number_of_molecules
        if number_placed == number_of_molecules:
            return
        logger.warning("Could only place %d of %d molecules, removing the rest",
                       number_placed, number_of_molecules)
        for index in range(number_of_molecules - 1, number_placed - 1, -1):
            self.data_set.remove_molecule(index)

    def _set_thermal_motion(self, temperature: float) -> None:
        """
        Maxwell-Boltzmann velocities and rotation rates for a temperature.

        Forces from any earlier configuration no longer apply and are
        cleared.
        """
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules

        velocity_sigma = np.sqrt(temperature / data_set.molecule_mass)
        data_set.molecule_velocities[:] = self.rng.normal(0.0, velocity_sigma, size=(number_of_molecules, 2))

        if data_set.atoms_per_molecule > 1:
            rate_sigma = np.sqrt(temperature / data_set.molecule_rotational_inertia)
            data_set.molecule_rotation_rates[:] = self.rng.normal(0.0, rate_sigma, size=number_of_molecules)
        else:
            data_set.molecule_rotation_rates[:] = 0.0

        data_set.molecule_forces[:] = 0.0
        data_set.next_molecule_forces[:] = 0.0
        data_set.molecule_torques[:] = 0.0
        data_set.next_molecule_torques[:] = 0.0


class MonatomicPhaseStateChanger(PhaseStateChanger):
    """Single atoms pack hexagonally at the LJ minimum."""


class DiatomicPhaseStateChanger(PhaseStateChanger):
    min_inter_particle_distance = 2.0
    solid_row_spacing_factor = 1.1


class WaterPhaseStateChanger(PhaseStateChanger):
    # Ice is less dense than water, so the crystal is spread out.
    min_inter_particle_distance = 1.4
    solid_row_spacing_factor = 1.2


def create_phase_state_changer(atoms_per_molecule: int, model, data_set, position_updater,
                               rng: np.random.Generator) -> PhaseStateChanger:
    if atoms_per_molecule == 1:
        return MonatomicPhaseStateChanger(model, data_set, position_updater, rng)
    if atoms_per_molecule == 2:
        return DiatomicPhaseStateChanger(model, data_set, position_updater, rng)
    if atoms_per_molecule == 3:
        return WaterPhaseStateChanger(model, data_set, position_updater, rng)
    raise ValueError(f"Unsupported number of atoms per molecule: {atoms_per_molecule}")
