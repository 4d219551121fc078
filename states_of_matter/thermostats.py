#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Thermostats
================================================================================

Project:        States of Matter Engine
Module:         thermostats.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Two ways of pulling the molecule data set toward a target temperature:

- Isokinetic: rescale every velocity (and rotation rate) so the measured
  temperature matches the target exactly. Fast and stable, but it looks
  mechanical at steady state.
- Andersen: each molecule has a small chance per call of "colliding" with
  a heat bath, which replaces its velocity with a fresh Maxwell-Boltzmann
  draw. Gives natural looking thermal noise.
"""

import numpy as np

from .constants import ANDERSEN_COLLISION_PROBABILITY


class IsokineticThermostat:
    """Velocity rescaling thermostat."""

    def __init__(self, data_set, min_model_temperature: float):
        self.data_set = data_set
        self.min_model_temperature = min_model_temperature
        self.target_temperature = 0.0

    def set_target_temperature(self, target_temperature: float) -> None:
        self.target_temperature = target_temperature

    def adjust_temperature(self) -> None:
        """
        Scale velocities by sqrt(T_target / T_measured).

        Targets at or below the minimum model temperature mean absolute
        zero, which freezes everything in place. Nothing happens when the
        measured temperature is zero since there is nothing to scale.
        """
        data_set = self.data_set
        measured_temperature = data_set.calculate_temperature_from_kinetic_energy()
        if measured_temperature == 0:
            return

        target_temperature = self.target_temperature
        if target_temperature <= self.min_model_temperature:
            target_temperature = 0.0

        scale_factor = np.sqrt(target_temperature / measured_temperature)

        velocities = data_set.molecule_velocities
        velocities *= scale_factor
        if data_set.atoms_per_molecule > 1:
            rates = data_set.molecule_rotation_rates
            rates *= scale_factor


class AndersenThermostat:
    """Stochastic collision thermostat."""

    def __init__(
        self,
        data_set,
        min_model_temperature: float,
        rng: np.random.Generator,
        collision_probability: float = ANDERSEN_COLLISION_PROBABILITY
    ):
        self.data_set = data_set
        self.min_model_temperature = min_model_temperature
        self.rng = rng
        self.collision_probability = collision_probability
        self.target_temperature = 0.0

    def set_target_temperature(self, target_temperature: float) -> None:
        self.target_temperature = target_temperature

    def adjust_temperature(self) -> None:
        """Resample the molecules that collide with the bath this call."""
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules
        if number_of_molecules == 0:
            return

        target_temperature = self.target_temperature
        if target_temperature <= self.min_model_temperature:
            target_temperature = 0.0

        collided = self.rng.random(number_of_molecules) < self.collision_probability
        n_collided = int(np.count_nonzero(collided))
        if n_collided == 0:
            return

        # Maxwell-Boltzmann: each component ~ N(0, sqrt(kT/m))
        velocity_sigma = np.sqrt(target_temperature / data_set.molecule_mass)
        velocities = data_set.molecule_velocities
        velocities[collided] = self.rng.normal(0.0, velocity_sigma, size=(n_collided, 2))

        if data_set.atoms_per_molecule > 1:
            rate_sigma = np.sqrt(target_temperature / data_set.molecule_rotational_inertia)
            rates = data_set.molecule_rotation_rates
            rates[collided] = self.rng.normal(0.0, rate_sigma, size=n_collided)
