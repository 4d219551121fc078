#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Verlet Force and Motion Calculators
================================================================================

Project:        States of Matter Engine
Module:         verlet.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Velocity Verlet integration of the molecule data set, one variant per
molecule shape. Each call to update_forces_and_motion() advances the data
set by one fixed TIME_STEP:

1. Promote any injected molecules that are now far enough from the rest
2. x(t + dt) = x(t) + dt * v(t) + (dt²/2) * a(t)
3. Compute a(t + dt) from the walls, gravity and the other molecules
4. v(t + dt) = v(t) + (dt/2) * [a(t) + a(t + dt)]

Rigid molecules get the same treatment for their rotation angle, rate and
torque. The calculators also keep the running potential energy, pressure
and temperature that the model reports.

The calculators hold a reference to the model only to read the container
geometry, gravity, temperature set-point and explosion state, and to tell
it when the container blows.
"""

import logging

import numpy as np

from .constants import (
    TIME_STEP,
    TIME_STEP_HALF,
    TIME_STEP_SQR_HALF,
    PRESSURE_CALC_WEIGHTING,
    SAFE_INTER_MOLECULE_DISTANCE,
    EXPLOSION_PRESSURE,
    TEMPERATURE_BELOW_WHICH_GRAVITY_INCREASES,
    LOW_TEMPERATURE_GRAVITY_INCREASE_RATE,
    WATER_FULLY_MELTED_TEMPERATURE,
    WATER_FULLY_MELTED_ELECTROSTATIC_FORCE,
    WATER_FULLY_FROZEN_TEMPERATURE,
    WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE,
    MAX_ROTATION_RATE,
)
from .particles import MoleculeType
from .physics import (
    calculate_wall_forces,
    calculate_monatomic_pair_forces,
    calculate_atom_pair_forces,
    calculate_water_pair_forces,
)

logger = logging.getLogger(__name__)


class VerletAlgorithm:
    """
    Shared parts of the Verlet integration: wall forces, gravity, pressure
    and the promotion of unsafe molecules.
    """

    def __init__(self, model, data_set, position_updater):
        self.model = model
        self.data_set = data_set
        self.position_updater = position_updater
        self.potential_energy = 0.0
        self.pressure = 0.0
        self.temperature = 0.0

    def update_forces_and_motion(self) -> None:
        """Advance the data set by one time step."""
        data_set = self.data_set

        if data_set.number_of_safe_molecules < data_set.number_of_molecules:
            self.update_molecule_safety()

        self._update_positions()
        self.position_updater.update_atom_positions(data_set)

        self.potential_energy = 0.0
        pressure_zone_wall_force = self._calculate_external_forces()
        self.update_pressure(pressure_zone_wall_force)
        self.potential_energy += self._calculate_interaction_forces()

        self._update_velocities()
        self.temperature = data_set.calculate_temperature_from_kinetic_energy()

    # ------------------------------------------------------------------
    # Integration steps
    # ------------------------------------------------------------------

    def _update_positions(self) -> None:
        data_set = self.data_set
        mass_inverse = 1.0 / data_set.molecule_mass
        positions = data_set.molecule_center_of_mass_positions
        positions += (TIME_STEP * data_set.molecule_velocities
                      + TIME_STEP_SQR_HALF * data_set.molecule_forces * mass_inverse)

    def _update_velocities(self) -> None:
        data_set = self.data_set
        mass_inverse = 1.0 / data_set.molecule_mass
        forces = data_set.molecule_forces
        next_forces = data_set.next_molecule_forces
        velocities = data_set.molecule_velocities
        velocities += TIME_STEP_HALF * (forces + next_forces) * mass_inverse
        forces[:] = next_forces

    def _calculate_external_forces(self) -> float:
        """
        Reset the next-step forces to the wall and gravity forces.

        Walls act on the center of mass, so they produce no torque.

        Returns:
            The wall force that contributes to pressure
        """
        data_set = self.data_set
        next_forces = data_set.next_molecule_forces

        pressure_zone_wall_force, wall_energy, triggered_explosion = calculate_wall_forces(
            data_set.molecule_center_of_mass_positions,
            next_forces,
            self.model.normalized_container_width,
            self.model.normalized_container_height,
            self.model.is_exploded
        )
        self.potential_energy += wall_energy

        if triggered_explosion and not self.model.is_exploded:
            logger.info("Particle escaped through the floor, container exploding")
            self.model.explode_container()

        next_forces[:, 1] -= self.get_gravitational_acceleration() * data_set.molecule_mass
        data_set.next_molecule_torques[:] = 0.0

        return pressure_zone_wall_force

    def _calculate_interaction_forces(self) -> float:
        """Add inter-molecule forces for the safe molecules, return their energy."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def get_gravitational_acceleration(self) -> float:
        """
        Gravity, boosted near absolute zero where the thermostat would
        otherwise make falling molecules drift down unnaturally slowly.
        """
        acceleration = self.model.gravitational_acceleration
        temperature = self.model.temperature_set_point
        if temperature < TEMPERATURE_BELOW_WHICH_GRAVITY_INCREASES:
            acceleration *= ((TEMPERATURE_BELOW_WHICH_GRAVITY_INCREASES - temperature)
                             * LOW_TEMPERATURE_GRAVITY_INCREASE_RATE + 1)
        return acceleration

    def update_molecule_safety(self) -> None:
        """
        Promote unsafe molecules that are no longer too close to the safe ones.

        An unsafe molecule was injected so close to others that its LJ force
        would fling it out of the container. Each one that is now at least
        SAFE_INTER_MOLECULE_DISTANCE from every safe molecule is swapped to
        the end of the safe prefix. Torques are not swapped, there are none
        until a molecule is safe.
        """
        data_set = self.data_set
        number_of_molecules = data_set.number_of_molecules
        number_of_safe_molecules = data_set.number_of_safe_molecules
        if number_of_safe_molecules == number_of_molecules:
            return

        atoms_per_molecule = data_set.atoms_per_molecule
        positions = data_set.molecule_center_of_mass_positions
        atom_positions = data_set.atom_positions
        per_molecule = (
            positions,
            data_set.molecule_velocities,
            data_set.molecule_forces,
            data_set.molecule_rotation_angles,
            data_set.molecule_rotation_rates,
        )

        for i in range(number_of_safe_molecules, number_of_molecules):
            if number_of_safe_molecules > 0:
                distances = np.hypot(
                    positions[:number_of_safe_molecules, 0] - positions[i, 0],
                    positions[:number_of_safe_molecules, 1] - positions[i, 1]
                )
                if distances.min() < SAFE_INTER_MOLECULE_DISTANCE:
                    continue

            if i != number_of_safe_molecules:
                first_unsafe = number_of_safe_molecules
                for array in per_molecule:
                    array[[first_unsafe, i]] = array[[i, first_unsafe]]

                unsafe_block = slice(first_unsafe * atoms_per_molecule,
                                     (first_unsafe + 1) * atoms_per_molecule)
                safe_block = slice(i * atoms_per_molecule, (i + 1) * atoms_per_molecule)
                swapped = atom_positions[unsafe_block].copy()
                atom_positions[unsafe_block] = atom_positions[safe_block]
                atom_positions[safe_block] = swapped

            number_of_safe_molecules += 1
            data_set.number_of_safe_molecules = number_of_safe_molecules

    def update_pressure(self, pressure_zone_wall_force: float) -> None:
        """
        Exponential moving average of the wall force per unit perimeter.

        An exploded container has no pressure, and a pressure above
        EXPLOSION_PRESSURE blows the container.
        """
        if self.model.is_exploded:
            self.pressure = 0.0
            return

        perimeter = self.model.normalized_container_width + self.model.normalized_container_height
        self.pressure = ((1 - PRESSURE_CALC_WEIGHTING) * (pressure_zone_wall_force / perimeter)
                         + PRESSURE_CALC_WEIGHTING * self.pressure)

        if self.pressure > EXPLOSION_PRESSURE:
            logger.info("Pressure %.3f exceeded explosion threshold", self.pressure)
            self.model.explode_container()
            self.pressure = 0.0


class MonatomicVerletAlgorithm(VerletAlgorithm):
    """Single atoms of unit mass with an adjustable interaction strength."""

    def __init__(self, model, data_set, position_updater, epsilon: float = 1.0):
        super().__init__(model, data_set, position_updater)
        self.epsilon = epsilon

    def get_scaled_epsilon(self) -> float:
        return self.epsilon

    def set_scaled_epsilon(self, scaled_epsilon: float) -> None:
        self.epsilon = scaled_epsilon

    def _calculate_interaction_forces(self) -> float:
        data_set = self.data_set
        return calculate_monatomic_pair_forces(
            data_set.molecule_center_of_mass_positions,
            data_set.next_molecule_forces,
            data_set.number_of_safe_molecules,
            self.epsilon
        )


class RigidMoleculeVerletAlgorithm(VerletAlgorithm):
    """Adds rotation angle, rate and torque to the integration."""

    def _update_positions(self) -> None:
        super()._update_positions()
        data_set = self.data_set
        inertia_inverse = 1.0 / data_set.molecule_rotational_inertia
        angles = data_set.molecule_rotation_angles
        angles += (TIME_STEP * data_set.molecule_rotation_rates
                   + TIME_STEP_SQR_HALF * data_set.molecule_torques * inertia_inverse)

    def _update_velocities(self) -> None:
        super()._update_velocities()
        data_set = self.data_set
        inertia_inverse = 1.0 / data_set.molecule_rotational_inertia
        torques = data_set.molecule_torques
        next_torques = data_set.next_molecule_torques
        rates = data_set.molecule_rotation_rates
        rates += TIME_STEP_HALF * (torques + next_torques) * inertia_inverse
        torques[:] = next_torques


class DiatomicVerletAlgorithm(RigidMoleculeVerletAlgorithm):
    """Two-atom molecules; every atom pair between two molecules interacts."""

    def _calculate_interaction_forces(self) -> float:
        data_set = self.data_set
        return calculate_atom_pair_forces(
            data_set.atom_positions,
            data_set.molecule_center_of_mass_positions,
            data_set.next_molecule_forces,
            data_set.next_molecule_torques,
            data_set.number_of_safe_molecules,
            data_set.atoms_per_molecule
        )


class WaterVerletAlgorithm(RigidMoleculeVerletAlgorithm):
    """
    Water: LJ between molecule centers plus charge interactions between
    the atoms. The charges get stronger as the set-point drops so that ice
    forms a proper open crystal.
    """

    def get_charges(self) -> np.ndarray:
        temperature = self.model.temperature_set_point
        if temperature < WATER_FULLY_FROZEN_TEMPERATURE:
            q0 = WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE
        elif temperature > WATER_FULLY_MELTED_TEMPERATURE:
            q0 = WATER_FULLY_MELTED_ELECTROSTATIC_FORCE
        else:
            slope = ((WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE - WATER_FULLY_MELTED_ELECTROSTATIC_FORCE)
                     / (WATER_FULLY_FROZEN_TEMPERATURE - WATER_FULLY_MELTED_TEMPERATURE))
            q0 = WATER_FULLY_MELTED_ELECTROSTATIC_FORCE + slope * (temperature - WATER_FULLY_MELTED_TEMPERATURE)
        return np.array([-2.0 * q0, q0, q0])

    def _calculate_interaction_forces(self) -> float:
        data_set = self.data_set
        return calculate_water_pair_forces(
            data_set.atom_positions,
            data_set.molecule_center_of_mass_positions,
            data_set.next_molecule_forces,
            data_set.next_molecule_torques,
            data_set.number_of_safe_molecules,
            self.get_charges()
        )

    def _update_velocities(self) -> None:
        super()._update_velocities()
        rates = self.data_set.molecule_rotation_rates
        np.clip(rates, -MAX_ROTATION_RATE, MAX_ROTATION_RATE, out=rates)


def create_verlet_algorithm(molecule_type: MoleculeType, model, data_set, position_updater) -> VerletAlgorithm:
    """Pick the calculator for a molecule species."""
    atoms_per_molecule = molecule_type.atoms_per_molecule
    if atoms_per_molecule == 1:
        return MonatomicVerletAlgorithm(model, data_set, position_updater)
    if atoms_per_molecule == 2:
        return DiatomicVerletAlgorithm(model, data_set, position_updater)
    return WaterVerletAlgorithm(model, data_set, position_updater)
