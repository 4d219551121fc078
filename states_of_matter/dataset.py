#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Molecule Force and Motion Data Set
================================================================================

Project:        States of Matter Engine
Module:         dataset.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

The bundle of data that represents the position, motion and forces acting on
a set of molecules. There is no physics in here, only storage and the
bookkeeping needed to add and remove molecules.

Storage is preallocated to the maximum capacity. The public array attributes
are live views trimmed to the molecules currently in the set, so writing
through them updates the data set in place.

Molecules at indices [0, number_of_safe_molecules) are "safe" and take part
in inter-molecule force calculations. Molecules past that prefix were
injected recently and are promoted by the force calculator once they are far
enough from everything else.
"""

from typing import Sequence

import numpy as np

from .constants import MAX_NUM_ATOMS, DIATOMIC_PARTICLE_DISTANCE
from .positions import WATER_STRUCTURE


class MoleculeDataSet:
    """
    Positions, velocities, forces and rotations of all atoms and molecules.

    The rotational arrays exist for every atomicity so callers can treat
    the data set uniformly, but they only mean something when there is more
    than one atom per molecule.
    """

    def __init__(self, atoms_per_molecule: int, max_atoms: int = MAX_NUM_ATOMS):
        if atoms_per_molecule not in (1, 2, 3):
            raise ValueError(f"Unsupported number of atoms per molecule: {atoms_per_molecule}")

        self.atoms_per_molecule = atoms_per_molecule
        self.max_molecules = max_atoms // atoms_per_molecule
        self.number_of_atoms = 0
        self.number_of_safe_molecules = 0

        max_molecules = self.max_molecules
        self._atom_positions = np.zeros((max_molecules * atoms_per_molecule, 2))
        self._center_of_mass_positions = np.zeros((max_molecules, 2))
        self._velocities = np.zeros((max_molecules, 2))
        self._forces = np.zeros((max_molecules, 2))
        self._next_forces = np.zeros((max_molecules, 2))
        self._rotation_angles = np.zeros(max_molecules)
        self._rotation_rates = np.zeros(max_molecules)
        self._torques = np.zeros(max_molecules)
        self._next_torques = np.zeros(max_molecules)

        if atoms_per_molecule == 1:
            self.molecule_mass = 1.0
            self.molecule_rotational_inertia = 0.0
        elif atoms_per_molecule == 2:
            self.molecule_mass = 2.0
            self.molecule_rotational_inertia = DIATOMIC_PARTICLE_DISTANCE ** 2 / 2
        else:
            # Only water is triatomic, so use its structure.
            self.molecule_mass = 1.5
            self.molecule_rotational_inertia = WATER_STRUCTURE.rotational_inertia

    # ------------------------------------------------------------------
    # Views onto the live portion of the storage
    # ------------------------------------------------------------------

    @property
    def number_of_molecules(self) -> int:
        return self.number_of_atoms // self.atoms_per_molecule

    @property
    def atom_positions(self) -> np.ndarray:
        return self._atom_positions[:self.number_of_atoms]

    @property
    def molecule_center_of_mass_positions(self) -> np.ndarray:
        return self._center_of_mass_positions[:self.number_of_molecules]

    @property
    def molecule_velocities(self) -> np.ndarray:
        return self._velocities[:self.number_of_molecules]

    @property
    def molecule_forces(self) -> np.ndarray:
        return self._forces[:self.number_of_molecules]

    @property
    def next_molecule_forces(self) -> np.ndarray:
        return self._next_forces[:self.number_of_molecules]

    @property
    def molecule_rotation_angles(self) -> np.ndarray:
        return self._rotation_angles[:self.number_of_molecules]

    @property
    def molecule_rotation_rates(self) -> np.ndarray:
        return self._rotation_rates[:self.number_of_molecules]

    @property
    def molecule_torques(self) -> np.ndarray:
        return self._torques[:self.number_of_molecules]

    @property
    def next_molecule_torques(self) -> np.ndarray:
        return self._next_torques[:self.number_of_molecules]

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def get_number_of_remaining_slots(self) -> int:
        """How many more molecules can be added."""
        return self.max_molecules - self.number_of_molecules

    def is_safe(self, molecule_index: int) -> bool:
        return 0 <= molecule_index < self.number_of_safe_molecules

    def add_molecule(
        self,
        atom_positions: Sequence[Sequence[float]],
        center_of_mass_position: Sequence[float],
        velocity: Sequence[float],
        rotation_rate: float
    ) -> bool:
        """
        Append one molecule to the data set.

        The new molecule is "unsafe" and won't interact with the others
        until the force calculator promotes it.

        Args:
            atom_positions: One (x, y) per atom in the molecule
            center_of_mass_position: (x, y) of the molecule
            velocity: (vx, vy) of the molecule
            rotation_rate: Angular velocity, ignored for single atoms

        Returns:
            True if the molecule was added, False if the data set is full
        """
        if self.get_number_of_remaining_slots() == 0:
            return False

        atom_positions = np.asarray(atom_positions, dtype=float).reshape(-1, 2)
        if atom_positions.shape[0] != self.atoms_per_molecule:
            raise ValueError(
                f"Expected {self.atoms_per_molecule} atom positions, got {atom_positions.shape[0]}"
            )

        index = self.number_of_molecules
        first_atom = self.number_of_atoms
        self._atom_positions[first_atom:first_atom + self.atoms_per_molecule] = atom_positions
        self._center_of_mass_positions[index] = center_of_mass_position
        self._velocities[index] = velocity
        self._forces[index] = 0.0
        self._next_forces[index] = 0.0
        self._rotation_angles[index] = 0.0
        self._rotation_rates[index] = rotation_rate
        self._torques[index] = 0.0
        self._next_torques[index] = 0.0

        # The safe count is deliberately left alone.
        self.number_of_atoms += self.atoms_per_molecule
        return True

    def remove_molecule(self, molecule_index: int) -> None:
        """
        Remove the molecule at the given index and compact every array.

        Out-of-range indices are ignored. This shifts everything after the
        removed molecule, so use it sparingly.
        """
        number_of_molecules = self.number_of_molecules
        if molecule_index < 0 or molecule_index >= number_of_molecules:
            return

        last = number_of_molecules
        for array in (
            self._center_of_mass_positions, self._velocities, self._forces,
            self._next_forces, self._rotation_angles, self._rotation_rates,
            self._torques, self._next_torques
        ):
            array[molecule_index:last - 1] = array[molecule_index + 1:last].copy()
            array[last - 1] = 0.0

        apm = self.atoms_per_molecule
        start = molecule_index * apm
        self._atom_positions[start:self.number_of_atoms - apm] = \
            self._atom_positions[start + apm:self.number_of_atoms].copy()
        self._atom_positions[self.number_of_atoms - apm:self.number_of_atoms] = 0.0

        if molecule_index < self.number_of_safe_molecules:
            self.number_of_safe_molecules -= 1

        self.number_of_atoms -= apm

    def calculate_temperature_from_kinetic_energy(self) -> float:
        """
        Temperature of the system from the kinetic energy of the molecules.

        Monatomic systems use the mean translational energy per atom.
        Polyatomic systems add rotational energy and divide by 1.5 so the
        extra rotational degree of freedom maps onto the same scale.

        Returns:
            Temperature in model units (not Kelvin)
        """
        number_of_molecules = self.number_of_molecules
        if number_of_molecules == 0:
            return 0.0

        velocities = self.molecule_velocities
        v_sq = np.sum(velocities ** 2, axis=1)

        if self.atoms_per_molecule == 1:
            return float(np.sum(v_sq / 2) / number_of_molecules)

        translational = np.sum(0.5 * self.molecule_mass * v_sq)
        rotational = np.sum(0.5 * self.molecule_rotational_inertia * self.molecule_rotation_rates ** 2)
        return float((translational + rotational) / number_of_molecules / 1.5)
