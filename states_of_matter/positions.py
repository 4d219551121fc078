#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Atom Position Updaters
================================================================================

Project:        States of Matter Engine
Module:         positions.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Turn molecule center-of-mass positions and rotation angles into the
absolute position of every atom. The updaters are pure functions of the
data set's current state and are run after anything moves the molecules.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .constants import (
    DIATOMIC_PARTICLE_DISTANCE,
    WATER_OXYGEN_HYDROGEN_DISTANCE,
    WATER_HYDROGEN_ANGLE,
    WATER_HYDROGEN_MASS_FRACTION,
)
from .physics import place_diatomic_atoms, place_rigid_body_atoms


@dataclass(frozen=True)
class WaterMoleculeStructure:
    """Atom offsets of a water molecule relative to its center of mass."""
    structure_x: np.ndarray
    structure_y: np.ndarray
    rotational_inertia: float


def build_water_molecule_structure() -> WaterMoleculeStructure:
    """
    Lay out O, H, H with the oxygen at the origin, then shift everything so
    the center of mass sits at the origin. Each hydrogen weighs a quarter
    of the oxygen.
    """
    x = np.array([
        0.0,
        WATER_OXYGEN_HYDROGEN_DISTANCE,
        WATER_OXYGEN_HYDROGEN_DISTANCE * np.cos(WATER_HYDROGEN_ANGLE),
    ])
    y = np.array([
        0.0,
        0.0,
        WATER_OXYGEN_HYDROGEN_DISTANCE * np.sin(WATER_HYDROGEN_ANGLE),
    ])
    masses = np.array([1.0, WATER_HYDROGEN_MASS_FRACTION, WATER_HYDROGEN_MASS_FRACTION])

    x -= np.sum(masses * x) / np.sum(masses)
    y -= np.sum(masses * y) / np.sum(masses)
    inertia = float(np.sum(masses * (x ** 2 + y ** 2)))

    return WaterMoleculeStructure(structure_x=x, structure_y=y, rotational_inertia=inertia)


WATER_STRUCTURE = build_water_molecule_structure()


class MonatomicAtomPositionUpdater:
    """A single atom sits exactly at its molecule's center of mass."""

    def update_atom_positions(self, data_set) -> None:
        data_set.atom_positions[:] = data_set.molecule_center_of_mass_positions


class DiatomicAtomPositionUpdater:

    def update_atom_positions(self, data_set) -> None:
        place_diatomic_atoms(
            data_set.molecule_center_of_mass_positions,
            data_set.molecule_rotation_angles,
            data_set.atom_positions,
            DIATOMIC_PARTICLE_DISTANCE
        )


class WaterAtomPositionUpdater:

    def update_atom_positions(self, data_set) -> None:
        place_rigid_body_atoms(
            data_set.molecule_center_of_mass_positions,
            data_set.molecule_rotation_angles,
            data_set.atom_positions,
            WATER_STRUCTURE.structure_x,
            WATER_STRUCTURE.structure_y
        )


AtomPositionUpdater = Union[
    MonatomicAtomPositionUpdater, DiatomicAtomPositionUpdater, WaterAtomPositionUpdater
]


def create_position_updater(atoms_per_molecule: int) -> AtomPositionUpdater:
    """Pick the updater that matches the number of atoms per molecule."""
    if atoms_per_molecule == 1:
        return MonatomicAtomPositionUpdater()
    if atoms_per_molecule == 2:
        return DiatomicAtomPositionUpdater()
    if atoms_per_molecule == 3:
        return WaterAtomPositionUpdater()
    raise ValueError(f"Unsupported number of atoms per molecule: {atoms_per_molecule}")
