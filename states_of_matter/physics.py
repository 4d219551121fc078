#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Lennard-Jones Physics Kernels
================================================================================

Project:        States of Matter Engine
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Compiled inner loops for the force calculators. Everything here works in
normalized units (lengths divided by the particle diameter, so σ = 1) and
operates on the numpy arrays of a MoleculeDataSet.

The inter-molecule potential is the truncated Lennard-Jones potential:
    V(r) = 4ε [(1/r)¹² - (1/r)⁶] + shift,   r < 2.5

with the squared distance clamped from below so that overlapping molecules
never produce unbounded forces. The container walls use the one-dimensional
form of the same potential along the wall normal:
    F(d) = 48/d¹³ - 24/d⁷
    V(d) = 4/d¹² - 4/d⁶ + 1
which only acts within 2^(1/6) of a wall, where F crosses zero.
"""

import numpy as np
from numba import jit
from typing import Tuple

from .constants import (
    WALL_DISTANCE_THRESHOLD,
    MIN_WALL_DISTANCE,
    PARTICLE_INTERACTION_DISTANCE_THRESH_SQRD,
    MIN_DISTANCE_SQUARED,
    POTENTIAL_ENERGY_CUTOFF_SHIFT,
    WATER_MIN_CHARGE_DISTANCE_SQUARED,
)


@jit(nopython=True, cache=True)
def wall_force_magnitude(distance: float) -> float:
    """Repulsion-dominated 1-D Lennard-Jones force at a distance from a wall."""
    return 48.0 / distance ** 13 - 24.0 / distance ** 7


@jit(nopython=True, cache=True)
def wall_potential_energy(distance: float) -> float:
    return 4.0 / distance ** 12 - 4.0 / distance ** 6 + 1.0


@jit(nopython=True, cache=True)
def calculate_wall_force(
    x: float,
    y: float,
    container_width: float,
    container_height: float,
    is_exploded: bool
) -> Tuple[float, float, float, bool]:
    """
    Calculate the force exerted by the container walls on one particle.

    Particles that fall through the floor of an intact container blow the
    lid off. Once the container has exploded, particles outside of it feel
    no wall force at all and are free to escape, and the lid no longer
    pushes down.

    Args:
        x, y: Particle position (normalized)
        container_width: Normalized width of the container
        container_height: Normalized height of the container
        is_exploded: Whether the container has already exploded

    Returns:
        (fx, fy, potential_energy, triggered_explosion)
    """
    fx = 0.0
    fy = 0.0
    potential_energy = 0.0
    triggered_explosion = False
    exploded = is_exploded

    # The side walls are only as tall as the container is wide.
    if y < container_width:
        if x < WALL_DISTANCE_THRESHOLD:
            # Left wall
            distance = x
            escaped = False
            if distance < MIN_WALL_DISTANCE:
                if distance < 0.0 and exploded:
                    escaped = True
                else:
                    distance = MIN_WALL_DISTANCE
            if not escaped:
                fx = wall_force_magnitude(distance)
                potential_energy += wall_potential_energy(distance)
        elif container_width - x < WALL_DISTANCE_THRESHOLD:
            # Right wall
            distance = container_width - x
            escaped = False
            if distance < MIN_WALL_DISTANCE:
                if distance < 0.0 and exploded:
                    escaped = True
                else:
                    distance = MIN_WALL_DISTANCE
            if not escaped:
                fx = -wall_force_magnitude(distance)
                potential_energy += wall_potential_energy(distance)

    if y < WALL_DISTANCE_THRESHOLD:
        # Floor
        distance = y
        if distance < MIN_WALL_DISTANCE:
            if distance < 0.0 and not exploded:
                # Energetic enough to get out, so the container blows.
                triggered_explosion = True
                exploded = True
            distance = MIN_WALL_DISTANCE
        if not exploded or (x > 0.0 and x < container_width):
            fy = wall_force_magnitude(distance)
            potential_energy += wall_potential_energy(distance)
    elif container_height - y < WALL_DISTANCE_THRESHOLD and not exploded:
        # Lid
        distance = container_height - y
        if distance < MIN_WALL_DISTANCE:
            distance = MIN_WALL_DISTANCE
        fy = -wall_force_magnitude(distance)
        potential_energy += wall_potential_energy(distance)

    return fx, fy, potential_energy, triggered_explosion


@jit(nopython=True, cache=True)
def calculate_wall_forces(
    positions: np.ndarray,
    next_forces: np.ndarray,
    container_width: float,
    container_height: float,
    is_exploded: bool
) -> Tuple[float, float, bool]:
    """
    Overwrite next_forces with the wall forces on every position.

    Also sums up the wall force that counts towards pressure: every
    downward push from the lid, plus side-wall pushes on particles in the
    upper half of the container.

    Returns:
        (pressure_zone_wall_force, potential_energy, triggered_explosion)
    """
    n = positions.shape[0]
    pressure_zone_wall_force = 0.0
    potential_energy = 0.0
    exploded = is_exploded
    triggered_explosion = False

    for i in range(n):
        fx, fy, pe, explode = calculate_wall_force(
            positions[i, 0], positions[i, 1],
            container_width, container_height, exploded
        )
        if explode:
            exploded = True
            triggered_explosion = True

        next_forces[i, 0] = fx
        next_forces[i, 1] = fy
        potential_energy += pe

        if fy < 0.0:
            pressure_zone_wall_force += -fy
        elif positions[i, 1] > container_height / 2.0:
            pressure_zone_wall_force += abs(fx)

    return pressure_zone_wall_force, potential_energy, triggered_explosion


@jit(nopython=True, cache=True)
def lennard_jones_force_scalar(distance_sqrd: float) -> Tuple[float, float]:
    """
    Force scalar and potential energy for a squared separation.

    The force on the first particle is (dx, dy) * scalar, where (dx, dy)
    points from the second particle to the first.
    """
    if distance_sqrd < MIN_DISTANCE_SQUARED:
        distance_sqrd = MIN_DISTANCE_SQUARED
    r2inv = 1.0 / distance_sqrd
    r6inv = r2inv * r2inv * r2inv
    force_scalar = 48.0 * r2inv * r6inv * (r6inv - 0.5)
    potential = 4.0 * r6inv * (r6inv - 1.0) + POTENTIAL_ENERGY_CUTOFF_SHIFT
    return force_scalar, potential


@jit(nopython=True, cache=True)
def calculate_monatomic_pair_forces(
    positions: np.ndarray,
    next_forces: np.ndarray,
    number_of_safe_atoms: int,
    epsilon: float
) -> float:
    """
    Add pairwise LJ forces between all safe atoms into next_forces.

    Args:
        positions: Nx2 atom positions
        next_forces: Nx2 force accumulator (already holds wall forces)
        number_of_safe_atoms: Only the first this-many atoms interact
        epsilon: Scaled interaction strength

    Returns:
        Potential energy of the interactions
    """
    potential_energy = 0.0

    for i in range(number_of_safe_atoms):
        for j in range(i + 1, number_of_safe_atoms):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance_sqrd = dx * dx + dy * dy

            if distance_sqrd == 0.0:
                # Right on top of one another; push them apart diagonally.
                dx = 0.6
                dy = 0.6
                distance_sqrd = 0.72

            if distance_sqrd < PARTICLE_INTERACTION_DISTANCE_THRESH_SQRD:
                force_scalar, potential = lennard_jones_force_scalar(distance_sqrd)
                fx = dx * force_scalar * epsilon
                fy = dy * force_scalar * epsilon

                # Newton's third law
                next_forces[i, 0] += fx
                next_forces[i, 1] += fy
                next_forces[j, 0] -= fx
                next_forces[j, 1] -= fy

                potential_energy += potential * epsilon

    return potential_energy


@jit(nopython=True, cache=True)
def calculate_atom_pair_forces(
    atom_positions: np.ndarray,
    center_of_mass_positions: np.ndarray,
    next_forces: np.ndarray,
    next_torques: np.ndarray,
    number_of_safe_molecules: int,
    atoms_per_molecule: int
) -> float:
    """
    Add LJ forces and torques between every atom of every pair of safe
    molecules. Used for rigid diatomic molecules.

    Returns:
        Potential energy of the interactions
    """
    potential_energy = 0.0

    for i in range(number_of_safe_molecules):
        for j in range(i + 1, number_of_safe_molecules):
            for ii in range(atoms_per_molecule):
                a = atoms_per_molecule * i + ii
                for jj in range(atoms_per_molecule):
                    b = atoms_per_molecule * j + jj

                    dx = atom_positions[a, 0] - atom_positions[b, 0]
                    dy = atom_positions[a, 1] - atom_positions[b, 1]
                    distance_sqrd = dx * dx + dy * dy

                    if distance_sqrd < PARTICLE_INTERACTION_DISTANCE_THRESH_SQRD:
                        force_scalar, potential = lennard_jones_force_scalar(distance_sqrd)
                        fx = dx * force_scalar
                        fy = dy * force_scalar

                        next_forces[i, 0] += fx
                        next_forces[i, 1] += fy
                        next_forces[j, 0] -= fx
                        next_forces[j, 1] -= fy

                        # Torque about each molecule's center of mass
                        next_torques[i] += ((atom_positions[a, 0] - center_of_mass_positions[i, 0]) * fy
                                            - (atom_positions[a, 1] - center_of_mass_positions[i, 1]) * fx)
                        next_torques[j] -= ((atom_positions[b, 0] - center_of_mass_positions[j, 0]) * fy
                                            - (atom_positions[b, 1] - center_of_mass_positions[j, 1]) * fx)

                        potential_energy += potential

    return potential_energy


@jit(nopython=True, cache=True)
def calculate_water_pair_forces(
    atom_positions: np.ndarray,
    center_of_mass_positions: np.ndarray,
    next_forces: np.ndarray,
    next_torques: np.ndarray,
    number_of_safe_molecules: int,
    charges: np.ndarray
) -> float:
    """
    Add forces and torques between safe water molecules.

    Molecules close enough to interact get an LJ force between their
    centers of mass plus a Coulomb-like force between each pair of charged
    atoms, which is what gives water its orientation-dependent bonding.

    Args:
        atom_positions: (3N)x2 atom positions, oxygen first in each molecule
        center_of_mass_positions: Nx2 molecule positions
        next_forces: Nx2 force accumulator
        next_torques: N torque accumulator
        number_of_safe_molecules: Only the first this-many molecules interact
        charges: Charge of each of the three atoms

    Returns:
        Potential energy of the LJ interactions
    """
    potential_energy = 0.0

    for i in range(number_of_safe_molecules):
        for j in range(i + 1, number_of_safe_molecules):
            dx = center_of_mass_positions[i, 0] - center_of_mass_positions[j, 0]
            dy = center_of_mass_positions[i, 1] - center_of_mass_positions[j, 1]
            distance_sqrd = dx * dx + dy * dy

            if distance_sqrd >= PARTICLE_INTERACTION_DISTANCE_THRESH_SQRD:
                continue

            force_scalar, potential = lennard_jones_force_scalar(distance_sqrd)
            fx = dx * force_scalar
            fy = dy * force_scalar
            next_forces[i, 0] += fx
            next_forces[i, 1] += fy
            next_forces[j, 0] -= fx
            next_forces[j, 1] -= fy
            potential_energy += potential

            for ii in range(3):
                a = 3 * i + ii
                for jj in range(3):
                    b = 3 * j + jj

                    dx = atom_positions[a, 0] - atom_positions[b, 0]
                    dy = atom_positions[a, 1] - atom_positions[b, 1]
                    charge_distance_sqrd = dx * dx + dy * dy
                    if charge_distance_sqrd < WATER_MIN_CHARGE_DISTANCE_SQUARED:
                        charge_distance_sqrd = WATER_MIN_CHARGE_DISTANCE_SQUARED

                    r2inv = 1.0 / charge_distance_sqrd
                    force_scalar = charges[ii] * charges[jj] * r2inv * r2inv
                    fx = dx * force_scalar
                    fy = dy * force_scalar

                    next_forces[i, 0] += fx
                    next_forces[i, 1] += fy
                    next_forces[j, 0] -= fx
                    next_forces[j, 1] -= fy

                    next_torques[i] += ((atom_positions[a, 0] - center_of_mass_positions[i, 0]) * fy
                                        - (atom_positions[a, 1] - center_of_mass_positions[i, 1]) * fx)
                    next_torques[j] -= ((atom_positions[b, 0] - center_of_mass_positions[j, 0]) * fy
                                        - (atom_positions[b, 1] - center_of_mass_positions[j, 1]) * fx)

    return potential_energy


@jit(nopython=True, cache=True)
def place_diatomic_atoms(
    center_of_mass_positions: np.ndarray,
    rotation_angles: np.ndarray,
    atom_positions: np.ndarray,
    bond_length: float
) -> None:
    """Put the two atoms of each molecule either side of its center of mass."""
    half_bond = bond_length / 2.0
    for i in range(center_of_mass_positions.shape[0]):
        cos_theta = np.cos(rotation_angles[i])
        sin_theta = np.sin(rotation_angles[i])
        atom_positions[2 * i, 0] = center_of_mass_positions[i, 0] + cos_theta * half_bond
        atom_positions[2 * i, 1] = center_of_mass_positions[i, 1] + sin_theta * half_bond
        atom_positions[2 * i + 1, 0] = center_of_mass_positions[i, 0] - cos_theta * half_bond
        atom_positions[2 * i + 1, 1] = center_of_mass_positions[i, 1] - sin_theta * half_bond


@jit(nopython=True, cache=True)
def place_rigid_body_atoms(
    center_of_mass_positions: np.ndarray,
    rotation_angles: np.ndarray,
    atom_positions: np.ndarray,
    structure_x: np.ndarray,
    structure_y: np.ndarray
) -> None:
    """Rotate a fixed molecule structure by each molecule's angle."""
    atoms_per_molecule = structure_x.shape[0]
    for i in range(center_of_mass_positions.shape[0]):
        cos_theta = np.cos(rotation_angles[i])
        sin_theta = np.sin(rotation_angles[i])
        for j in range(atoms_per_molecule):
            a = atoms_per_molecule * i + j
            atom_positions[a, 0] = (center_of_mass_positions[i, 0]
                                    + cos_theta * structure_x[j] - sin_theta * structure_y[j])
            atom_positions[a, 1] = (center_of_mass_positions[i, 1]
                                    + sin_theta * structure_x[j] + cos_theta * structure_y[j])
