#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Physics Kernel Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        January 22, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from states_of_matter.constants import (
    MIN_DISTANCE_SQUARED, MIN_WALL_DISTANCE, DIATOMIC_PARTICLE_DISTANCE
)
from states_of_matter.physics import (
    wall_force_magnitude,
    calculate_wall_force,
    calculate_wall_forces,
    lennard_jones_force_scalar,
    calculate_monatomic_pair_forces,
    calculate_atom_pair_forces,
    place_diatomic_atoms,
)


class TestWallForce:
    """Tests for the container wall force."""

    def test_no_force_in_middle(self):
        fx, fy, pe, triggered = calculate_wall_force(5.0, 5.0, 10.0, 10.0, False)
        assert fx == 0.0
        assert fy == 0.0
        assert pe == 0.0
        assert not triggered

    def test_walls_push_inward(self):
        """Each wall pushes particles back into the container."""
        fx, _, _, _ = calculate_wall_force(1.0, 5.0, 10.0, 10.0, False)
        assert fx > 0
        fx, _, _, _ = calculate_wall_force(9.0, 5.0, 10.0, 10.0, False)
        assert fx < 0
        _, fy, _, _ = calculate_wall_force(5.0, 1.0, 10.0, 10.0, False)
        assert fy > 0
        _, fy, _, _ = calculate_wall_force(5.0, 9.0, 10.0, 10.0, False)
        assert fy < 0

    def test_force_is_clamped_near_wall(self):
        """Particles past the minimum distance feel the minimum-distance force."""
        fx, _, _, _ = calculate_wall_force(0.1, 5.0, 10.0, 10.0, False)
        assert np.isfinite(fx)
        assert fx == pytest.approx(wall_force_magnitude(MIN_WALL_DISTANCE))

    def test_side_walls_only_as_tall_as_wide(self):
        """The side walls end at a height equal to the container width."""
        fx, _, _, _ = calculate_wall_force(0.5, 12.0, 10.0, 20.0, False)
        assert fx == 0.0

    def test_escape_when_exploded(self):
        """Outside an exploded container there is no side wall force."""
        fx, _, _, _ = calculate_wall_force(-0.5, 5.0, 10.0, 10.0, True)
        assert fx == 0.0
        fx, _, _, _ = calculate_wall_force(10.5, 5.0, 10.0, 10.0, True)
        assert fx == 0.0

    def test_no_lid_when_exploded(self):
        _, fy, _, _ = calculate_wall_force(5.0, 9.5, 10.0, 10.0, True)
        assert fy == 0.0

    def test_floor_penetration_triggers_explosion(self):
        fx, fy, _, triggered = calculate_wall_force(5.0, -0.1, 10.0, 10.0, False)
        assert triggered
        assert fy == pytest.approx(wall_force_magnitude(MIN_WALL_DISTANCE))

    def test_no_trigger_when_already_exploded(self):
        _, _, _, triggered = calculate_wall_force(5.0, -0.1, 10.0, 10.0, True)
        assert not triggered

    def test_wall_potential_is_zero_at_threshold(self):
        threshold = 2.0 ** (1.0 / 6.0)
        _, _, pe, _ = calculate_wall_force(threshold - 1e-9, 5.0, 10.0, 10.0, False)
        assert pe == pytest.approx(0.0, abs=1e-6)


class TestWallForces:
    """Tests for the vectorized wall force pass."""

    def test_overwrites_forces(self):
        positions = np.array([[5.0, 5.0], [1.0, 5.0]])
        next_forces = np.full((2, 2), 99.0)
        calculate_wall_forces(positions, next_forces, 10.0, 10.0, False)

        np.testing.assert_array_equal(next_forces[0], [0.0, 0.0])
        assert next_forces[1, 0] > 0
        assert next_forces[1, 1] == 0.0

    def test_pressure_zone_force(self):
        """Lid pushes always count; side pushes only count in the top half."""
        positions = np.array([
            [5.0, 9.0],   # lid
            [1.0, 8.0],   # left wall, top half
            [1.0, 2.0],   # left wall, bottom half
        ])
        next_forces = np.zeros((3, 2))
        pressure_force, _, _ = calculate_wall_forces(positions, next_forces, 10.0, 10.0, False)

        expected = -next_forces[0, 1] + abs(next_forces[1, 0])
        assert pressure_force == pytest.approx(expected)
        assert next_forces[2, 0] > 0

    def test_reports_explosion(self):
        positions = np.array([[5.0, -0.2], [5.0, 5.0]])
        next_forces = np.zeros((2, 2))
        _, _, triggered = calculate_wall_forces(positions, next_forces, 10.0, 10.0, False)
        assert triggered


class TestLennardJones:
    """Tests for the Lennard-Jones pair interaction."""

    def test_zero_force_at_minimum(self):
        """The force vanishes at r = 2^(1/6)."""
        force_scalar, _ = lennard_jones_force_scalar(2.0 ** (1.0 / 3.0))
        assert force_scalar == pytest.approx(0.0, abs=1e-10)

    def test_repulsive_inside_minimum(self):
        force_scalar, _ = lennard_jones_force_scalar(1.0)
        assert force_scalar == pytest.approx(24.0)

    def test_attractive_outside_minimum(self):
        force_scalar, _ = lennard_jones_force_scalar(2.0)
        assert force_scalar < 0

    def test_potential_shifted_to_zero_at_cutoff(self):
        _, potential = lennard_jones_force_scalar(6.25)
        assert potential == pytest.approx(0.0, abs=1e-6)

    def test_clamped_below_minimum_distance(self):
        """Very close pairs get the same finite force as the clamp distance."""
        close = lennard_jones_force_scalar(0.1)
        clamp = lennard_jones_force_scalar(MIN_DISTANCE_SQUARED)
        assert close[0] == clamp[0]
        assert close[1] == clamp[1]
        assert np.isfinite(close[0])


class TestMonatomicPairForces:
    """Tests for the monatomic pair kernel."""

    def test_newtons_third_law(self):
        positions = np.array([[5.0, 5.0], [6.0, 5.3], [5.5, 6.1]])
        next_forces = np.zeros((3, 2))
        calculate_monatomic_pair_forces(positions, next_forces, 3, 1.0)
        np.testing.assert_allclose(next_forces.sum(axis=0), [0.0, 0.0], atol=1e-10)

    def test_repulsion_at_unit_distance(self):
        positions = np.array([[5.0, 5.0], [6.0, 5.0]])
        next_forces = np.zeros((2, 2))
        calculate_monatomic_pair_forces(positions, next_forces, 2, 1.0)
        assert next_forces[0, 0] == pytest.approx(-24.0)
        assert next_forces[1, 0] == pytest.approx(24.0)

    def test_epsilon_scales_force(self):
        positions = np.array([[5.0, 5.0], [6.0, 5.0]])
        weak = np.zeros((2, 2))
        strong = np.zeros((2, 2))
        calculate_monatomic_pair_forces(positions, weak, 2, 0.5)
        calculate_monatomic_pair_forces(positions, strong, 2, 1.0)
        np.testing.assert_allclose(weak * 2, strong)

    def test_unsafe_atoms_do_not_interact(self):
        positions = np.array([[5.0, 5.0], [6.0, 5.0]])
        next_forces = np.zeros((2, 2))
        pe = calculate_monatomic_pair_forces(positions, next_forces, 1, 1.0)
        np.testing.assert_array_equal(next_forces, 0.0)
        assert pe == 0.0

    def test_no_force_beyond_cutoff(self):
        positions = np.array([[5.0, 5.0], [7.6, 5.0]])
        next_forces = np.zeros((2, 2))
        calculate_monatomic_pair_forces(positions, next_forces, 2, 1.0)
        np.testing.assert_array_equal(next_forces, 0.0)

    def test_coincident_atoms_pushed_apart(self):
        positions = np.array([[5.0, 5.0], [5.0, 5.0]])
        next_forces = np.zeros((2, 2))
        calculate_monatomic_pair_forces(positions, next_forces, 2, 1.0)
        assert np.all(np.isfinite(next_forces))
        assert next_forces[0, 0] > 0
        assert next_forces[1, 0] < 0


class TestDiatomic:
    """Tests for diatomic atom placement and forces."""

    def test_atom_placement(self):
        com = np.array([[5.0, 5.0], [10.0, 10.0]])
        angles = np.array([0.0, np.pi / 2])
        atoms = np.zeros((4, 2))
        place_diatomic_atoms(com, angles, atoms, DIATOMIC_PARTICLE_DISTANCE)

        half = DIATOMIC_PARTICLE_DISTANCE / 2
        np.testing.assert_allclose(atoms[0], [5.0 + half, 5.0])
        np.testing.assert_allclose(atoms[1], [5.0 - half, 5.0])
        np.testing.assert_allclose(atoms[2], [10.0, 10.0 + half], atol=1e-12)
        np.testing.assert_allclose(atoms[3], [10.0, 10.0 - half], atol=1e-12)

    def test_pair_forces_balance(self):
        com = np.array([[5.0, 5.0], [6.5, 5.4]])
        angles = np.array([0.3, 1.2])
        atoms = np.zeros((4, 2))
        place_diatomic_atoms(com, angles, atoms, DIATOMIC_PARTICLE_DISTANCE)

        next_forces = np.zeros((2, 2))
        next_torques = np.zeros(2)
        calculate_atom_pair_forces(atoms, com, next_forces, next_torques, 2, 2)

        np.testing.assert_allclose(next_forces.sum(axis=0), [0.0, 0.0], atol=1e-10)
        assert np.any(next_torques != 0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
