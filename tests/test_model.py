#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Simulation Model Tests
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
    GAS_TEMPERATURE, MAX_TEMPERATURE, MIN_TEMPERATURE, SOLID_TEMPERATURE,
    MAX_GRAVITATIONAL_ACCEL, PARTICLE_CONTAINER_INITIAL_HEIGHT
)
from states_of_matter.model import (
    SimulationModel,
    ModelConfig,
    ThermostatType,
    calculate_initial_number_of_molecules,
)
from states_of_matter.observers import ModelListener
from states_of_matter.positions import (
    MonatomicAtomPositionUpdater,
    DiatomicAtomPositionUpdater,
    WaterAtomPositionUpdater,
)
from states_of_matter.particles import MoleculeType
from states_of_matter.thermodynamics import Phase


@pytest.fixture
def model():
    return SimulationModel(ModelConfig(seed=42))


class EventRecorder(ModelListener):
    def __init__(self):
        self.events = []

    def temperature_changed(self, model):
        self.events.append("temperature")

    def container_exploded_state_changed(self, model):
        self.events.append("exploded")

    def container_size_changed(self, model):
        self.events.append("size")


class TestInitialization:
    """Tests for model construction and species changes."""

    def test_defaults(self, model):
        assert model.molecule_type is MoleculeType.NEON
        assert model.number_of_molecules == 100
        assert model.temperature_set_point == SOLID_TEMPERATURE
        assert not model.is_exploded
        assert model.thermostat_type is ThermostatType.ADAPTIVE
        assert model.molecule_data_set.number_of_safe_molecules == 100

    @pytest.mark.parametrize("molecule_type, count", [
        (MoleculeType.NEON, 100),
        (MoleculeType.ARGON, 81),
        (MoleculeType.DIATOMIC_OXYGEN, 50),
        (MoleculeType.WATER, 49),
        (MoleculeType.USER_DEFINED, 81),
    ])
    def test_initial_molecule_counts(self, molecule_type, count):
        assert calculate_initial_number_of_molecules(molecule_type) == count
        model = SimulationModel(ModelConfig(molecule_type=molecule_type, seed=1))
        assert model.number_of_molecules == count
        assert len(model.particles) == count * molecule_type.atoms_per_molecule

    def test_species_from_string(self, model):
        model.set_molecule_type("argon")
        assert model.molecule_type is MoleculeType.ARGON

    def test_unknown_species_leaves_state_alone(self, model):
        with pytest.raises(ValueError):
            model.set_molecule_type("unobtainium")
        assert model.molecule_type is MoleculeType.NEON
        assert model.number_of_molecules == 100

    def test_phase_survives_species_change(self, model):
        model.set_phase(Phase.GAS)
        model.set_molecule_type(MoleculeType.ARGON)
        assert model.temperature_set_point == GAS_TEMPERATURE
        positions = model.molecule_data_set.molecule_center_of_mass_positions
        assert positions[:, 1].max() > 10.0

    def test_species_change_resets_explosion(self, model):
        model.explode_container()
        model.set_molecule_type(MoleculeType.WATER)
        assert not model.is_exploded
        assert model.particle_container_height == PARTICLE_CONTAINER_INITIAL_HEIGHT

    def test_display_particles_in_picometers(self, model):
        np.testing.assert_allclose(
            model.particle_positions,
            model.molecule_data_set.atom_positions * model.particle_diameter
        )

    @pytest.mark.parametrize("first, second, name, radius", [
        (MoleculeType.NEON, MoleculeType.DIATOMIC_OXYGEN, "oxygen", 162.0),
        (MoleculeType.ARGON, MoleculeType.USER_DEFINED, "configurable", 175.0),
    ])
    def test_switch_replaces_display_particles(self, first, second, name, radius):
        """Species with the same atom count still get their own particle records."""
        model = SimulationModel(ModelConfig(molecule_type=first, seed=1))
        n_atoms = len(model.particles)
        model.set_molecule_type(second)

        assert len(model.particles) == n_atoms
        assert {particle.name for particle in model.particles} == {name}
        snapshot = model.snapshot()
        np.testing.assert_array_equal(snapshot.atom_radii, radius)

    @pytest.mark.parametrize("molecule_type, updater", [
        (MoleculeType.NEON, MonatomicAtomPositionUpdater),
        (MoleculeType.DIATOMIC_OXYGEN, DiatomicAtomPositionUpdater),
        (MoleculeType.WATER, WaterAtomPositionUpdater),
    ])
    def test_position_updater_per_species(self, model, molecule_type, updater):
        model.set_molecule_type(molecule_type)
        assert isinstance(model.strategies.position_updater, updater)

    def test_water_particles(self):
        model = SimulationModel(ModelConfig(molecule_type=MoleculeType.WATER, seed=3))
        names = [particle.name for particle in model.particles[:3]]
        assert names == ["oxygen", "hydrogen", "hydrogen"]

    def test_reset(self, model):
        model.set_molecule_type(MoleculeType.WATER)
        model.set_heating_cooling_amount(1.0)
        model.reset()
        assert model.molecule_type is MoleculeType.NEON
        assert model.number_of_molecules == 100
        assert model.temperature_set_point == SOLID_TEMPERATURE
        assert model.heating_cooling_amount == 0.0


class TestSetters:
    """Tests for the clamping setters."""

    def test_temperature_clamped(self, model):
        model.set_temperature(100.0)
        assert model.temperature_set_point == MAX_TEMPERATURE
        model.set_temperature(-1.0)
        assert model.temperature_set_point == MIN_TEMPERATURE

    def test_temperature_reaches_thermostats(self, model):
        model.set_temperature(0.5)
        assert model.strategies.isokinetic_thermostat.target_temperature == 0.5
        assert model.strategies.andersen_thermostat.target_temperature == 0.5

    def test_gravity_clamped(self, model):
        model.set_gravitational_acceleration(1.0)
        assert model.gravitational_acceleration == MAX_GRAVITATIONAL_ACCEL
        model.set_gravitational_acceleration(-0.1)
        assert model.gravitational_acceleration == 0.0

    def test_config_gravity_clamped(self):
        model = SimulationModel(ModelConfig(gravitational_acceleration=5.0, seed=0))
        assert model.gravitational_acceleration == MAX_GRAVITATIONAL_ACCEL

    def test_heating_amount_clamped(self, model):
        model.set_heating_cooling_amount(5.0)
        assert model.heating_cooling_amount == pytest.approx(0.025)
        model.set_heating_cooling_amount(-5.0)
        assert model.heating_cooling_amount == pytest.approx(-0.025)

    def test_container_height_clamped(self, model):
        model.set_target_particle_container_height(0.0)
        assert model.target_container_height == pytest.approx(model.min_allowable_container_height)
        model.set_target_particle_container_height(1e6)
        assert model.target_container_height == PARTICLE_CONTAINER_INITIAL_HEIGHT

    def test_thermostat_type(self, model):
        model.set_thermostat_type("andersen")
        assert model.thermostat_type is ThermostatType.ANDERSEN
        with pytest.raises(ValueError):
            model.set_thermostat_type("bogus")
        assert model.thermostat_type is ThermostatType.ANDERSEN

    def test_unknown_phase_is_solid(self, model):
        model.set_phase(Phase.GAS)
        model.set_phase("plasma")
        assert model.temperature_set_point == SOLID_TEMPERATURE

    def test_epsilon_only_for_user_defined(self, model):
        model.set_epsilon(100.0)
        assert model.get_epsilon() == pytest.approx(32.8)

    def test_user_defined_epsilon(self):
        model = SimulationModel(ModelConfig(molecule_type=MoleculeType.USER_DEFINED, seed=0))
        assert model.get_epsilon() == pytest.approx(225.0)
        model.set_epsilon(100.0)
        assert model.get_epsilon() == pytest.approx(100.0)
        model.set_epsilon(1000.0)
        assert model.get_epsilon() == pytest.approx(450.0)
        model.set_epsilon(0.0)
        assert model.get_epsilon() == pytest.approx(2.0)

    def test_sigma(self, model):
        assert model.get_sigma() == pytest.approx(308.0)
        model.set_molecule_type(MoleculeType.WATER)
        assert model.get_sigma() == pytest.approx(444.0)


class TestStep:
    """Tests for advancing the model."""

    def test_solid_is_stable(self, model):
        for _ in range(100):
            model.step()
        assert not model.is_exploded
        assert model.get_model_pressure() < 1.05
        assert np.all(np.isfinite(model.particle_positions))

    @pytest.mark.parametrize("molecule_type", [MoleculeType.DIATOMIC_OXYGEN, MoleculeType.WATER])
    def test_molecules_stay_finite(self, molecule_type):
        model = SimulationModel(ModelConfig(molecule_type=molecule_type, seed=5))
        for _ in range(20):
            model.step()
        assert np.all(np.isfinite(model.particle_positions))

    def test_dt_is_ignored(self):
        first = SimulationModel(ModelConfig(seed=7))
        second = SimulationModel(ModelConfig(seed=7))
        for _ in range(5):
            first.step(0.001)
            second.step(10.0)
        np.testing.assert_array_equal(first.particle_positions, second.particle_positions)

    def test_heating_raises_set_point(self, model):
        model.set_heating_cooling_amount(1.0)
        set_points = [model.temperature_set_point]
        for _ in range(500):
            model.step()
            set_points.append(model.temperature_set_point)
        assert np.all(np.diff(set_points) >= 0)
        assert set_points[-1] >= GAS_TEMPERATURE - 1e-9

    def test_set_point_changes_every_ten_ticks(self, model):
        model.set_heating_cooling_amount(1.0)
        for _ in range(9):
            model.step()
        assert model.temperature_set_point == SOLID_TEMPERATURE
        model.step()
        assert model.temperature_set_point == pytest.approx(SOLID_TEMPERATURE + 0.025)

    def test_cooling_slows_near_zero(self, model):
        model.set_heating_cooling_amount(-1.0)
        for _ in range(10):
            model.step()
        assert model.temperature_set_point == pytest.approx(SOLID_TEMPERATURE * 0.95)

    def test_lid_moves_gradually(self, model):
        model.set_target_particle_container_height(5000.0)
        model.step()
        assert model.particle_container_height == pytest.approx(9950.0)
        assert model.height_change_counter == 25

    def test_lid_stops_at_target(self, model):
        model.set_target_particle_container_height(9900.0)
        for _ in range(5):
            model.step()
        assert model.particle_container_height == pytest.approx(9900.0)
        assert model.height_change_counter == 22

    def test_temperature_in_kelvin(self, model):
        assert model.get_temperature_in_kelvin() == pytest.approx(0.15 * 23.0 / 0.26)


class TestExplosion:
    """Tests for blowing the lid and putting it back."""

    def test_floor_penetration_explodes(self, model):
        recorder = EventRecorder()
        model.add_listener(recorder)
        data_set = model.molecule_data_set
        data_set.molecule_center_of_mass_positions[0, 1] = -0.1
        data_set.molecule_velocities[0] = 0.0

        model.step()
        assert model.is_exploded
        assert model.get_model_pressure() == 0.0
        assert "exploded" in recorder.events

        height = model.particle_container_height
        model.step()
        assert model.particle_container_height == pytest.approx(height + 200.0)
        assert model.get_model_pressure() == 0.0

    def test_exploded_height_is_capped(self, model):
        model.explode_container()
        model.particle_container_height = PARTICLE_CONTAINER_INITIAL_HEIGHT * 10
        model.step()
        assert model.particle_container_height == PARTICLE_CONTAINER_INITIAL_HEIGHT * 10

    def test_return_lid(self, model):
        model.explode_container()
        positions = model.molecule_data_set.molecule_center_of_mass_positions
        positions[0] = (5.0, 1000.0)

        model.return_lid()
        assert not model.is_exploded
        assert model.number_of_molecules == 99
        assert model.temperature_set_point == GAS_TEMPERATURE
        assert model.particle_container_height == PARTICLE_CONTAINER_INITIAL_HEIGHT

    def test_return_lid_on_intact_container(self, model):
        model.return_lid()
        assert model.number_of_molecules == 100


class TestInjection:
    """Tests for injecting molecules."""

    def test_inject_until_full(self, model):
        remaining = model.molecule_data_set.get_number_of_remaining_slots()
        assert remaining == 400
        assert all(model.inject_molecule() for _ in range(remaining))
        assert model.inject_molecule() is False
        assert model.number_of_molecules == 500

    def test_injected_molecule_starts_unsafe(self, model):
        model.inject_molecule()
        data_set = model.molecule_data_set
        assert data_set.number_of_molecules == 101
        assert data_set.number_of_safe_molecules == 100
        np.testing.assert_allclose(
            data_set.molecule_center_of_mass_positions[100],
            (model.normalized_container_width * 0.95, model.normalized_container_height * 0.5)
        )
        assert data_set.molecule_velocities[100, 0] < 0
        assert len(model.particles) == 101

    def test_safe_count_never_drops(self, model):
        for _ in range(5):
            model.inject_molecule()
        safe_counts = []
        for _ in range(30):
            model.step()
            safe_counts.append(model.molecule_data_set.number_of_safe_molecules)
        assert np.all(np.diff(safe_counts) >= 0)
        assert safe_counts[-1] <= model.number_of_molecules


class TestObservers:
    """Tests for listeners and snapshots."""

    def test_listener_notified(self, model):
        recorder = EventRecorder()
        model.add_listener(recorder)
        model.set_temperature(0.5)
        assert recorder.events == ["temperature"]

        model.remove_listener(recorder)
        model.set_temperature(0.6)
        assert recorder.events == ["temperature"]

    def test_snapshot_is_a_copy(self, model):
        snapshot = model.snapshot()
        before = snapshot.atom_positions.copy()
        model.step()
        np.testing.assert_array_equal(snapshot.atom_positions, before)
        assert snapshot.n_atoms == 100
        assert snapshot.molecule_type is MoleculeType.NEON
        assert snapshot.container_height == PARTICLE_CONTAINER_INITIAL_HEIGHT

    def test_container_rect(self, model):
        assert model.get_particle_container_rect() == (0.0, 0.0, 10000.0, 10000.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
