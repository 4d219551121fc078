#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Multiple Particle Simulation Model
================================================================================

Project:        States of Matter Engine
Module:         model.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Top level of the engine. SimulationModel owns the molecule data set and the
set of strategy objects that act on it (force calculator, atom position
updater, phase changer, thermostats). The whole set is rebuilt whenever the
molecule species changes.

Each call to step() is one clock tick:
1. Move the container lid toward its target height (rate limited), or keep
   growing the container if it has exploded
2. Run a fixed number of Verlet sub-steps, each followed by a thermostat
3. Copy atom positions out to the display particles
4. Nudge the temperature set-point if heating or cooling is active

The physics runs on a fixed internal time step; the dt passed to step() is
accepted for the caller's convenience and otherwise ignored so runs are
reproducible.

Example:
    >>> model = SimulationModel(ModelConfig(molecule_type=MoleculeType.ARGON, seed=42))
    >>> model.set_phase(Phase.LIQUID)
    >>> for _ in range(100):
    ...     model.step()
    >>> model.get_temperature_in_kelvin()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .constants import (
    PARTICLE_CONTAINER_WIDTH,
    PARTICLE_CONTAINER_INITIAL_HEIGHT,
    SOLID_TEMPERATURE,
    LIQUID_TEMPERATURE,
    MIN_TEMPERATURE,
    MAX_TEMPERATURE,
    INITIAL_TEMPERATURE,
    INITIAL_GRAVITATIONAL_ACCEL,
    MAX_GRAVITATIONAL_ACCEL,
    MIN_EPSILON,
    MAX_EPSILON,
    MAX_TEMPERATURE_CHANGE_PER_ADJUSTMENT,
    TICKS_PER_TEMP_ADJUSTMENT,
    VERLET_CALCULATIONS_PER_CLOCK_TICK,
    MIN_INJECTED_MOLECULE_VELOCITY,
    MAX_INJECTED_MOLECULE_VELOCITY,
    MAX_INJECTED_MOLECULE_ANGLE,
    INJECTION_POINT_HORIZ_PROPORTION,
    INJECTION_POINT_VERT_PROPORTION,
    MAX_PER_TICK_CONTAINER_SHRINKAGE,
    MAX_PER_TICK_CONTAINER_EXPANSION,
    CONTAINER_SIZE_CHANGE_RESET_COUNT,
    EXPLODED_CONTAINER_HEIGHT_MULTIPLIER,
    TEMPERATURE_CLOSENESS_RANGE,
    PARTICLE_EDGE_PROXIMITY_RANGE,
    ANDERSEN_COLLISION_PROBABILITY,
)
from .dataset import MoleculeDataSet
from .observers import ModelListener, ModelSnapshot
from .particles import (
    MoleculeType,
    ParticleRecord,
    OXYGEN,
    convert_epsilon_to_scaled_epsilon,
    convert_scaled_epsilon_to_epsilon,
)
from .phase_changer import PhaseStateChanger, create_phase_state_changer
from .positions import AtomPositionUpdater, create_position_updater
from .thermodynamics import (
    Phase,
    PHASE_TEMPERATURES,
    coerce_phase,
    map_temperature_to_phase,
    calculate_min_model_temperature,
    convert_temperature_to_kelvin,
    convert_pressure_to_atmospheres,
)
from .thermostats import IsokineticThermostat, AndersenThermostat
from .verlet import VerletAlgorithm, create_verlet_algorithm

logger = logging.getLogger(__name__)


class ThermostatType(Enum):
    """Which thermostat runs after each Verlet sub-step."""
    NONE = "none"
    ISOKINETIC = "isokinetic"
    ANDERSEN = "andersen"
    ADAPTIVE = "adaptive"


@dataclass
class ModelConfig:
    """Configuration for a SimulationModel."""
    molecule_type: MoleculeType = MoleculeType.NEON
    thermostat_type: ThermostatType = ThermostatType.ADAPTIVE

    # Integration
    verlet_calculations_per_tick: int = VERLET_CALCULATIONS_PER_CLOCK_TICK

    # Environment
    gravitational_acceleration: float = INITIAL_GRAVITATIONAL_ACCEL
    andersen_collision_probability: float = ANDERSEN_COLLISION_PROBABILITY

    # None draws fresh entropy from the OS
    seed: Optional[int] = None


@dataclass
class ModelStrategies:
    """The objects that act on one data set; replaced together on a species change."""
    position_updater: AtomPositionUpdater
    verlet: VerletAlgorithm
    phase_state_changer: PhaseStateChanger
    isokinetic_thermostat: IsokineticThermostat
    andersen_thermostat: AndersenThermostat


def _coerce_molecule_type(molecule_type) -> MoleculeType:
    if isinstance(molecule_type, MoleculeType):
        return molecule_type
    try:
        return MoleculeType(molecule_type)
    except ValueError:
        raise ValueError(f"Unsupported molecule type: {molecule_type!r}") from None


def _coerce_thermostat_type(thermostat_type) -> ThermostatType:
    if isinstance(thermostat_type, ThermostatType):
        return thermostat_type
    try:
        return ThermostatType(thermostat_type)
    except ValueError:
        raise ValueError(f"Thermostat type setting out of range: {thermostat_type!r}") from None


def calculate_initial_number_of_molecules(molecule_type: MoleculeType) -> int:
    """
    How many molecules a fresh container holds.

    Enough to make a roughly square crystal about a third of the container
    wide.
    """
    width = PARTICLE_CONTAINER_WIDTH
    atoms_per_molecule = molecule_type.atoms_per_molecule
    if atoms_per_molecule == 1:
        return int(round(width / (molecule_type.particle_diameter * 1.05 * 3))) ** 2
    if atoms_per_molecule == 2:
        number_of_atoms = int(round(width / (OXYGEN.radius * 2.1 * 3))) ** 2
        return number_of_atoms // 2
    return int(round(width / (molecule_type.particle_diameter * 3))) ** 2


class SimulationModel:
    """
    Molecular dynamics model of a substance in a resizable container.

    Positions inside the engine are in particle diameters; the display
    particles and container are in picometers.
    """

    def __init__(self, config: Optional[ModelConfig] = None):
        self.config = config or ModelConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.listeners: List[ModelListener] = []

        self.thermostat_type = _coerce_thermostat_type(self.config.thermostat_type)
        self.molecule_type: Optional[MoleculeType] = None
        self.molecule_data_set: Optional[MoleculeDataSet] = None
        self.strategies: Optional[ModelStrategies] = None

        # Display particles in picometers, one per atom
        self.particles: List[ParticleRecord] = []
        self.particle_positions = np.zeros((0, 2))

        self.particle_diameter = 1.0
        self.min_model_temperature = 0.0
        self.particle_container_height = PARTICLE_CONTAINER_INITIAL_HEIGHT
        self.target_container_height = PARTICLE_CONTAINER_INITIAL_HEIGHT
        self.normalized_container_width = PARTICLE_CONTAINER_WIDTH
        self.min_allowable_container_height = 0.0
        self.height_change_counter = 0

        self._initialize_model_parameters()
        self.set_molecule_type(self.config.molecule_type)

    def _initialize_model_parameters(self) -> None:
        self.gravitational_acceleration = float(np.clip(
            self.config.gravitational_acceleration, 0.0, MAX_GRAVITATIONAL_ACCEL
        ))
        self.heating_cooling_amount = 0.0
        self.temp_adjust_tick_counter = 0
        self.temperature_set_point = INITIAL_TEMPERATURE
        self.is_exploded = False

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def normalized_container_height(self) -> float:
        return self.particle_container_height / self.particle_diameter

    @property
    def number_of_molecules(self) -> int:
        return self.molecule_data_set.number_of_molecules

    def get_particle_container_rect(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height) of the container in picometers."""
        return 0.0, 0.0, PARTICLE_CONTAINER_WIDTH, self.particle_container_height

    def _reset_container_size(self) -> None:
        self.particle_container_height = PARTICLE_CONTAINER_INITIAL_HEIGHT
        self.target_container_height = PARTICLE_CONTAINER_INITIAL_HEIGHT
        self.normalized_container_width = PARTICLE_CONTAINER_WIDTH / self.particle_diameter
        self._notify("container_size_changed")

    def _calculate_min_allowable_container_height(self) -> None:
        """Close-packed height of the current molecules, in picometers."""
        self.min_allowable_container_height = (
            self.molecule_data_set.number_of_molecules / self.normalized_container_width
        ) * self.particle_diameter

    def set_target_particle_container_height(self, desired_container_height: float) -> None:
        """
        Set where the lid should go. The model moves it there gradually.
        """
        self.target_container_height = float(np.clip(
            desired_container_height,
            self.min_allowable_container_height,
            PARTICLE_CONTAINER_INITIAL_HEIGHT
        ))

    # ------------------------------------------------------------------
    # Species and phase
    # ------------------------------------------------------------------

    def set_molecule_type(self, molecule_type) -> None:
        """
        Switch to another species.

        The data set and every strategy object are discarded and rebuilt.
        The new molecules start in the phase implied by the set-point from
        before the switch.

        Raises:
            ValueError: If the species is not supported
        """
        molecule_type = _coerce_molecule_type(molecule_type)
        phase = map_temperature_to_phase(self.temperature_set_point)

        self._initialize_model_parameters()
        self.molecule_type = molecule_type
        self.particle_diameter = molecule_type.particle_diameter
        self.min_model_temperature = calculate_min_model_temperature(molecule_type)
        self._reset_container_size()
        # The old species' display records must not survive the switch.
        self.particles = []
        self._initialize_particles(phase)

        logger.info("Molecule type set to %s with %d molecules in %s phase",
                    molecule_type.value, self.number_of_molecules, phase.value)
        self._notify("molecule_type_changed")
        self._notify("container_exploded_state_changed")

    def _initialize_particles(self, phase: Phase) -> None:
        molecule_type = self.molecule_type
        atoms_per_molecule = molecule_type.atoms_per_molecule

        data_set = MoleculeDataSet(atoms_per_molecule)
        position_updater = create_position_updater(atoms_per_molecule)
        self.molecule_data_set = data_set
        self.strategies = ModelStrategies(
            position_updater=position_updater,
            verlet=create_verlet_algorithm(molecule_type, self, data_set, position_updater),
            phase_state_changer=create_phase_state_changer(
                atoms_per_molecule, self, data_set, position_updater, self.rng
            ),
            isokinetic_thermostat=IsokineticThermostat(data_set, self.min_model_temperature),
            andersen_thermostat=AndersenThermostat(
                data_set, self.min_model_temperature, self.rng,
                self.config.andersen_collision_probability
            ),
        )

        # Everything starts at the origin; the phase changer lays them out.
        atom_positions = np.zeros((atoms_per_molecule, 2))
        for _ in range(calculate_initial_number_of_molecules(molecule_type)):
            if not data_set.add_molecule(atom_positions, (0.0, 0.0), (0.0, 0.0), 0.0):
                break

        self.set_phase(phase)

    def set_phase(self, phase) -> None:
        """
        Lay the molecules out as a solid, liquid or gas and move the
        set-point to that phase's temperature.

        Unrecognized phases are logged and treated as solid.
        """
        phase = coerce_phase(phase)
        self.strategies.phase_state_changer.set_phase(phase)
        self.set_temperature(PHASE_TEMPERATURES[phase])
        self._calculate_min_allowable_container_height()
        self.sync_particle_positions()

    # ------------------------------------------------------------------
    # Temperature, gravity, interaction strength
    # ------------------------------------------------------------------

    def set_temperature(self, new_temperature: float) -> None:
        """Set the temperature set-point, clamped to the model's range."""
        self.temperature_set_point = float(np.clip(new_temperature, MIN_TEMPERATURE, MAX_TEMPERATURE))
        if self.strategies is not None:
            self.strategies.isokinetic_thermostat.set_target_temperature(self.temperature_set_point)
            self.strategies.andersen_thermostat.set_target_temperature(self.temperature_set_point)
        self._notify("temperature_changed")

    def set_heating_cooling_amount(self, normalized_heating_cooling_amount: float) -> None:
        """
        Heat (positive) or cool (negative) the system.

        Args:
            normalized_heating_cooling_amount: From -1 to +1, clamped
        """
        amount = float(np.clip(normalized_heating_cooling_amount, -1.0, 1.0))
        self.heating_cooling_amount = amount * MAX_TEMPERATURE_CHANGE_PER_ADJUSTMENT

    def set_gravitational_acceleration(self, acceleration: float) -> None:
        if acceleration > MAX_GRAVITATIONAL_ACCEL or acceleration < 0:
            logger.warning("Gravitational acceleration %s out of range, clamping to [0, %s]",
                           acceleration, MAX_GRAVITATIONAL_ACCEL)
        self.gravitational_acceleration = float(np.clip(acceleration, 0.0, MAX_GRAVITATIONAL_ACCEL))

    def set_thermostat_type(self, thermostat_type) -> None:
        """
        Raises:
            ValueError: If the thermostat type is not recognized
        """
        self.thermostat_type = _coerce_thermostat_type(thermostat_type)

    def set_epsilon(self, epsilon: float) -> None:
        """
        Set the interaction strength of the user-defined atom, in Kelvin.

        Only the user-defined atom is adjustable; other species ignore this.
        """
        if self.molecule_type is not MoleculeType.USER_DEFINED:
            logger.warning("Interaction strength can only be set for the user-defined atom")
            return
        epsilon = float(np.clip(epsilon, MIN_EPSILON, MAX_EPSILON))
        self.strategies.verlet.set_scaled_epsilon(convert_epsilon_to_scaled_epsilon(epsilon))
        self._notify("interaction_strength_changed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_sigma(self) -> float:
        """LJ sigma of the current species, in picometers."""
        return self.molecule_type.sigma

    def get_epsilon(self) -> float:
        """LJ epsilon of the current species, in Kelvin."""
        if self.molecule_type is MoleculeType.USER_DEFINED:
            return convert_scaled_epsilon_to_epsilon(self.strategies.verlet.get_scaled_epsilon())
        return self.molecule_type.epsilon

    def get_model_pressure(self) -> float:
        """Pressure in model units, not adjusted to anything real."""
        return self.strategies.verlet.pressure

    def get_pressure_in_atmospheres(self) -> float:
        return convert_pressure_to_atmospheres(self.get_model_pressure(), self.molecule_type)

    def get_temperature_in_kelvin(self) -> float:
        if len(self.particles) == 0:
            return 0.0
        return convert_temperature_to_kelvin(
            self.temperature_set_point, self.molecule_type, self.min_model_temperature
        )

    def particles_near_top(self) -> bool:
        """True if any molecule is within reach of the lid."""
        positions = self.molecule_data_set.molecule_center_of_mass_positions
        threshold = self.normalized_container_height - PARTICLE_EDGE_PROXIMITY_RANGE
        return bool(np.any(positions[:, 1] > threshold))

    # ------------------------------------------------------------------
    # Time evolution
    # ------------------------------------------------------------------

    def step(self, dt: Optional[float] = None) -> None:
        """
        Advance the model by one clock tick.

        Args:
            dt: Elapsed wall-clock time; ignored, the physics uses a fixed step
        """
        self._update_container_height()

        pressure_before = self.get_model_pressure()
        verlet = self.strategies.verlet
        for _ in range(self.config.verlet_calculations_per_tick):
            verlet.update_forces_and_motion()
            self.run_thermostat()

        self.sync_particle_positions()
        if self.get_model_pressure() != pressure_before:
            self._notify("pressure_changed")

        self._adjust_temperature_set_point()

    def _update_container_height(self) -> None:
        if self.is_exploded:
            # Blown lid drifts off screen.
            if self.particle_container_height < PARTICLE_CONTAINER_INITIAL_HEIGHT * EXPLODED_CONTAINER_HEIGHT_MULTIPLIER:
                self.particle_container_height += MAX_PER_TICK_CONTAINER_EXPANSION
                self._notify("container_size_changed")
            return

        if self.target_container_height == self.particle_container_height:
            if self.height_change_counter > 0:
                self.height_change_counter -= 1
            return

        self.height_change_counter = CONTAINER_SIZE_CHANGE_RESET_COUNT
        height_change = self.target_container_height - self.particle_container_height
        if height_change > 0:
            self.particle_container_height = min(
                self.particle_container_height + min(height_change, MAX_PER_TICK_CONTAINER_EXPANSION),
                PARTICLE_CONTAINER_INITIAL_HEIGHT
            )
        else:
            self.particle_container_height = max(
                self.particle_container_height + max(height_change, -MAX_PER_TICK_CONTAINER_SHRINKAGE),
                self.min_allowable_container_height
            )
        self._notify("container_size_changed")

    def _adjust_temperature_set_point(self) -> None:
        self.temp_adjust_tick_counter += 1
        if self.temp_adjust_tick_counter < TICKS_PER_TEMP_ADJUSTMENT or self.heating_cooling_amount == 0:
            return

        self.temp_adjust_tick_counter = 0
        new_temperature = self.temperature_set_point + self.heating_cooling_amount
        if new_temperature >= MAX_TEMPERATURE:
            new_temperature = MAX_TEMPERATURE
        elif new_temperature <= SOLID_TEMPERATURE * 0.9 and self.heating_cooling_amount < 0:
            # Slow the approach to absolute zero.
            new_temperature = max(self.temperature_set_point * 0.95, self.min_model_temperature)
        elif new_temperature <= self.min_model_temperature:
            new_temperature = self.min_model_temperature

        self.temperature_set_point = new_temperature
        self.strategies.isokinetic_thermostat.set_target_temperature(new_temperature)
        self.strategies.andersen_thermostat.set_target_temperature(new_temperature)
        self._notify("temperature_changed")

    def run_thermostat(self) -> None:
        """
        Run at most one thermostat for this sub-step.

        While the lid is moving and molecules are up near it, the lid is
        doing work on them, so the set-point follows the measured
        temperature instead of fighting it.
        """
        if self.is_exploded:
            return

        calculated_temperature = self.strategies.verlet.temperature
        temperature_is_changing = (
            self.heating_cooling_amount != 0
            or self.temperature_set_point + TEMPERATURE_CLOSENESS_RANGE < calculated_temperature
            or self.temperature_set_point - TEMPERATURE_CLOSENESS_RANGE > calculated_temperature
        )

        thermostat_type = self.thermostat_type
        if self.height_change_counter != 0 and self.particles_near_top():
            self.set_temperature(self.molecule_data_set.calculate_temperature_from_kinetic_energy())
        elif (thermostat_type is ThermostatType.ISOKINETIC
              or (thermostat_type is ThermostatType.ADAPTIVE
                  and (temperature_is_changing or self.temperature_set_point > LIQUID_TEMPERATURE))):
            self.strategies.isokinetic_thermostat.adjust_temperature()
        elif (thermostat_type is ThermostatType.ANDERSEN
              or (thermostat_type is ThermostatType.ADAPTIVE and not temperature_is_changing)):
            self.strategies.andersen_thermostat.adjust_temperature()

    # ------------------------------------------------------------------
    # Explosion and injection
    # ------------------------------------------------------------------

    def explode_container(self) -> None:
        """Blow the lid off. Walls and thermostats stop acting."""
        if self.is_exploded:
            return
        self.is_exploded = True
        logger.info("Container exploded at height %.1f pm", self.particle_container_height)
        self._notify("container_exploded_state_changed")

    def return_lid(self) -> None:
        """
        Put the lid back after an explosion.

        Molecules that escaped the nominal container are removed and the
        rest are re-initialized as a gas, since what is left still carries
        the energy of the explosion.
        """
        if not self.is_exploded:
            logger.warning("Lid returned on a container that has not exploded")
            return

        data_set = self.molecule_data_set
        positions = data_set.molecule_center_of_mass_positions
        nominal_height = PARTICLE_CONTAINER_INITIAL_HEIGHT / self.particle_diameter
        outside = np.flatnonzero(
            (positions[:, 0] < 0) | (positions[:, 0] > self.normalized_container_width)
            | (positions[:, 1] < 0) | (positions[:, 1] > nominal_height)
        )
        for index in outside[::-1]:
            data_set.remove_molecule(int(index))
        logger.info("Lid returned, %d escaped molecules removed", len(outside))

        self.is_exploded = False
        self._reset_container_size()
        self._notify("container_exploded_state_changed")
        self.set_phase(Phase.GAS)

    def inject_molecule(self) -> bool:
        """
        Fire a new molecule in from the right side of the container.

        Speed and direction are drawn from fixed ranges, aimed roughly to
        the left.

        Returns:
            True if a molecule was added, False if the data set is full
        """
        data_set = self.molecule_data_set
        injection_x = self.normalized_container_width * INJECTION_POINT_HORIZ_PROPORTION
        injection_y = self.normalized_container_height * INJECTION_POINT_VERT_PROPORTION
        if data_set.get_number_of_remaining_slots() == 0:
            logger.debug("No room to inject another molecule")
            return False

        angle = np.pi + (self.rng.random() - 0.5) * MAX_INJECTED_MOLECULE_ANGLE
        speed = (MIN_INJECTED_MOLECULE_VELOCITY
                 + self.rng.random() * (MAX_INJECTED_MOLECULE_VELOCITY - MIN_INJECTED_MOLECULE_VELOCITY))
        velocity = (np.cos(angle) * speed, np.sin(angle) * speed)
        rotation_rate = (self.rng.random() - 0.5) * (np.pi / 2)

        atom_positions = np.zeros((data_set.atoms_per_molecule, 2))
        data_set.add_molecule(atom_positions, (injection_x, injection_y), velocity, rotation_rate)
        self.strategies.position_updater.update_atom_positions(data_set)

        self._calculate_min_allowable_container_height()
        self.sync_particle_positions()
        return True

    # ------------------------------------------------------------------
    # Display surface
    # ------------------------------------------------------------------

    def sync_particle_positions(self) -> None:
        """Copy normalized atom positions out to the display particles in picometers."""
        data_set = self.molecule_data_set
        if len(self.particles) != data_set.number_of_atoms:
            self.particles = list(self.molecule_type.atoms) * data_set.number_of_molecules
        self.particle_positions = data_set.atom_positions * self.particle_diameter
        self._notify("particles_changed")

    def snapshot(self) -> ModelSnapshot:
        """Immutable copy of the state for a display to render."""
        return ModelSnapshot(
            atom_positions=self.particle_positions.copy(),
            atom_radii=np.array([particle.radius for particle in self.particles]),
            container_width=PARTICLE_CONTAINER_WIDTH,
            container_height=self.particle_container_height,
            temperature_in_kelvin=self.get_temperature_in_kelvin(),
            pressure_in_atmospheres=self.get_pressure_in_atmospheres(),
            model_temperature=self.temperature_set_point,
            model_pressure=self.get_model_pressure(),
            molecule_type=self.molecule_type,
            is_exploded=self.is_exploded,
        )

    def add_listener(self, listener: ModelListener) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: ModelListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _notify(self, event: str) -> None:
        for listener in self.listeners:
            getattr(listener, event)(self)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Back to the configured species as a solid at the initial temperature."""
        self.thermostat_type = _coerce_thermostat_type(self.config.thermostat_type)
        self._initialize_model_parameters()
        self.set_molecule_type(self.config.molecule_type)
