#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Model Constants
================================================================================

Project:        States of Matter Engine
Module:         constants.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Constants shared by the data set, the force calculators and the model.

Lengths of the container are in picometers. Everything inside the data set is
in normalized units, i.e. divided by the particle diameter of the current
species, and temperatures/pressures are dimensionless model values.
"""

import math

# Container geometry (picometers)
PARTICLE_CONTAINER_WIDTH = 10000.0
PARTICLE_CONTAINER_INITIAL_HEIGHT = 10000.0

# Capacity of the molecule data set
MAX_NUM_ATOMS = 500

# Internal model temperatures for the phases of matter
SOLID_TEMPERATURE = 0.15
LIQUID_TEMPERATURE = 0.34
GAS_TEMPERATURE = 1.0

MIN_TEMPERATURE = 0.0001
MAX_TEMPERATURE = 50.0
INITIAL_TEMPERATURE = SOLID_TEMPERATURE

# Anchors for mapping model temperature onto Kelvin (empirically determined)
TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE = 0.26
CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE = 0.8

# Verlet integration
TIME_STEP = 0.020
TIME_STEP_SQR_HALF = TIME_STEP * TIME_STEP * 0.5
TIME_STEP_HALF = TIME_STEP / 2
PARTICLE_INTERACTION_DISTANCE_THRESH_SQRD = 6.25
PRESSURE_CALC_WEIGHTING = 0.999
WALL_DISTANCE_THRESHOLD = 2.0 ** (1.0 / 6.0)
MIN_WALL_DISTANCE = WALL_DISTANCE_THRESHOLD * 0.8
SAFE_INTER_MOLECULE_DISTANCE = 2.0
MIN_DISTANCE_SQUARED = 0.7225
EXPLOSION_PRESSURE = 1.05

# Shift that makes the truncated LJ potential zero at the cutoff radius
POTENTIAL_ENERGY_CUTOFF_SHIFT = 0.016316891136

# Gravity is boosted near absolute zero so the thermostat doesn't make
# falling atoms look like they're drifting through syrup.
TEMPERATURE_BELOW_WHICH_GRAVITY_INCREASES = 0.10
LOW_TEMPERATURE_GRAVITY_INCREASE_RATE = 50.0
INITIAL_GRAVITATIONAL_ACCEL = 0.045
MAX_GRAVITATIONAL_ACCEL = 0.4

# Molecule geometry (normalized units)
DIATOMIC_PARTICLE_DISTANCE = 0.9
WATER_OXYGEN_HYDROGEN_DISTANCE = 1.0 / 3.12
WATER_HYDROGEN_ANGLE = 120.0 * math.pi / 180.0
WATER_HYDROGEN_MASS_FRACTION = 0.25

# Water charge interaction strength, interpolated by temperature
WATER_FULLY_MELTED_TEMPERATURE = 0.3
WATER_FULLY_MELTED_ELECTROSTATIC_FORCE = 1.0
WATER_FULLY_FROZEN_TEMPERATURE = 0.22
WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE = 4.0
WATER_MIN_CHARGE_DISTANCE_SQUARED = 0.25
MAX_ROTATION_RATE = 16.0

# Interaction strength of the user-defined atom (Kelvin)
MIN_EPSILON = 2.0
MAX_EPSILON = 450.0

# Heating / cooling
MAX_TEMPERATURE_CHANGE_PER_ADJUSTMENT = 0.025
TICKS_PER_TEMP_ADJUSTMENT = 10
VERLET_CALCULATIONS_PER_CLOCK_TICK = 8

# Molecule injection
MIN_INJECTED_MOLECULE_VELOCITY = 0.5
MAX_INJECTED_MOLECULE_VELOCITY = 2.0
MAX_INJECTED_MOLECULE_ANGLE = math.pi * 0.8
INJECTION_POINT_HORIZ_PROPORTION = 0.95
INJECTION_POINT_VERT_PROPORTION = 0.5

# Container size changes (picometers per tick)
MAX_PER_TICK_CONTAINER_SHRINKAGE = 50.0
MAX_PER_TICK_CONTAINER_EXPANSION = 200.0
CONTAINER_SIZE_CHANGE_RESET_COUNT = 25
EXPLODED_CONTAINER_HEIGHT_MULTIPLIER = 10.0

# Thermostat selection
TEMPERATURE_CLOSENESS_RANGE = 0.15
PARTICLE_EDGE_PROXIMITY_RANGE = 2.5
ANDERSEN_COLLISION_PROBABILITY = 0.01

# Phase initialization
MAX_PLACEMENT_ATTEMPTS = 500
MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE = 2.5
