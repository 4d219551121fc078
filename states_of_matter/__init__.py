#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
States of Matter Engine
================================================================================

Project:        States of Matter Engine
Description:    2D molecular dynamics of atoms and small molecules in a
                resizable container, for exploring solids, liquids and gases

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

This package implements a molecular dynamics engine featuring:
- Lennard-Jones interactions between neon, argon, oxygen, water or a
  user-defined atom
- Velocity Verlet integration compiled with Numba
- Isokinetic and Andersen thermostats with an adaptive selection policy
- Solid, liquid and gas starting configurations
- Container compression, injection of new molecules and explosion

Modules:
    - particles: Atom records and molecule species
    - dataset: Molecule positions, velocities, forces and rotations
    - physics: Wall and Lennard-Jones force kernels
    - verlet: Force and motion calculators
    - positions: Atom placement from molecule orientation
    - phase_changer: Solid, liquid and gas initialization
    - thermostats: Temperature control
    - thermodynamics: Phases, unit conversion and order parameters
    - model: The simulation model that ties it all together
    - visualization: Matplotlib rendering of snapshots
"""

__version__ = "1.0.0"
__author__ = "Ryan Kamp"
