#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Model Listeners and Snapshots
================================================================================

Project:        States of Matter Engine
Module:         observers.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

The model's outward-facing surface for displays. Listeners are told when
something a display cares about has changed, and snapshots are immutable
copies of the state taken between steps. Neither feeds back into the
physics.
"""

from dataclasses import dataclass

import numpy as np

from .particles import MoleculeType


class ModelListener:
    """
    Receives notifications from a SimulationModel.

    Every hook is a no-op, so subclasses override only what they need.
    """

    def temperature_changed(self, model) -> None:
        pass

    def pressure_changed(self, model) -> None:
        pass

    def container_size_changed(self, model) -> None:
        pass

    def container_exploded_state_changed(self, model) -> None:
        pass

    def molecule_type_changed(self, model) -> None:
        pass

    def interaction_strength_changed(self, model) -> None:
        pass

    def particles_changed(self, model) -> None:
        pass


@dataclass(frozen=True)
class ModelSnapshot:
    """Read-only copy of everything a display needs after a step."""
    atom_positions: np.ndarray      # picometers, one row per atom
    atom_radii: np.ndarray          # picometers
    container_width: float          # picometers
    container_height: float         # picometers
    temperature_in_kelvin: float
    pressure_in_atmospheres: float
    model_temperature: float
    model_pressure: float
    molecule_type: MoleculeType
    is_exploded: bool

    @property
    def n_atoms(self) -> int:
        return self.atom_positions.shape[0]
