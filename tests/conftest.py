#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Shared Test Fixtures
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest


class ContainerContext:
    """
    Minimal stand-in for SimulationModel: just the container geometry and
    environment that the calculators and phase changers read.
    """

    def __init__(self, width: float = 30.0, height: float = 30.0):
        self.normalized_container_width = width
        self.normalized_container_height = height
        self.is_exploded = False
        self.gravitational_acceleration = 0.0
        self.temperature_set_point = 0.5
        self.explosions = 0

    def explode_container(self):
        self.is_exploded = True
        self.explosions += 1


@pytest.fixture
def container():
    return ContainerContext()


@pytest.fixture
def rng():
    return np.random.default_rng(42)
