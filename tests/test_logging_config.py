#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Logging Configuration Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
License:        MIT License
================================================================================
"""

import logging

import pytest
from states_of_matter.logging_config import setup_logging


class TestSetupLogging:
    """Tests for the package logger setup."""

    def test_level_and_handler(self):
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "states_of_matter"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_duplicate(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(logging.INFO, str(log_file))
        logging.getLogger("states_of_matter.model").info("container exploded")
        for handler in logger.handlers:
            handler.flush()

        assert "container exploded" in log_file.read_text(encoding="utf-8")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
