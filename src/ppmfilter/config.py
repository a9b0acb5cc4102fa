"""Defaults for the filter executables and the benchmark driver.

PPMFILTER_KERNEL and PPMFILTER_LOG_LEVEL override the defaults from the
environment; command-line flags override both.
"""

import logging
import os

DEFAULT_KERNEL = os.getenv("PPMFILTER_KERNEL", "edge-detect")
DEFAULT_THREADS = 1
DEFAULT_RUNS = 1

LOG_LEVEL = os.getenv("PPMFILTER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Runs closer than this (seconds) count as a tie.
TIE_THRESHOLD = 1e-6


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stderr with the shared format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
