"""Runtime defaults sourced from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_SEED = int(os.environ.get("ADAPTIVE_TRIAL_SEED", "123"))
DEFAULT_SIMULATIONS = int(os.environ.get("ADAPTIVE_TRIAL_SIMULATIONS", "100000"))
DEFAULT_CHUNK_SIZE = int(os.environ.get("ADAPTIVE_TRIAL_CHUNK_SIZE", "10000"))
DEFAULT_WORKERS = int(os.environ.get("ADAPTIVE_TRIAL_WORKERS", "1"))
OUTPUT_ROOT = Path(os.environ.get("ADAPTIVE_TRIAL_OUTPUT_DIR", "output"))
LOG_LEVEL = os.environ.get("ADAPTIVE_TRIAL_LOG_LEVEL", "WARNING").upper()

__all__ = [
    "DEFAULT_SEED",
    "DEFAULT_SIMULATIONS",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_WORKERS",
    "OUTPUT_ROOT",
    "LOG_LEVEL",
]
