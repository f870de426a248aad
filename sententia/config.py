"""
Engine configuration.

Defaults suit interactive use. Each field can be overridden from the
environment (``SENTENTIA_INCREMENTAL_RADIUS=3`` and so on) so that the CLI
and embedding applications share one switchboard.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class EngineConfig:
    """Orchestrator settings."""

    # Words on either side of a changed word that an incremental run revisits
    incremental_radius: int = 5

    # Full passes over the table before a run gives up converging
    max_rounds: int = 5

    # Record a RunTrace for every run
    trace_runs: bool = True

    # Report per-pass progress of bulk runs at INFO level
    log_progress: bool = False

    log_file: Optional[str] = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ=None) -> 'EngineConfig':
        """Build a config from ``SENTENTIA_*`` environment variables."""
        environ = os.environ if environ is None else environ
        config = cls()

        for name, attr in (("SENTENTIA_INCREMENTAL_RADIUS", "incremental_radius"),
                           ("SENTENTIA_MAX_ROUNDS", "max_rounds")):
            value = environ.get(name)
            if value is None:
                continue
            try:
                setattr(config, attr, max(int(value), 1))
            except ValueError:
                logger.warning("Ignoring %s=%r: not an integer", name, value)

        for name, attr in (("SENTENTIA_TRACE", "trace_runs"),
                           ("SENTENTIA_PROGRESS", "log_progress"),
                           ("SENTENTIA_DEBUG", "debug")):
            value = environ.get(name)
            if value is not None:
                setattr(config, attr, value.strip().lower() in _TRUE_VALUES)

        config.log_file = environ.get("SENTENTIA_LOG_FILE") or config.log_file
        return config
