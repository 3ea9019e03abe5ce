from __future__ import annotations

"""
Logging Settings.

Bridges the validated runtime configuration (its ``log_*`` keys) and the
logging subsystem. Level, destination and rotation come from the runtime
configuration; record layouts are fixed for every memfs process.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from memfs.domain.config import get_default_config
from memfs.domain.constants import LOG_LEVELS

_DEFAULTS = get_default_config()

_LEVEL_MAP: Dict[str, int] = {name: getattr(logging, name) for name in LOG_LEVELS}

CONSOLE_FORMAT = "memfs %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Resolved logging settings for one process.

    Attributes:
        level: Level name, one of LOG_LEVELS (unknown names fall back to INFO).
        console: Mirror records to stderr.
        log_file: Rotating log file path, or None for no file.
        max_bytes: Segment size that triggers rotation.
        backup_count: Rotated segments kept next to the live file.
    """
    level: str = _DEFAULTS["log_level"]
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = _DEFAULTS["log_max_bytes"]
    backup_count: int = _DEFAULTS["log_backup_count"]

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], *, console: bool = True) -> LoggingConfig:
        """Build from a configuration dict already passed through validate_config."""
        return cls(
            level=settings["log_level"],
            console=console,
            log_file=settings["log_file"] or None,
            max_bytes=settings["log_max_bytes"],
            backup_count=settings["log_backup_count"],
        )
