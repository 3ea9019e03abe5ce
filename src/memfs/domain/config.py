from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loads user overrides from
an optional JSON file. Only the behaviour of the simulator is configured
here; the simulated tree itself is never persisted.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from memfs.domain.constants import (
    DEFAULT_INDENT_WIDTH,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_BYTES,
    RENDER_STYLE_INDENT,
    SIZE_POLICY_POSITIVE,
    TRACKER_HEAP,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_ENV_VAR = "MEMFS_CONFIG"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Node model
        "size_policy": SIZE_POLICY_POSITIVE,

        # Largest-file tracking
        "tracker_strategy": TRACKER_HEAP,

        # Rendering
        "render_style": RENDER_STYLE_INDENT,
        "indent_width": DEFAULT_INDENT_WIDTH,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": "",
        "log_max_bytes": DEFAULT_LOG_MAX_BYTES,
        "log_backup_count": DEFAULT_LOG_BACKUP_COUNT,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def resolve_config_path(path: Optional[str] = None) -> Optional[str]:
    """
    Pick the configuration file: explicit argument first, then MEMFS_CONFIG.
    """
    candidate = (path or os.environ.get(CONFIG_ENV_VAR) or "").strip()
    if not candidate:
        return None
    return os.path.abspath(os.path.expanduser(candidate))


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from disk, merged over the defaults.

    A missing or malformed file never aborts startup: the defaults are
    returned and the problem is logged.

    Args:
        path: Optional JSON file path. Falls back to $MEMFS_CONFIG.

    Returns:
        Dict[str, Any]: The merged (not yet validated) configuration.
    """
    config = get_default_config()
    config_file = resolve_config_path(path)

    if config_file is None:
        return config

    if not os.path.exists(config_file):
        logger.debug(f"Config file not found at {config_file}. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config from {config_file}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Config file {config_file} does not hold a JSON object. Using defaults.")
        return config

    config.update(data)
    logger.debug(f"Configuration loaded from {config_file}")
    return config
