from __future__ import annotations

"""
Domain Constants.

Centralizes the limits, reserved names and policy identifiers shared by
the node model, the manager and the configuration layer.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# NODE LIMITS
# -----------------------------------------------------------------------------

MAX_NAME_LENGTH = 32
ROOT_NAME = "root"

# -----------------------------------------------------------------------------
# POLICIES AND STRATEGIES
# -----------------------------------------------------------------------------

SIZE_POLICY_POSITIVE = "positive"
SIZE_POLICY_NON_NEGATIVE = "non_negative"
SIZE_POLICIES: Tuple[str, ...] = (SIZE_POLICY_POSITIVE, SIZE_POLICY_NON_NEGATIVE)

TRACKER_HEAP = "heap"
TRACKER_POINTER = "pointer"
TRACKER_STRATEGIES: Tuple[str, ...] = (TRACKER_HEAP, TRACKER_POINTER)

RENDER_STYLE_INDENT = "indent"
RENDER_STYLE_ASCII = "ascii"
RENDER_STYLES: Tuple[str, ...] = (RENDER_STYLE_INDENT, RENDER_STYLE_ASCII)

DEFAULT_INDENT_WIDTH = 3

# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------

LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_MAX_BYTES = 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 3
