from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (JSON file, CLI flags) and
the manager. Coerces recoverable values, falls back to defaults for the
rest, and reports every adjustment as a warning.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from memfs.domain.config import get_default_config
from memfs.domain.constants import LOG_LEVELS, RENDER_STYLES, SIZE_POLICIES, TRACKER_STRATEGIES

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
                                          list of warnings produced.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a value outside its allowed set.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Unknown keys are kept out of the clean configuration
    for key in sorted(set(config) - set(defaults)):
        msg = f"Unknown config key '{key}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Ignored.")
        merged.pop(key)

    # 3. Field Processing & Normalization
    choice_fields = {
        "size_policy": SIZE_POLICIES,
        "tracker_strategy": TRACKER_STRATEGIES,
        "render_style": RENDER_STYLES,
    }
    for field, allowed in choice_fields.items():
        merged[field] = _as_choice(merged.get(field), allowed, defaults[field], field, warnings, strict)

    merged["indent_width"] = _as_int(
        merged.get("indent_width"), defaults["indent_width"], "indent_width", warnings, strict, minimum=0
    )
    merged["log_level"] = _as_choice(
        merged.get("log_level"), LOG_LEVELS, defaults["log_level"], "log_level", warnings, strict
    )
    merged["log_file"] = _as_str(merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict)
    merged["log_max_bytes"] = _as_int(
        merged.get("log_max_bytes"), defaults["log_max_bytes"], "log_max_bytes", warnings, strict, minimum=1
    )
    merged["log_backup_count"] = _as_int(
        merged.get("log_backup_count"), defaults["log_backup_count"], "log_backup_count", warnings, strict, minimum=0
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        allowed: Sequence[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Accept one of a fixed set of identifiers, case-insensitively."""
    if value is None:
        return fallback
    if not isinstance(value, str):
        msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    for option in allowed:
        if value.strip().lower() == option.lower():
            return option

    msg = f"Invalid field '{field}': '{value}' is not one of {', '.join(allowed)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        minimum: int = 0,
) -> int:
    """Coerce integer-like inputs, rejecting values below the minimum."""
    if value is None:
        return fallback

    result = None
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif isinstance(value, str) and not strict:
        try:
            result = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {result}.")
        except ValueError:
            result = None

    if result is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if result < minimum:
        msg = f"Invalid field '{field}': {result} is below {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return result
