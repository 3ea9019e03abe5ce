from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Defaults injection for missing keys.
2. Lenient coercion and fallback with warnings.
3. Strict mode raising on invalid values.
"""

import pytest

from memfs.core.validator import validate_config
from memfs.domain.config import get_default_config


def test_empty_config_yields_defaults():
    clean, warnings = validate_config({})
    assert clean == get_default_config()
    assert warnings == []


def test_non_dict_falls_back_to_defaults():
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean == get_default_config()
    assert len(warnings) == 1


def test_non_dict_raises_in_strict_mode():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_choices_are_case_insensitive():
    clean, warnings = validate_config({"tracker_strategy": " Pointer ", "size_policy": "NON_NEGATIVE"})
    assert clean["tracker_strategy"] == "pointer"
    assert clean["size_policy"] == "non_negative"
    assert warnings == []


def test_invalid_choice_falls_back_with_warning():
    clean, warnings = validate_config({"tracker_strategy": "btree"})
    assert clean["tracker_strategy"] == "heap"
    assert any("tracker_strategy" in w for w in warnings)


def test_invalid_choice_raises_in_strict_mode():
    with pytest.raises(ValueError):
        validate_config({"render_style": "fancy"}, strict=True)


def test_indent_width_coercion():
    clean, warnings = validate_config({"indent_width": "4"})
    assert clean["indent_width"] == 4
    assert warnings

    clean, warnings = validate_config({"indent_width": -2})
    assert clean["indent_width"] == 3
    assert warnings

    clean, _ = validate_config({"indent_width": True})
    assert clean["indent_width"] == 3


def test_unknown_keys_are_dropped():
    clean, warnings = validate_config({"colour": "blue"})
    assert "colour" not in clean
    assert any("colour" in w for w in warnings)

    with pytest.raises(ValueError):
        validate_config({"colour": "blue"}, strict=True)


def test_log_settings():
    clean, _ = validate_config({"log_level": "debug", "log_file": " /tmp/x.log "})
    assert clean["log_level"] == "DEBUG"
    assert clean["log_file"] == "/tmp/x.log"


def test_log_rotation_settings():
    clean, warnings = validate_config({"log_max_bytes": "2048", "log_backup_count": -1})
    assert clean["log_max_bytes"] == 2048
    assert clean["log_backup_count"] == 3
    assert len(warnings) == 2

    with pytest.raises(ValueError):
        validate_config({"log_max_bytes": 0}, strict=True)
