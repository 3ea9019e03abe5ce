from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by memfs.domain.config.
"""

import argparse
from typing import Any, Dict

from memfs.domain.constants import RENDER_STYLES, SIZE_POLICIES, TRACKER_STRATEGIES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the memfs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="memfs",
        description="In-memory filesystem simulator with name index and largest-file tracking.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (defaults to $MEMFS_CONFIG).",
    )

    # --- Filesystem Behaviour ---
    p.add_argument(
        "--tracker",
        dest="tracker_strategy",
        choices=TRACKER_STRATEGIES,
        default=None,
        help="Largest-file tracking strategy.",
    )
    p.add_argument(
        "--size-policy",
        dest="size_policy",
        choices=SIZE_POLICIES,
        default=None,
        help="Whether zero-byte files are accepted.",
    )

    # --- Rendering ---
    p.add_argument(
        "--style",
        dest="render_style",
        choices=RENDER_STYLES,
        default=None,
        help="Tree rendering layout for 'show'.",
    )
    p.add_argument(
        "--indent",
        dest="indent_width",
        type=int,
        default=None,
        help="Spaces per depth level in the indent layout.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print a JSON summary instead of human-readable output.",
    )

    # --- Actions ---
    sub = p.add_subparsers(dest="command", metavar="{demo,run}")
    sub.required = True

    sub.add_parser("demo", help="Run the built-in demonstration scenario.")

    run_p = sub.add_parser("run", help="Execute a command script.")
    run_p.add_argument("script", help="Path to the script, or '-' for stdin.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only flags the user actually passed produce an override.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("tracker_strategy", "size_policy", "render_style", "indent_width", "log_file"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
