from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration merging
(defaults, JSON file, CLI overrides), logging bootstrap, script
execution against a fresh FileSystemManager, and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from memfs.core.manager import FileSystemManager
from memfs.core.validator import validate_config
from memfs.domain.config import load_config
from memfs.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from memfs.interface.cli import args as cli_args
from memfs.interface.cli.commands import (
    DEMO_SCRIPT,
    CommandSyntaxError,
    execute,
    parse_script,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (defaults < file < CLI flags)
    raw_conf = load_config(args.config_path)
    raw_conf.update(cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap
    configure_logging(
        LoggingConfig.from_settings(clean_conf),
        force=True,
    )
    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")
        return _run(args, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()


def _run(args: Any, conf: Dict[str, Any]) -> int:
    """Load the requested script, execute it and render the outcome."""
    if args.command == "demo":
        script = DEMO_SCRIPT
    else:
        script = _read_script(args.script)
        if script is None:
            return EXIT_USAGE

    try:
        commands = parse_script(script)
    except CommandSyntaxError as e:
        logger.error(f"Invalid script: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    manager = FileSystemManager(conf)
    logger.debug(f"Executing {len(commands)} command(s) with tracker '{manager.tracker_strategy}'")

    if args.json_output:
        report = execute(manager, commands)
        print(json.dumps(asdict(report), ensure_ascii=False, indent=2))
    else:
        report = execute(manager, commands, out=sys.stdout, err=sys.stderr)

    # Failures are part of the demonstration itself
    if args.command == "demo":
        return EXIT_OK
    return EXIT_OK if report.ok else EXIT_FAILURES

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _read_script(path: str) -> Optional[str]:
    """Read a script from a file or stdin, reporting I/O errors."""
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        logger.error(f"Cannot read script '{path}': {e}")
        print(f"ERROR: cannot read script '{path}': {e}", file=sys.stderr)
        return None

