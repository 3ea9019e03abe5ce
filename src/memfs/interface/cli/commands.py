from __future__ import annotations

"""
CLI Command Scripts.

Parses the line-oriented command language understood by 'memfs run' and
executes it against a FileSystemManager. A failing command is reported
and execution moves on to the next line, the way the demonstration
driver reports each failure kind without aborting.

Grammar (one command per line; a '#' at the start of an unquoted word
begins a comment, so names such as 'a#b' need no quoting):

    mkdir PARENT NAME
    touch PARENT NAME SIZE
    rm NAME
    size NAME
    biggest
    show
    check
"""

import logging
import shlex
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from memfs.core.manager import FileSystemManager
from memfs.domain.errors import FileSystemError

logger = logging.getLogger(__name__)

# Command name -> expected argument count
_ARITY: Dict[str, int] = {
    "mkdir": 2,
    "touch": 3,
    "rm": 1,
    "size": 1,
    "biggest": 0,
    "show": 0,
    "check": 0,
}

# The classic walkthrough, including the three expected failures
DEMO_SCRIPT = """\
# Build the sample tree
mkdir root Documents
mkdir root Pictures
mkdir Documents Work
touch Documents resume.docx 500
touch Documents budget.xlsx 1200
touch Pictures vacation.jpg 6400
touch Pictures profile_pic.jpg 3000
touch Work project.docx 800
show
biggest

# Delete the largest file
rm vacation.jpg
show
biggest

# Each of these is rejected
rm non_existent_file.txt
touch Documents resume.docx 300
touch NonExistentDir newfile.txt 100

# Delete a directory with its contents
rm Work
show
size project.docx
check
"""


class CommandSyntaxError(ValueError):
    """A script line cannot be parsed into a command."""

    def __init__(self, message: str, line_no: int) -> None:
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


@dataclass(frozen=True)
class Command:
    """A parsed script command."""
    name: str
    args: Tuple[str, ...]
    line_no: int

    def __str__(self) -> str:
        return " ".join((self.name,) + self.args)


@dataclass
class ExecutionReport:
    """
    Outcome of running a script.

    Attributes:
        executed: Commands that completed successfully.
        failed: Commands rejected by the filesystem.
        errors: One message per failed command.
        outputs: Lines produced by successful commands.
    """
    executed: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0


# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def parse_script(text: str) -> List[Command]:
    """
    Parse a whole script into commands.

    Raises:
        CommandSyntaxError: On an unknown command, a wrong argument count,
            an unbalanced quote or a non-integer size.
    """
    commands: List[Command] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = shlex.split(_strip_comment(raw))
        except ValueError as e:
            raise CommandSyntaxError(str(e), line_no) from e
        if not tokens:
            continue

        name, args = tokens[0].lower(), tuple(tokens[1:])
        if name not in _ARITY:
            raise CommandSyntaxError(f"unknown command '{tokens[0]}'", line_no)
        if len(args) != _ARITY[name]:
            raise CommandSyntaxError(
                f"'{name}' expects {_ARITY[name]} argument(s), got {len(args)}", line_no
            )
        if name == "touch":
            _parse_size(args[2], line_no)

        commands.append(Command(name=name, args=args, line_no=line_no))
    return commands


def _strip_comment(raw: str) -> str:
    """
    Cut a trailing comment from a script line.

    shlex treats every '#' as a comment, even inside a word. Here only a
    '#' that opens an unquoted word counts, following POSIX shell rules.
    """
    quote: Optional[str] = None
    escaped = False
    prev_blank = True
    for i, ch in enumerate(raw):
        blank = False
        if escaped:
            escaped = False
        elif ch == "\\" and quote != "'":
            escaped = True
        elif quote is not None:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "#" and prev_blank:
            return raw[:i]
        else:
            blank = ch.isspace()
        prev_blank = blank
    return raw


def _parse_size(raw: str, line_no: int) -> int:
    try:
        return int(raw)
    except ValueError:
        raise CommandSyntaxError(f"size must be an integer, got '{raw}'", line_no) from None


# -----------------------------------------------------------------------------
# EXECUTION
# -----------------------------------------------------------------------------

def execute(
        manager: FileSystemManager,
        commands: List[Command],
        *,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
) -> ExecutionReport:
    """
    Run commands in order, collecting output and per-command failures.

    Args:
        manager: Target filesystem.
        commands: Parsed commands.
        out: Optional stream receiving output lines as they are produced.
        err: Optional stream receiving 'Error: ...' lines.

    Returns:
        ExecutionReport: Counters, error messages and output lines.
    """
    report = ExecutionReport()

    for command in commands:
        handler = _HANDLERS[command.name]
        try:
            lines = handler(manager, command.args)
        except FileSystemError as e:
            report.failed += 1
            report.errors.append(f"line {command.line_no}: {e}")
            logger.debug(f"Command '{command}' failed: {type(e).__name__}: {e}")
            if err is not None:
                print(f"Error: {e}", file=err)
            continue

        report.executed += 1
        report.outputs.extend(lines)
        if out is not None:
            for line in lines:
                print(line, file=out)

    logger.info(f"Script finished: {report.executed} succeeded, {report.failed} failed")
    return report


def _do_mkdir(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    manager.add_directory(args[0], args[1])
    return []


def _do_touch(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    manager.add_file(args[0], args[1], int(args[2]))
    return []


def _do_rm(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    removed = manager.delete(args[0])
    return [f"Deleted '{args[0]}' ({removed} node(s))"]


def _do_size(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    return [f"{args[0]}: {manager.get_file_size(args[0])} bytes"]


def _do_biggest(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    return [f"Biggest File: {manager.get_biggest_file()}"]


def _do_show(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    return list(manager.show_filesystem())


def _do_check(manager: FileSystemManager, args: Tuple[str, ...]) -> List[str]:
    manager.check_consistency()
    return ["Consistency check passed"]


_HANDLERS: Dict[str, Callable[[FileSystemManager, Tuple[str, ...]], List[str]]] = {
    "mkdir": _do_mkdir,
    "touch": _do_touch,
    "rm": _do_rm,
    "size": _do_size,
    "biggest": _do_biggest,
    "show": _do_show,
    "check": _do_check,
}
