from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into settings overrides. Everything after the first positional
argument belongs to the target command and is passed through untouched.
"""

import argparse
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from json_env.domain.constants import APP_NAME, APP_VERSION

# Options consuming the next argument, and those whose value is optional
_VALUE_OPTIONS = ("-f", "--file", "-p", "--path", "--shell", "--log-file")
_OPTIONAL_VALUE_OPTIONS = ("--allow", "--install-hook")
_SHORT_VALUE_FLAGS = "fp"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

class JsonEnvArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that can exit on usage errors without printing anything."""

    def __init__(self, *args: Any, quiet: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.quiet = quiet

    def error(self, message: str) -> NoReturn:
        if self.quiet:
            self.exit(2)
        super().error(message)


def build_parser(quiet: bool = False) -> argparse.ArgumentParser:
    """
    Construct the argument parser for the json_env CLI.

    Args:
        quiet: Exit with status 2 on usage errors without printing usage.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = JsonEnvArgumentParser(
        quiet=quiet,
        prog=APP_NAME,
        description=(
            "Read environment variables from JSON config files and run a "
            "program with them. Without --file, the nearest .env.json in the "
            "current directory or one of its parents is used."
        ),
        epilog="Example: json_env -f base.json -f local.json -p '$.dev' node server.js",
    )

    # --- Sources ---
    p.add_argument(
        "-f", "--file",
        dest="files",
        action="append",
        default=None,
        metavar="FILE",
        help="Config file to read. Repeat to layer files; later files win.",
    )
    p.add_argument(
        "-p", "--path",
        dest="paths",
        action="append",
        default=None,
        metavar="EXPR",
        help="JSONPath expression selecting the object to read (default: '$').",
    )
    p.add_argument(
        "-e", "--expand",
        action="store_true",
        help="Replace $NAME references in values with the current environment.",
    )

    # --- Modes ---
    p.add_argument(
        "--export",
        action="store_true",
        help="Print export statements instead of running a program (trusted files only).",
    )
    p.add_argument(
        "--shell",
        default=None,
        help="Shell dialect for --export and --install-hook (default: from $SHELL).",
    )
    p.add_argument(
        "--list",
        dest="list_only",
        action="store_true",
        help="Print the resolved KEY=value pairs and exit.",
    )
    p.add_argument(
        "--allow",
        dest="allow_file",
        nargs="?",
        const="",
        default=None,
        metavar="FILE",
        help="Trust FILE (default: the located config file) for automatic export.",
    )
    p.add_argument(
        "--install-hook",
        dest="install_hook",
        nargs="?",
        const="",
        default=None,
        metavar="SHELL",
        help="Append the directory-change hook to the shell profile.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "-s", "--silent",
        action="store_true",
        help="Suppress diagnostics; failures still exit non-zero.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted settings file.",
    )
    p.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings as JSON and exit.",
    )
    p.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the effective settings (including --expand, --debug, --log-file) and exit.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Target command ---
    p.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Program to run, followed by its arguments.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into settings overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Settings overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.expand:
        overrides["expand"] = True
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides


def command_line(args: argparse.Namespace) -> List[str]:
    """Return the target command and its arguments, without a leading '--'."""
    cmd = list(args.command or [])
    if cmd and cmd[0] == "--":
        cmd = cmd[1:]
    return cmd


def silent_requested(argv: Optional[Sequence[str]]) -> bool:
    """
    Tell whether -s/--silent is among json_env's own options in argv.

    Scans only up to the target command, without running the full parser, so
    callers can decide how to report before (or after) parsing fails.
    """
    items = list(argv or [])
    i = 0
    while i < len(items):
        arg = items[i]
        i += 1
        if arg in ("-s", "--silent"):
            return True
        if arg == "--" or arg == "-" or not arg.startswith("-"):
            return False
        if "=" in arg or arg.startswith("--"):
            if arg in _VALUE_OPTIONS:
                i += 1
            elif arg in _OPTIONAL_VALUE_OPTIONS and i < len(items) and not items[i].startswith("-"):
                i += 1
            continue

        # Clustered short flags, e.g. '-es' or '-sf FILE'
        for pos, flag in enumerate(arg[1:], start=1):
            if flag == "s":
                return True
            if flag in _SHORT_VALUE_FLAGS:
                if pos == len(arg) - 1:
                    i += 1
                break
    return False
