from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: settings resolution (defaults, persistent
file, CLI overrides), logging bootstrap, source discovery, and routing to
one of the modes: run a program, export into the current shell, list,
trust a file, or install the shell hook.

The process environment is snapshotted once here and passed explicitly to
every service below.
"""

import json
import os
import sys
from typing import Any, Callable, Dict, List, Mapping, Optional

from json_env.core.pipeline.engine import resolve_environment
from json_env.core.pipeline.validator import validate_settings
from json_env.core.services import shells
from json_env.core.services.locator import locate
from json_env.core.services.spawner import build_child_env, spawn
from json_env.core.services.trust import TrustStore
from json_env.domain.config import get_default_settings, get_settings_path, load_settings, save_settings
from json_env.domain.constants import TRUST_STORE_FILE_NAME
from json_env.domain.errors import ConfigIOError, JsonEnvError, NotTrustedError, UsageError
from json_env.domain.models import ConfigSource, ResolutionResult, TrustResult, build_sources
from json_env.infra.fs import canonical_path, get_user_config_dir
from json_env.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from json_env.interface.cli import args as cli_args
from json_env.interface.cli.prompt import confirm as tty_confirm

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        *,
        cwd: Optional[str] = None,
        confirm: Callable[[str], bool] = tty_confirm,
) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].
        environ: Environment snapshot. Defaults to a copy of os.environ.
        cwd: Working directory used to locate config files.
        confirm: Yes/no prompt used before exporting an untrusted file.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase (usage errors stay quiet under --silent)
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = cli_args.build_parser(quiet=cli_args.silent_requested(argv))
    args = parser.parse_args(argv)

    env: Dict[str, str] = dict(os.environ if environ is None else environ)
    work_dir = os.path.abspath(cwd or os.getcwd())
    config_dir = get_user_config_dir(env)

    # 2. Resolve settings (Default vs Persistent state) and merge overrides
    base_settings = get_default_settings() if args.use_defaults else load_settings(config_dir)
    raw_settings = _merge_settings(base_settings, cli_args.args_to_overrides(args))
    settings, warnings = validate_settings(raw_settings, strict=False)

    # 3. Logging bootstrap (console on stderr, disabled in silent mode)
    configure_logging(
        LoggingConfig(
            level=settings["log_level"],
            console=not args.silent,
            log_file=settings["log_file"],
        ),
        force=True,
    )
    for w in warnings:
        logger.warning(f"Settings constraint: {w}")

    try:
        return _dispatch(parser, args, settings, env, work_dir, config_dir, confirm)
    except UsageError as e:
        logger.error(str(e))
        return EXIT_USAGE
    except JsonEnvError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# MODE ROUTING
# -----------------------------------------------------------------------------

def _dispatch(
        parser: Any,
        args: Any,
        settings: Dict[str, Any],
        env: Dict[str, str],
        work_dir: str,
        config_dir: str,
        confirm: Callable[[str], bool],
) -> int:
    if args.dump_settings:
        print(json.dumps(settings, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_settings:
        return _save_settings(settings, config_dir, args.silent)

    store = TrustStore(os.path.join(config_dir, TRUST_STORE_FILE_NAME))

    if args.install_hook is not None:
        return _install_hook(args, env)

    if args.allow_file is not None:
        target = args.allow_file or _locate_or_fail(work_dir, settings)
        return _allow(store, canonical_path(target, work_dir), args.silent)

    command = cli_args.command_line(args)
    if not (args.export or args.list_only or command):
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    sources = _build_sources(args, settings, work_dir)

    if args.export:
        _require_trust(store, sources, args.silent, confirm)
        result = _resolve(sources, env, settings)
        shell = shells.get_shell(args.shell) if args.shell else shells.detect_shell(env)
        sys.stdout.write(shells.render_exports(shell, result.environment))
        return EXIT_OK

    result = _resolve(sources, env, settings)

    if args.list_only:
        for key in sorted(result.environment):
            print(f"{key}={result.environment[key]}")
        return EXIT_OK

    child_env = build_child_env(env, result.environment)
    sys.stdout.flush()
    return spawn(command[0], command[1:], child_env)

# -----------------------------------------------------------------------------
# MODE IMPLEMENTATIONS
# -----------------------------------------------------------------------------

def _install_hook(args: Any, env: Mapping[str, str]) -> int:
    shell_name = args.install_hook or args.shell
    shell = shells.get_shell(shell_name) if shell_name else shells.detect_shell(env)
    home = env.get("HOME") or os.path.expanduser("~")

    try:
        written = shells.install_hook(shell, home)
    except OSError as e:
        raise JsonEnvError(
            f"Could not update shell profile: {e.strerror or e}.",
            file_path=shells.profile_path(shell, home),
        ) from e

    if not args.silent:
        path = shells.profile_path(shell, home)
        if written:
            print(f"Installed the {shell.name} hook in {path}. Open a new shell to activate it.")
        else:
            print(f"The {shell.name} hook is already installed in {path}.")
    return EXIT_OK


def _save_settings(settings: Dict[str, Any], config_dir: str, silent: bool) -> int:
    path = get_settings_path(config_dir)
    try:
        save_settings(settings, config_dir)
    except OSError as e:
        raise JsonEnvError(f"Could not save settings: {e}.", file_path=path) from e

    if not silent:
        print(f"Settings saved to {path}")
    return EXIT_OK


def _allow(store: TrustStore, path: str, silent: bool) -> int:
    if not os.path.isfile(path):
        raise ConfigIOError("Cannot trust a file that does not exist.", file_path=path)

    outcome = store.trust(path)
    if not silent:
        if outcome is TrustResult.ADDED:
            print(f"Trusted {path}")
        else:
            print(f"{path} is already trusted")
    return EXIT_OK


def _require_trust(
        store: TrustStore,
        sources: List[ConfigSource],
        silent: bool,
        confirm: Callable[[str], bool],
) -> None:
    """
    Refuse to export unless every source file is trusted.

    Outside silent mode the user may approve an untrusted file, which also
    records it in the trust store.
    """
    for path in dict.fromkeys(s.file_path for s in sources):
        if store.is_trusted(path):
            continue

        if not silent and confirm(f"json_env: {path} is not trusted. Trust it and export its variables?"):
            store.trust(path)
            continue

        raise NotTrustedError(
            "Refusing to export variables from an untrusted file. "
            "Run 'json_env --allow <file>' to trust it.",
            file_path=path,
        )


def _resolve(sources: List[ConfigSource], env: Mapping[str, str], settings: Dict[str, Any]) -> ResolutionResult:
    result = resolve_environment(sources, env, expand=bool(settings["expand"]))
    for entry in result.entries:
        logger.debug(f"{entry.key} <- {entry.source.describe()}")
    return result

# -----------------------------------------------------------------------------
# SOURCE DISCOVERY
# -----------------------------------------------------------------------------

def _build_sources(args: Any, settings: Dict[str, Any], work_dir: str) -> List[ConfigSource]:
    if args.files:
        files = [canonical_path(f, work_dir) for f in args.files]
    else:
        files = [canonical_path(_locate_or_fail(work_dir, settings))]
    return build_sources(files, args.paths, default_expression=settings["default_expression"])


def _locate_or_fail(work_dir: str, settings: Dict[str, Any]) -> str:
    file_name = settings["config_file_name"]
    found = locate(work_dir, file_name)
    if found is None:
        raise ConfigIOError(
            f"No {file_name} found in this directory or any parent directory.",
            file_path=os.path.join(work_dir, file_name),
        )
    return found

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base settings.

    Only known keys with a non-None value are merged.
    """
    out = dict(base)
    for k in ("expand", "log_level", "log_file"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
