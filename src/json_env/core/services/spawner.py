from __future__ import annotations

"""
Child Process Runner.

Starts the target command with the merged environment and mirrors its exit
status. A child killed by a signal is reported the way shells do: 128 + signal.

While the child runs, keyboard interrupts are left to the child: the terminal
delivers SIGINT to the whole foreground process group, so the parent ignores
it and reports whatever status the child ends with.
"""

import logging
import shutil
import signal
import subprocess
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Sequence

from json_env.domain.errors import SpawnError

logger = logging.getLogger(__name__)


def build_child_env(base_env: Mapping[str, str], resolved: Mapping[str, str]) -> Dict[str, str]:
    """
    Overlay resolved variables on the inherited environment.

    Resolved entries win on key collision.
    """
    child_env = dict(base_env)
    child_env.update(resolved)
    return child_env


def spawn(command: str, argv: Sequence[str], env: Mapping[str, str]) -> int:
    """
    Run command with argv and env, blocking until it exits.

    Args:
        command: Executable name or path, resolved against env's PATH.
        argv: Arguments passed to the command.
        env: Complete environment for the child.

    Returns:
        int: The child's exit code (128 + N when killed by signal N).

    Raises:
        SpawnError: If the executable cannot be found or started, or the
            environment cannot be passed to it.
    """
    executable = shutil.which(command, path=env.get("PATH")) or command
    logger.debug(f"Spawner: running '{executable}' with {len(argv)} argument(s)")

    try:
        proc = subprocess.Popen([executable, *argv], env=dict(env))
    except FileNotFoundError:
        raise SpawnError("Could not start executable: not found.", command=command) from None
    except PermissionError as e:
        raise SpawnError(f"Could not start executable: {e.strerror}.", command=command) from e
    except OSError as e:
        raise SpawnError(f"Could not start executable: {e}.", command=command) from e
    except ValueError as e:
        # Keys containing '=' or NUL, or values containing NUL
        raise SpawnError(f"Environment cannot be passed to the child: {e}.", command=command) from e

    with _interrupts_left_to_child():
        code = proc.wait()

    if code < 0:
        logger.debug(f"Spawner: child terminated by signal {-code}")
        return 128 - code
    return code


@contextmanager
def _interrupts_left_to_child() -> Iterator[None]:
    # Installed after the child started, so the child keeps its own disposition
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)
