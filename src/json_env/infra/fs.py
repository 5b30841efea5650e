from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the per-user configuration directory,
path canonicalisation used as the trust comparison key, and atomic JSON
persistence. Acts as an abstraction over the 'os' module to ensure uniform
behavior across Windows and Unix-like systems.
"""

import json
import os
import tempfile
from typing import Any, Mapping, Optional, Tuple

from json_env.domain.constants import APP_NAME, CONFIG_DIR_ENV_VAR

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_config_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the standard OS-specific directory for persistent tool data.

    The directory is not created here; the trust store and settings writers
    create it lazily on first write.
    Standards:
    - Override: $JSON_ENV_CONFIG_DIR
    - Windows: %APPDATA%/json_env
    - Linux/Mac: $XDG_CONFIG_HOME/json_env or ~/.config/json_env

    Args:
        environ: Environment snapshot. Defaults to os.environ.

    Returns:
        str: Absolute path to the configuration directory.
    """
    env = os.environ if environ is None else environ

    override = (env.get(CONFIG_DIR_ENV_VAR) or "").strip()
    if override:
        return os.path.abspath(os.path.expanduser(override))

    if os.name == "nt":
        base = env.get("APPDATA") or env.get("LOCALAPPDATA")
        if base:
            return os.path.abspath(os.path.join(base, APP_NAME))

    xdg = (env.get("XDG_CONFIG_HOME") or "").strip()
    if xdg:
        return os.path.abspath(os.path.join(xdg, APP_NAME))

    return os.path.abspath(os.path.join(os.path.expanduser("~"), ".config", APP_NAME))


def canonical_path(path: str, base_dir: Optional[str] = None) -> str:
    """
    Normalize a file path into its canonical absolute form.

    Expands '~', resolves relative paths against base_dir (or the working
    directory), follows symlinks and normalizes case on Windows, so that the
    same file reached from different directories yields the same string.

    Args:
        path: Raw path string.
        base_dir: Directory used to anchor relative paths.

    Returns:
        str: Canonical absolute path.
    """
    p = os.path.expanduser(path.strip())
    if not os.path.isabs(p):
        p = os.path.join(base_dir or os.getcwd(), p)
    return os.path.normcase(os.path.realpath(p))

# -----------------------------------------------------------------------------
# FILESYSTEM PERSISTENCE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_json_atomic(path: str, data: Any) -> None:
    """
    Serialize data to path through a temporary sibling and an atomic rename.

    Args:
        path: Destination file.
        data: JSON-serializable payload.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
