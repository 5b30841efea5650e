from __future__ import annotations

"""
Shell Integration Registry.

Describes every supported shell as one ShellSpec row: where its profile
lives, the hook appended to it, and how an export statement is written.
Adding a shell means adding a row to SHELLS.
"""

import logging
import os
import re
import shlex
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from json_env.domain.constants import DEFAULT_CONFIG_FILE_NAME, HOOK_END_MARKER, HOOK_MARKER
from json_env.domain.errors import UsageError

logger = logging.getLogger(__name__)

# Names safe to splice into an eval'd export statement
_EXPORTABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ShellSpec:
    """
    Static integration data for one shell.

    Attributes:
        name: Shell identifier (basename of $SHELL).
        profile: Profile path relative to the home directory.
        hook: Script appended to the profile.
        render_export: Builds one export statement from (key, value).
    """
    name: str
    profile: str
    hook: str
    render_export: Callable[[str, str], str]


def _posix_export(key: str, value: str) -> str:
    return f"export {key}={shlex.quote(value)}"


def _fish_quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _fish_export(key: str, value: str) -> str:
    return f"set -gx {key} {_fish_quote(value)}"


_BASH_HOOK = f"""
{HOOK_MARKER}
json_env_hook() {{
    if [ -f "{DEFAULT_CONFIG_FILE_NAME}" ]; then
        eval "$(json_env --export --silent --shell bash)"
    fi
}}
cd() {{ builtin cd "$@" && json_env_hook; }}
{HOOK_END_MARKER}
"""

_ZSH_HOOK = f"""
{HOOK_MARKER}
json_env_hook() {{
    if [ -f "{DEFAULT_CONFIG_FILE_NAME}" ]; then
        eval "$(json_env --export --silent --shell zsh)"
    fi
}}
autoload -U add-zsh-hook
add-zsh-hook chpwd json_env_hook
{HOOK_END_MARKER}
"""

_FISH_HOOK = f"""
{HOOK_MARKER}
function json_env_hook --on-variable PWD
    if test -f "{DEFAULT_CONFIG_FILE_NAME}"
        json_env --export --silent --shell fish | source
    end
end
{HOOK_END_MARKER}
"""

SHELLS: Dict[str, ShellSpec] = {
    "bash": ShellSpec("bash", ".bashrc", _BASH_HOOK, _posix_export),
    "zsh": ShellSpec("zsh", ".zshrc", _ZSH_HOOK, _posix_export),
    "fish": ShellSpec("fish", os.path.join(".config", "fish", "config.fish"), _FISH_HOOK, _fish_export),
}

DEFAULT_SHELL = "bash"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_shell(name: Optional[str]) -> ShellSpec:
    """
    Look up a shell by name.

    Raises:
        UsageError: If the shell is not supported.
    """
    key = (name or DEFAULT_SHELL).strip().lower()
    try:
        return SHELLS[key]
    except KeyError:
        supported = ", ".join(sorted(SHELLS))
        raise UsageError(f"Unsupported shell '{name}'. Supported shells: {supported}.") from None


def detect_shell(environ: Mapping[str, str]) -> ShellSpec:
    """
    Pick the shell named by $SHELL, falling back to bash.

    Args:
        environ: Environment snapshot.
    """
    name = os.path.basename(environ.get("SHELL", "") or "")
    if name in SHELLS:
        return SHELLS[name]
    logger.debug(f"Shells: '{name or '<unset>'}' not supported, using {DEFAULT_SHELL}")
    return SHELLS[DEFAULT_SHELL]


def render_exports(shell: ShellSpec, env: Mapping[str, str]) -> str:
    """
    Build the script that exports env into the calling shell.

    Args:
        shell: Target shell.
        env: Resolved variables.

    Returns:
        str: One statement per line, keys sorted. Names that are not valid
        shell identifiers are skipped with a warning.
    """
    lines = []
    for key in sorted(env):
        if not _EXPORTABLE_NAME.match(key):
            logger.warning(f"Not exporting '{key}': not a valid shell variable name.")
            continue
        lines.append(shell.render_export(key, env[key]))
    return "\n".join(lines) + ("\n" if lines else "")


def profile_path(shell: ShellSpec, home_dir: str) -> str:
    return os.path.join(home_dir, shell.profile)


def install_hook(shell: ShellSpec, home_dir: str) -> bool:
    """
    Append the shell hook to the shell's profile.

    Skips the write when the hook marker is already present.

    Args:
        shell: Target shell.
        home_dir: The user's home directory.

    Returns:
        bool: True if the hook was written, False if it was already there.

    Raises:
        OSError: If the profile cannot be read or written.
    """
    path = profile_path(shell, home_dir)

    if os.path.exists(path):
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            if HOOK_MARKER in f.read():
                logger.info(f"Shells: hook already present in {path}")
                return False

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(shell.hook)

    logger.info(f"Shells: hook appended to {path}")
    return True
