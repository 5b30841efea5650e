from __future__ import annotations

"""
Unit tests for the Shell Integration Registry.

Verifies:
1. Shell lookup and $SHELL detection.
2. Export statement rendering and quoting per dialect.
3. Hook installation is append-only and skipped when already present.
"""

from pathlib import Path

import pytest

from json_env.core.services import shells
from json_env.domain.constants import HOOK_MARKER
from json_env.domain.errors import UsageError


def test_get_shell_is_case_insensitive() -> None:
    assert shells.get_shell("ZSH").name == "zsh"


def test_get_shell_defaults_to_bash() -> None:
    assert shells.get_shell(None).name == "bash"


def test_unknown_shell_is_usage_error() -> None:
    with pytest.raises(UsageError):
        shells.get_shell("tcsh")


@pytest.mark.parametrize("shell_var, expected", [
    ("/usr/bin/zsh", "zsh"),
    ("/usr/local/bin/fish", "fish"),
    ("/bin/bash", "bash"),
    ("/bin/tcsh", "bash"),
    ("", "bash"),
])
def test_detect_shell(shell_var, expected) -> None:
    assert shells.detect_shell({"SHELL": shell_var}).name == expected


def test_posix_exports_are_quoted_and_sorted() -> None:
    out = shells.render_exports(shells.get_shell("bash"), {"B": "it's", "A": "plain"})
    assert out == "export A=plain\nexport B='it'\"'\"'s'\n"


def test_fish_exports() -> None:
    out = shells.render_exports(shells.get_shell("fish"), {"A": "it's"})
    assert out == "set -gx A 'it\\'s'\n"


def test_invalid_names_are_not_exported() -> None:
    out = shells.render_exports(shells.get_shell("bash"), {"OK": "1", "bad name;rm": "x", "1X": "y"})
    assert out == "export OK=1\n"


def test_empty_environment_renders_nothing() -> None:
    assert shells.render_exports(shells.get_shell("zsh"), {}) == ""


def test_every_hook_invokes_silent_export() -> None:
    for spec in shells.SHELLS.values():
        assert HOOK_MARKER in spec.hook
        assert "--export --silent" in spec.hook


def test_install_hook_appends_to_existing_profile(tmp_path: Path) -> None:
    profile = tmp_path / ".bashrc"
    profile.write_text("alias ll='ls -l'\n", encoding="utf-8")

    assert shells.install_hook(shells.get_shell("bash"), str(tmp_path)) is True

    text = profile.read_text(encoding="utf-8")
    assert text.startswith("alias ll='ls -l'\n")
    assert "json_env_hook" in text


def test_install_hook_is_skipped_when_present(tmp_path: Path) -> None:
    spec = shells.get_shell("zsh")
    shells.install_hook(spec, str(tmp_path))
    first = (tmp_path / ".zshrc").read_text(encoding="utf-8")

    assert shells.install_hook(spec, str(tmp_path)) is False
    assert (tmp_path / ".zshrc").read_text(encoding="utf-8") == first


def test_install_hook_creates_nested_profile(tmp_path: Path) -> None:
    shells.install_hook(shells.get_shell("fish"), str(tmp_path))
    assert (tmp_path / ".config" / "fish" / "config.fish").is_file()
