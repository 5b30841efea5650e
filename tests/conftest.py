from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An isolated per-user config directory and environment snapshot so tests
   never read or write the real trust store.
3. Helpers for writing JSON config files.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) per-user config directory under tmp_path."""
    return tmp_path / "user_config"


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def base_env(config_dir: Path, home_dir: Path) -> Dict[str, str]:
    """
    Return a minimal environment snapshot pointing at isolated directories.

    Returns:
        Dict[str, str]: Environment for CLI and engine calls.
    """
    return {
        "PATH": os.environ.get("PATH", ""),
        "HOME": str(home_dir),
        "SHELL": "/bin/bash",
        "JSON_ENV_CONFIG_DIR": str(config_dir),
    }


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Return a helper that serializes a value to a file and returns its path."""
    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
