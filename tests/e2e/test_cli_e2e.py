from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
via subprocess. These tests validate argument parsing, exit codes, stream
output, and the environment seen by the spawned child.
"""

import json
import os
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: List[str], cwd: Path, extra_env: Dict[str, str]) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package is resolvable
    without being installed in site-packages.
    """
    env = os.environ.copy()
    env.update(extra_env)
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, "-m", "json_env"] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def isolated_env(tmp_path: Path) -> Dict[str, str]:
    return {"JSON_ENV_CONFIG_DIR": str(tmp_path / "config"), "HOME": str(tmp_path)}


def test_child_receives_variables(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text(json.dumps({"NODE_ENV": "DEV"}), encoding="utf-8")
    script = "import os; print(os.environ['NODE_ENV'])"

    result = run_cli([sys.executable, "-c", script], tmp_path, isolated_env)

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "DEV"


def test_child_exit_code_is_mirrored(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text("{}", encoding="utf-8")

    result = run_cli([sys.executable, "-c", "raise SystemExit(3)"], tmp_path, isolated_env)

    assert result.returncode == 3


def test_expansion_end_to_end(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text(json.dumps({"TEST": "$FOO"}), encoding="utf-8")
    env = dict(isolated_env, FOO="Bar")

    result = run_cli(["--expand", "--list"], tmp_path, env)

    assert result.returncode == 0, result.stderr
    assert result.stdout == "TEST=Bar\n"


def test_parse_error_reports_file(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text("{broken", encoding="utf-8")

    result = run_cli(["--list"], tmp_path, isolated_env)

    assert result.returncode == 1
    assert ".env.json" in result.stderr
    assert result.stdout == ""


def test_trust_then_export(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text(json.dumps({"GREETING": "hello world"}), encoding="utf-8")

    refused = run_cli(["--export", "--silent"], tmp_path, isolated_env)
    assert refused.returncode == 1
    assert refused.stdout == ""

    allowed = run_cli(["--allow"], tmp_path, isolated_env)
    assert allowed.returncode == 0, allowed.stderr

    exported = run_cli(["--export", "--silent", "--shell", "bash"], tmp_path, isolated_env)
    assert exported.returncode == 0
    assert exported.stdout == "export GREETING='hello world'\n"


def test_help_exits_with_usage_code(tmp_path: Path, isolated_env) -> None:
    result = run_cli([], tmp_path, isolated_env)
    assert result.returncode == 2
    assert "usage:" in result.stderr


@pytest.mark.skipif(os.name == "nt", reason="POSIX process groups only")
def test_ctrl_c_reaches_child_and_its_exit_code_is_kept(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text("{}", encoding="utf-8")
    ready = tmp_path / "ready"
    cleaned = tmp_path / "cleaned"
    script = (
        "import signal, sys, time\n"
        "def on_int(*_):\n"
        "    time.sleep(0.5)\n"
        f"    open({str(cleaned)!r}, 'w').close()\n"
        "    sys.exit(3)\n"
        "signal.signal(signal.SIGINT, on_int)\n"
        f"open({str(ready)!r}, 'w').close()\n"
        "time.sleep(30)\n"
    )
    env = os.environ.copy()
    env.update(isolated_env)
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    # Own session, so the group signal mimics a terminal Ctrl-C
    proc = subprocess.Popen(
        [sys.executable, "-m", "json_env", sys.executable, "-c", script],
        cwd=tmp_path,
        env=env,
        start_new_session=True,
    )
    try:
        deadline = time.monotonic() + 20
        while not ready.exists():
            assert proc.poll() is None, "json_env exited before the child was ready"
            assert time.monotonic() < deadline, "child never became ready"
            time.sleep(0.05)

        os.killpg(proc.pid, signal.SIGINT)
        code = proc.wait(timeout=20)
    finally:
        if proc.poll() is None:
            os.killpg(proc.pid, signal.SIGKILL)
            proc.wait()

    assert code == 3
    assert cleaned.exists()


def test_nan_literal_is_reported_without_traceback(tmp_path: Path, isolated_env) -> None:
    (tmp_path / ".env.json").write_text('{"A": NaN}', encoding="utf-8")

    result = run_cli(["--silent", "--list"], tmp_path, isolated_env)

    assert result.returncode == 1
    assert result.stdout == ""
    assert result.stderr == ""
