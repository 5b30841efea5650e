from __future__ import annotations

"""
Unit tests for the Global Supervisor.

Verifies that unexpected crashes exit with 1, print the trace once, and
stay quiet when the user asked for silence.
"""

import sys

import pytest

from json_env.main import global_exception_handler


def crash_info():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        return sys.exc_info()


def test_crash_prints_trace_once(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["json_env", "--list"])

    with pytest.raises(SystemExit) as exc:
        global_exception_handler(*crash_info())

    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "internal error" in err
    assert err.count("RuntimeError: boom") == 1


def test_crash_is_quiet_under_silent(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["json_env", "-f", "a.json", "--silent", "--list"])

    with pytest.raises(SystemExit) as exc:
        global_exception_handler(*crash_info())

    assert exc.value.code == 1
    assert capsys.readouterr().err == ""
