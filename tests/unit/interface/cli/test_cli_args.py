from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Repeatable --file/--path options keep their order.
2. Everything after the command belongs to the command.
3. Mapping of CLI flags to settings overrides.
"""

import pytest

from json_env.interface.cli.args import args_to_overrides, build_parser, command_line, silent_requested


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_repeatable_sources_keep_order() -> None:
    args = parse_args(["-f", "a.json", "--file", "b.json", "-p", "$.x", "--path", "$.y", "env"])
    assert args.files == ["a.json", "b.json"]
    assert args.paths == ["$.x", "$.y"]


def test_command_arguments_are_passed_through() -> None:
    args = parse_args(["-e", "node", "server.js", "--port", "3000", "-f", "x"])
    assert command_line(args) == ["node", "server.js", "--port", "3000", "-f", "x"]
    assert args.files is None


def test_double_dash_is_stripped() -> None:
    args = parse_args(["--", "ls", "-la"])
    assert command_line(args) == ["ls", "-la"]


def test_no_command() -> None:
    assert command_line(parse_args(["--list"])) == []


def test_optional_value_flags() -> None:
    args = parse_args(["--allow"])
    assert args.allow_file == ""
    args = parse_args(["--allow", "conf.json"])
    assert args.allow_file == "conf.json"
    args = parse_args(["--install-hook", "zsh"])
    assert args.install_hook == "zsh"
    assert parse_args([]).install_hook is None


def test_overrides_mapping() -> None:
    overrides = args_to_overrides(parse_args(["--expand", "--debug", "--log-file", "/tmp/x.log"]))
    assert overrides == {"expand": True, "log_level": "DEBUG", "log_file": "/tmp/x.log"}


def test_no_overrides_by_default() -> None:
    assert args_to_overrides(parse_args(["ls"])) == {}


def test_silent_requested_long_and_short() -> None:
    assert silent_requested(["--silent", "--list"])
    assert silent_requested(["-s"])
    assert silent_requested(["-es", "--list"])
    assert not silent_requested(["--list"])
    assert not silent_requested(None)


def test_silent_requested_skips_option_values() -> None:
    assert silent_requested(["-f", "a.json", "-p", "$.dev", "-s", "--list"])
    assert silent_requested(["--allow", "x.json", "--silent"])
    assert silent_requested(["--file=a.json", "-s"])


def test_silent_flag_of_the_command_is_ignored() -> None:
    assert not silent_requested(["node", "-s"])
    assert not silent_requested(["--", "ls", "-s"])


def test_quiet_parser_exits_without_usage(capsys) -> None:
    parser = build_parser(quiet=True)
    with pytest.raises(SystemExit) as exc:
        parser.parse_args(["-f"])
    assert exc.value.code == 2
    assert capsys.readouterr().err == ""


def test_save_settings_flag() -> None:
    assert parse_args(["--save-settings"]).save_settings is True
    assert parse_args(["--list"]).save_settings is False
