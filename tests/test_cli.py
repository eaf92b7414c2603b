"""
Tests for the command-line entry point.
"""

import json

import pytest

from anyteam_e2e import __version__
from anyteam_e2e.cli import main, meeting_from_args, parse_args, show_config


class TestParseArgs:
    def test_subcommands(self):
        args = parse_args(["login", "--headed", "--save-state"])

        assert args.command == "login"
        assert args.headed is True
        assert args.save_state is True
        assert args.debug is None

    def test_schedule_options(self):
        args = parse_args(["--debug", "schedule", "--title", "Design Review",
                           "--days-ahead", "3", "--guest", "a@test.com",
                           "--guest", "b@test.com"])

        assert args.debug is True
        assert args.title == "Design Review"
        assert args.days_ahead == 3
        assert args.guest == ["a@test.com", "b@test.com"]

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


def test_meeting_from_args(settings):
    args = parse_args(["schedule", "--title", "Design Review", "--guest", "g@test.com"])

    details = meeting_from_args(args, settings)

    assert details.title == "Design Review"
    assert details.guests == ["g@test.com"]
    assert details.start_time == settings.meeting.start_time


def test_show_config_masks_password(settings):
    rendered = json.loads(show_config(settings))

    assert rendered["account"]["email"] == "user@test.com"
    assert rendered["account"]["password"] != "secret"
    assert rendered["timeouts"]["settle"] == 0


def test_main_show_config(monkeypatch, tmp_path, capsys, clear_settings_cache):
    config = tmp_path / "e2e.toml"
    config.write_text('[app]\nbase_url = "https://app.qa.anyteam.com"\n'
                      '[account]\nemail = "qa@anyteam.com"\npassword = "hunter2"\n')
    monkeypatch.delenv("E2E_CONFIG_FILE", raising=False)

    code = main(["--no-debug", "--config", str(config), "show-config"])

    out = capsys.readouterr().out
    assert code == 0
    assert "https://app.qa.anyteam.com" in out
    assert "hunter2" not in out


def test_main_reports_config_errors(monkeypatch, tmp_path, clear_settings_cache):
    monkeypatch.delenv("E2E_CONFIG_FILE", raising=False)

    code = main(["--no-debug", "--config", str(tmp_path / "absent.toml"), "show-config"])

    assert code == 1


def test_schedule_without_auth_state(monkeypatch, tmp_path, clear_settings_cache):
    config = tmp_path / "e2e.toml"
    config.write_text(f'[app]\nauth_state_path = "{(tmp_path / "missing.json").as_posix()}"\n')
    monkeypatch.delenv("E2E_CONFIG_FILE", raising=False)

    assert main(["--no-debug", "--config", str(config), "schedule"]) == 1
