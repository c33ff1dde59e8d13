"""
Tests for the command line entry point and its exit codes.
"""

import json
import subprocess

import pytest

from user_cleanup import cli
from user_cleanup.errors import OPCommandError
from user_cleanup.op_client import OnePasswordCLI
from user_cleanup.user_processor import UserProcessor


@pytest.fixture
def config_path(tmp_path):
    config = {
        "exclusion_settings": {
            "exclusion_file": str(tmp_path / "missing.txt"),
            "excluded_emails": ["user1@example.com"],
        },
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config))
    return path


@pytest.fixture
def run_cli(monkeypatch, config_path, answer, today):
    def run(client, reply="y", extra_args=()):
        def make_processor(config_manager):
            return UserProcessor(config_manager, client, input_func=answer(reply), today=today)

        monkeypatch.setattr(cli, "UserProcessor", make_processor)
        local = str(config_path.parent / "config.local.json")
        return cli.main(["--config", str(config_path), "--local-config", local, *extra_args])

    return run


def test_completed_run_exits_zero(run_cli, fake_client, scenario_records, capsys):
    client = fake_client(scenario_records)

    assert run_cli(client) == 0
    assert client.deleted == ["U1"]
    assert "[done] Deleted: 1" in capsys.readouterr().out


def test_declined_exits_one(run_cli, fake_client, scenario_records):
    client = fake_client(scenario_records)

    assert run_cli(client, reply="n") == 1
    assert client.deleted == []


def test_nothing_to_do_exits_zero(run_cli, fake_client):
    assert run_cli(fake_client([])) == 0


def test_sign_in_failure_exits_one(run_cli, fake_client, scenario_records, capsys):
    client = fake_client(scenario_records, signed_in=False, sign_in_error="[ERROR] 401: Unauthorized")

    assert run_cli(client) == 1
    assert "Sign-in failed: [ERROR] 401: Unauthorized" in capsys.readouterr().out


def test_sign_in_failure_shows_op_stderr(run_cli, capsys):
    results = [(1, "", "[ERROR] account is not signed in\n"),
               (1, "", "[ERROR] 2024/05/31 10:00:00 incorrect password\n")]

    def runner(command, **kwargs):
        returncode, stdout, stderr = results.pop(0)
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)

    assert run_cli(OnePasswordCLI(runner=runner)) == 1
    assert "Sign-in failed: [ERROR] 2024/05/31 10:00:00 incorrect password" in capsys.readouterr().out


def test_list_failure_exits_one(run_cli, fake_client):
    class BrokenClient(fake_client):
        def list_users(self):
            raise OPCommandError(["op", "user", "list"], 1, "[ERROR] forbidden")

    assert run_cli(BrokenClient([])) == 1


def test_partial_failure_exit_code_follows_config(run_cli, fake_client, scenario_records, config_path):
    client = fake_client(scenario_records, failing_deletes={"U1"})
    assert run_cli(client) == 0

    config = json.loads(config_path.read_text())
    config["cleanup_settings"] = {"fail_on_delete_errors": True}
    config_path.write_text(json.dumps(config))

    client = fake_client(scenario_records, failing_deletes={"U1"})
    assert run_cli(client) == 2


def test_yes_flag_skips_prompt(run_cli, fake_client, scenario_records):
    client = fake_client(scenario_records)

    assert run_cli(client, reply="n", extra_args=["--yes"]) == 0
    assert client.deleted == ["U1"]


def test_invalid_inactivity_days_exits_one(config_path, capsys):
    config = json.loads(config_path.read_text())
    config["cleanup_settings"] = {"inactivity_days": "365"}
    config_path.write_text(json.dumps(config))
    local = str(config_path.parent / "config.local.json")

    assert cli.main(["--config", str(config_path), "--local-config", local]) == 1
    assert "[!] inactivity_days must be a non-negative integer, got '365'" in capsys.readouterr().out
