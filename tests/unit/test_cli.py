"""
CLI Unit Tests
Tests for battleship_cli/main.py and battleship_cli/commands/{prove,serve}.py
"""
import argparse
import json
import os
import sys

import pytest

from battleship_cli.commands.prove import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    payload_from_args,
    prove_cmd,
)
from battleship_cli.main import create_parser, main
from core.config.runtime import ENV_PREFIX

from fixtures.common import FakeProofGenerator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture
def config_file(tmp_path):
    """Config whose prover is the current interpreter printing a banner."""
    path = tmp_path / "battleship.json"
    path.write_text(json.dumps({
        "prover": {
            "command": [sys.executable, "-c", "print('Proof successfully generated!')"],
            "working_dir": str(tmp_path),
            "timeout_s": 30,
        },
        "access_log": {"enabled": False},
    }))
    return path


def parse_prove(*extra: str) -> argparse.Namespace:
    return create_parser().parse_args(
        ["prove", "--username", "alice", "--ships-sunk", "3", "--total-shots", "20", *extra]
    )


class TestParser:
    """Tests for argument parsing."""

    def test_prove_arguments(self):
        args = parse_prove("--winner", "--json")

        assert args.username == "alice"
        assert args.ships_sunk == 3
        assert args.total_shots == 20
        assert args.hit_percentage is None
        assert args.winner is True
        assert args.json is True

    def test_payload_from_args(self):
        payload = payload_from_args(parse_prove("--hit-percentage", "50"))

        assert payload == {
            "username": "alice",
            "game_result": {"ships_sunk": 3, "total_shots": 20, "winner": False, "hit_percentage": 50},
        }

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1


class TestProveCommand:
    """Tests for prove_cmd()."""

    def test_success_json(self, capsys):
        generator = FakeProofGenerator()

        exit_code = prove_cmd(parse_prove("--json"), generator=generator)

        assert exit_code == EXIT_SUCCESS
        result = json.loads(capsys.readouterr().out)
        assert result["success"] is True
        assert result["proofHash"].startswith("0xBS")
        assert result["game_result"]["hit_percentage"] == 15
        assert len(generator.calls) == 1

    def test_success_human(self, capsys):
        exit_code = prove_cmd(parse_prove("--winner"), generator=FakeProofGenerator())

        out = capsys.readouterr().out
        assert exit_code == EXIT_SUCCESS
        assert "proof_hash: 0xBS" in out
        assert "hit_percentage: 15%" in out
        assert "winner: true" in out

    def test_validation_failure(self, capsys):
        args = create_parser().parse_args(
            ["prove", "--username", "bob", "--ships-sunk", "12", "--total-shots", "20", "--json"]
        )
        generator = FakeProofGenerator()

        exit_code = prove_cmd(args, generator=generator)

        assert exit_code == EXIT_VALIDATION_FAILED
        result = json.loads(capsys.readouterr().out)
        assert result["code"] == "INVALID_SHIPS_SUNK"
        assert generator.calls == []

    def test_prover_failure(self, capsys):
        generator = FakeProofGenerator(returncode=1, stderr="panicked at 'invalid game'")

        exit_code = prove_cmd(parse_prove(), generator=generator)

        assert exit_code == EXIT_RUNTIME_ERROR
        err = capsys.readouterr().err
        assert "Could not generate proof" in err
        assert "panicked at 'invalid game'" in err


class TestMain:
    """End-to-end through main()."""

    def test_prove_with_configured_subprocess(self, config_file, capsys):
        exit_code = main([
            "--config", str(config_file),
            "prove", "--username", "alice", "--ships-sunk", "3", "--total-shots", "20", "--json",
        ])

        assert exit_code == 0
        result = json.loads(capsys.readouterr().out)
        assert result["verified"] is True
        assert result["username"] == "alice"

    def test_config_init(self, tmp_path, capsys):
        path = tmp_path / "new.json"

        assert main(["config", "--init", "--path", str(path)]) == 0
        data = json.loads(path.read_text())
        assert data["server"]["port"] == 4001

        # Refuses to overwrite
        assert main(["config", "--init", "--path", str(path)]) == 1

    def test_config_show(self, config_file, capsys):
        assert main(["--config", str(config_file), "config", "--show"]) == 0

        shown = json.loads(capsys.readouterr().out)
        assert shown["access_log"]["enabled"] is False
        assert shown["prover"]["timeout_s"] == 30

    def test_bad_config_file(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{")

        assert main(["--config", str(path), "config", "--show"]) == 1
        assert "Error loading configuration" in capsys.readouterr().err


class TestServeCommand:
    """Tests for serve_cmd()."""

    def test_builds_one_app_with_cli_overrides(self, config_file, monkeypatch):
        import uvicorn

        import api.app as app_module

        launched = []
        monkeypatch.setattr(
            uvicorn, "run", lambda app, **kwargs: launched.append((app, kwargs))
        )

        exit_code = main(["--config", str(config_file), "serve", "--host", "127.0.0.1", "--port", "4100"])

        assert exit_code == 0
        assert len(launched) == 1
        app, kwargs = launched[0]
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 4100
        assert app.state.config.server.port == 4100
        # Importing the factory module builds no application of its own
        assert not hasattr(app_module, "app")
