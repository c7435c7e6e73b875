"""Tests for the command-line entry point."""

import json
import sys

import pytest
from betround.__main__ import main

CONFIG = """\
session:
  name: cli-test
  seed: 11
  hands: 3
table:
  blinds: [50, 100]
  starting_stack: 1000
agents:
  a: {strategy: calling_station}
  b: {strategy: random}
  c: {strategy: calling_station}
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "session.yaml"
    path.write_text(CONFIG)
    return path


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["betround", *argv])
    main()


class TestSessionCommand:
    def test_runs_and_writes_history(self, monkeypatch, capsys, config_path, tmp_output):
        _run(monkeypatch, str(config_path), "-o", str(tmp_output))
        out = capsys.readouterr().out
        assert "Session: cli-test" in out
        assert "Standings after 3 hands" in out
        assert (tmp_output / "cli-test.jsonl").exists()

    def test_hands_override(self, monkeypatch, capsys, config_path):
        _run(monkeypatch, str(config_path), "-n", "1")
        assert "Standings after 1 hands" in capsys.readouterr().out

    def test_missing_config(self, monkeypatch, tmp_path):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(tmp_path / "nope.yaml"))
        assert exc.value.code == 1

    def test_invalid_config(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("agents: {}\n")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(path))
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "text",
        ["session: [unclosed\n", CONFIG + "table: 5\n"],
        ids=["malformed-yaml", "scalar-table"],
    )
    def test_unusable_config_exits_cleanly(self, monkeypatch, capsys, tmp_path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(path))
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestReplayCommand:
    def test_replay_to_flop(self, monkeypatch, capsys, config_path, tmp_path):
        actions = tmp_path / "hand.json"
        actions.write_text(json.dumps([{"action": "call"}, {"action": "call"}, {"action": "check"}]))
        _run(monkeypatch, str(config_path), "--replay", str(actions))
        out = capsys.readouterr().out
        assert "FLOP" in out
        assert "300" in out

    def test_replay_stops_at_close(self, monkeypatch, capsys, config_path, tmp_path):
        actions = tmp_path / "hand.yaml"
        actions.write_text("- action: fold\n- action: fold\n- action: call\n")
        _run(monkeypatch, str(config_path), "--replay", str(actions))
        out = capsys.readouterr().out
        assert "Hand closed after 2 actions" in out
        assert "CLOSED" in out

    def test_illegal_replay_action(self, monkeypatch, capsys, config_path, tmp_path):
        actions = tmp_path / "hand.json"
        actions.write_text(json.dumps([{"action": "check"}]))
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(config_path), "--replay", str(actions))
        assert exc.value.code == 1
        assert "rejected" in capsys.readouterr().err

    def test_replay_file_missing(self, monkeypatch, capsys, config_path, tmp_path):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(config_path), "--replay", str(tmp_path / "nope.json"))
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_replay_file_not_json(self, monkeypatch, capsys, config_path, tmp_path):
        actions = tmp_path / "hand.json"
        actions.write_text("call, call, check")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(config_path), "--replay", str(actions))
        assert exc.value.code == 1
        assert "malformed" in capsys.readouterr().err
