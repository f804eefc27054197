from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from dugout import cli
from dugout.lineup import POSITIONS
from dugout.persistence import decode_state
from dugout.session import LineupSession
from tests.helpers import players


def _write_roster(tmp_path: Path, count: int, **extra) -> Path:
    names = players(count)
    payload = {"roster": names, "capabilities": {name: list(POSITIONS) for name in names}, **extra}
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _run(monkeypatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["dugout", *args])
    cli.main()


def test_cli_prints_valid_lineup(tmp_path: Path, monkeypatch, capsys):
    roster = _write_roster(tmp_path, 10)
    _run(monkeypatch, "--roster", str(roster), "--seed", "5", "--analytics")
    out = capsys.readouterr().out
    assert "lineup generated (success" in out
    assert "Pitcher" in out
    assert "Sitting 1" in out
    assert "All league rules satisfied." in out
    assert "Fairness score:" in out


def test_cli_share_token_decodes(tmp_path: Path, monkeypatch, capsys):
    roster = _write_roster(tmp_path, 9, attendance={"Avery": True})
    _run(monkeypatch, "--roster", str(roster), "--seed", "5", "--share")
    token = capsys.readouterr().out.strip().splitlines()[-1]
    assert decode_state(token)["roster"] == players(9)


def test_cli_reports_violations_from_fallback(tmp_path: Path, monkeypatch, capsys):
    names = players(9)
    payload = {"roster": names, "capabilities": {name: list(POSITIONS) for name in names[:8]}, "policy": {"max_attempts": 5}}
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps(payload), encoding="utf-8")
    _run(monkeypatch, "--roster", str(roster), "--seed", "1")
    out = capsys.readouterr().out
    assert "Warning: some attending players have no positions selected" in out
    assert "fallback after 5 attempts" in out
    assert "Rule violations:" in out


def test_cli_fails_without_attending_players(tmp_path: Path, monkeypatch, capsys):
    roster = _write_roster(tmp_path, 2, attendance={"Avery": False, "Blake": False})
    with pytest.raises(SystemExit) as excinfo:
        _run(monkeypatch, "--roster", str(roster))
    assert excinfo.value.code == 1
    assert "no attending players" in capsys.readouterr().out


def test_cli_export_writes_datasets(tmp_path: Path, monkeypatch, capsys):
    roster = _write_roster(tmp_path, 11)
    export_dir = tmp_path / "exports"
    _run(monkeypatch, "--roster", str(roster), "--seed", "3", "--attempts", "1000", "--export", str(export_dir))
    assert "Exported datasets:" in capsys.readouterr().out
    assert (export_dir / "player_innings.csv").exists()
    assert (export_dir / "lineup_summaries.parquet").exists()


def test_roster_file_capabilities_are_a_set_of_roster_positions():
    session = LineupSession(seed=1)
    cli._apply_roster(
        session,
        {
            "roster": ["Avery"],
            "capabilities": {"Avery": ["Pitcher", "Catcher", "Pitcher"], "Ghost": ["Pitcher"]},
            "attendance": {"Ghost": False},
        },
    )
    assert session.player_capabilities == {"Avery": ["Pitcher", "Catcher"]}
    assert "Ghost" not in session.player_attendance


def test_cli_duplicate_positions_still_generate(tmp_path: Path, monkeypatch, capsys):
    names = players(9)
    payload = {"roster": names, "capabilities": {name: list(POSITIONS) + ["Pitcher"] for name in names}}
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps(payload), encoding="utf-8")
    _run(monkeypatch, "--roster", str(roster), "--seed", "2")
    out = capsys.readouterr().out
    assert "Warning" not in out
    assert "lineup generated" in out
