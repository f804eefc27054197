from __future__ import annotations

import copy

from dugout.lineup import (
    LineupValidator,
    calculate_player_stats,
    validate_consecutive_position_assignments,
    validate_lineup,
)
from tests.helpers import fixed_lineup, players, rotation_lineup


def test_rotation_lineup_is_valid():
    roster = players(9)
    result = validate_lineup(rotation_lineup(roster), roster)
    assert result.is_valid
    assert result.errors == []


def test_non_consecutive_pitcher_reported_per_player():
    lineup = {"Pitcher": ["A", "A", "B", "A", "B", "B"]}
    assert validate_consecutive_position_assignments(lineup, "Pitcher") == [
        "A played Pitcher in non-consecutive innings: 1, 2, 4",
        "B played Pitcher in non-consecutive innings: 3, 5, 6",
    ]


def test_consecutive_runs_pass():
    lineup = {"Catcher": ["A", "A", "A", "B", "B", "C"]}
    assert validate_consecutive_position_assignments(lineup, "Catcher") == []


def test_unfilled_cells_do_not_join_runs():
    lineup = {"Catcher": ["A", "", "A", "", "", ""]}
    assert validate_consecutive_position_assignments(lineup, "Catcher") == [
        "A played Catcher in non-consecutive innings: 1, 3"
    ]
    assert validate_consecutive_position_assignments({}, "Catcher") == []


def test_infield_minimum_messages():
    roster = players(9)
    result = validate_lineup(fixed_lineup(roster), roster)
    assert not result.is_valid
    assert result.errors == [
        f"{name} only played 0 infield innings (minimum 2 required)" for name in roster[6:]
    ]


def test_bench_spread_message():
    roster = players(11)
    result = validate_lineup(fixed_lineup(roster), roster)
    assert "Bench time difference too large: max 6, min 0 (max difference allowed: 1)" in result.errors


def test_battery_runs_checked_in_full_validation():
    roster = players(9)
    lineup = rotation_lineup(roster)
    lineup["Pitcher"][5], lineup["Pitcher"][0] = lineup["Pitcher"][0], lineup["Pitcher"][5]
    result = validate_lineup(lineup, roster)
    assert any("played Pitcher in non-consecutive innings" in error for error in result.errors)


def test_validation_is_idempotent_and_read_only():
    roster = players(11)
    lineup = fixed_lineup(roster)
    before = copy.deepcopy(lineup)
    validator = LineupValidator(roster)
    first = validator.validate_lineup(lineup)
    second = validator.validate_lineup(lineup)
    assert first == second
    assert lineup == before


def test_player_stats_ignore_unknown_and_empty_names():
    roster = players(2)
    lineup = {"Pitcher": [roster[0], "", "Stranger", roster[0], roster[1], ""], "Left Field": [roster[1]] * 6}
    stats = calculate_player_stats(lineup, roster)
    assert stats[roster[0]].position_counts["Pitcher"] == 2
    assert stats[roster[0]].infield_innings == 2
    assert stats[roster[0]].bench_innings == 4
    assert stats[roster[1]].infield_innings == 1
    assert stats[roster[1]].bench_innings == 0
    assert "Stranger" not in stats


def test_no_attending_players_is_trivially_valid():
    assert validate_lineup({}, []).is_valid
