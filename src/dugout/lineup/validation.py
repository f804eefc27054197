from __future__ import annotations

from typing import Sequence

from dugout.contracts import Lineup, LineupValidation, PlayerStats, Position
from dugout.lineup.rules import MAX_BENCH_SPREAD, MIN_INFIELD_INNINGS
from dugout.lineup.stats import calculate_player_stats


class LineupValidator:
    """Checks a finished lineup against the league rules for the attending players."""

    def __init__(self, attending: Sequence[str]) -> None:
        self._attending = list(attending)

    def player_stats(self, lineup: Lineup) -> dict[str, PlayerStats]:
        return calculate_player_stats(lineup, self._attending)

    def validate_lineup(self, lineup: Lineup) -> LineupValidation:
        stats = self.player_stats(lineup)
        errors: list[str] = []
        errors.extend(self._validate_infield_minimum(stats))
        errors.extend(self._validate_bench_spread(stats))
        errors.extend(validate_consecutive_position_assignments(lineup, Position.PITCHER.value))
        errors.extend(validate_consecutive_position_assignments(lineup, Position.CATCHER.value))
        return LineupValidation(is_valid=not errors, errors=errors)

    def _validate_infield_minimum(self, stats: dict[str, PlayerStats]) -> list[str]:
        return [
            f"{player} only played {stats[player].infield_innings} infield innings (minimum {MIN_INFIELD_INNINGS} required)"
            for player in self._attending
            if stats[player].infield_innings < MIN_INFIELD_INNINGS
        ]

    def _validate_bench_spread(self, stats: dict[str, PlayerStats]) -> list[str]:
        if not self._attending:
            return []
        bench = [stats[player].bench_innings for player in self._attending]
        high, low = max(bench), min(bench)
        if high - low <= MAX_BENCH_SPREAD:
            return []
        return [
            f"Bench time difference too large: max {high}, min {low} (max difference allowed: {MAX_BENCH_SPREAD})"
        ]


def validate_lineup(lineup: Lineup, attending: Sequence[str]) -> LineupValidation:
    return LineupValidator(attending).validate_lineup(lineup)


def validate_consecutive_position_assignments(lineup: Lineup, position: str) -> list[str]:
    row = lineup.get(position, [])
    innings_by_player: dict[str, list[int]] = {}
    for inning, player in enumerate(row):
        if player and player.strip():
            innings_by_player.setdefault(player, []).append(inning)

    errors: list[str] = []
    for player, innings in innings_by_player.items():
        if len(innings) < 2:
            continue
        if any(later != earlier + 1 for earlier, later in zip(innings, innings[1:])):
            listed = ", ".join(str(inning + 1) for inning in innings)
            errors.append(f"{player} played {position} in non-consecutive innings: {listed}")
    return errors
