from __future__ import annotations

from typing import Sequence

from dugout.contracts import (
    FailureReason,
    GenerationFailure,
    Lineup,
    PlayerStats,
    RandomSource,
    SittingAssignment,
)
from dugout.lineup.rules import (
    INNING_COUNT,
    POSITIONS,
    UNFILLED,
    Capabilities,
    can_assign,
    can_play_position,
    empty_stats,
    is_infield_position,
    sitting_key,
    sitting_slots,
)


def generate_lineup_with_sitting_assignment(
    sitting: SittingAssignment,
    attending: Sequence[str],
    capabilities: Capabilities,
    random_source: RandomSource,
) -> Lineup | GenerationFailure:
    lineup: Lineup = {position: [] for position in POSITIONS}
    stats: dict[str, PlayerStats] = {player: empty_stats() for player in attending}

    for inning in range(INNING_COUNT):
        benched = sitting.get(inning, [])
        available = [p for p in attending if p not in benched]
        for position in POSITIONS:
            eligible = [p for p in available if can_assign(p, position, inning, stats, lineup, capabilities)]
            if not eligible:
                return GenerationFailure(
                    reason=FailureReason.NO_ELIGIBLE_PLAYER,
                    message=f"no eligible player for {position} in inning {inning + 1}",
                    inning=inning,
                    position=position,
                )
            selected = random_source.choice(eligible)
            _record(lineup, stats, position, selected)
            available.remove(selected)
        for player in benched:
            stats[player].bench_innings += 1

    _append_sitting_rows(lineup, [sitting.get(inning, []) for inning in range(INNING_COUNT)], len(attending))
    return lineup


def generate_simple_lineup(
    attending: Sequence[str],
    capabilities: Capabilities,
    random_source: RandomSource,
) -> Lineup:
    """Fill every inning from capability alone; cells nobody can take stay unfilled."""
    lineup: Lineup = {position: [] for position in POSITIONS}
    stats: dict[str, PlayerStats] = {player: empty_stats() for player in attending}
    benched_by_inning: list[list[str]] = []

    for _inning in range(INNING_COUNT):
        available = list(attending)
        for position in POSITIONS:
            eligible = [p for p in available if can_play_position(p, position, capabilities)]
            if not eligible:
                lineup[position].append(UNFILLED)
                continue
            selected = random_source.choice(eligible)
            _record(lineup, stats, position, selected)
            available.remove(selected)
        for player in available:
            stats[player].bench_innings += 1
        benched_by_inning.append(available)

    _append_sitting_rows(lineup, benched_by_inning, len(attending))
    return lineup


def _record(lineup: Lineup, stats: dict[str, PlayerStats], position: str, player: str) -> None:
    lineup[position].append(player)
    stats[player].position_counts[position] += 1
    if is_infield_position(position):
        stats[player].infield_innings += 1


def _append_sitting_rows(lineup: Lineup, benched_by_inning: list[list[str]], attending_count: int) -> None:
    slots = max(sitting_slots(attending_count), max((len(b) for b in benched_by_inning), default=0))
    for slot in range(slots):
        lineup[sitting_key(slot)] = [
            benched[slot] if slot < len(benched) else UNFILLED for benched in benched_by_inning
        ]
