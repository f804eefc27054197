from __future__ import annotations

from typing import Mapping, Sequence

from dugout.contracts import Lineup, PlayerStats, Position

POSITIONS: tuple[str, ...] = tuple(p.value for p in Position)
INFIELD_POSITIONS: tuple[str, ...] = (
    Position.PITCHER.value,
    Position.CATCHER.value,
    Position.FIRST_BASE.value,
    Position.SECOND_BASE.value,
    Position.THIRD_BASE.value,
    Position.SHORTSTOP.value,
)
OUTFIELD_POSITIONS: tuple[str, ...] = tuple(p for p in POSITIONS if p not in INFIELD_POSITIONS)
CONSECUTIVE_ONLY_POSITIONS: tuple[str, ...] = (Position.PITCHER.value, Position.CATCHER.value)

INNING_COUNT = 6
FIELD_SLOTS = len(POSITIONS)
POSITION_INNING_CAP = 3
CATCHER_PITCH_LIMIT = 4
PITCHER_CATCH_LIMIT = 2
MIN_INFIELD_INNINGS = 2
MAX_BENCH_SPREAD = 1

UNFILLED = ""
SITTING_PREFIX = "Sitting"

Capabilities = Mapping[str, Sequence[str]]


def is_infield_position(position: str) -> bool:
    return position in INFIELD_POSITIONS


def sitting_key(slot_index: int) -> str:
    """Row label for the zero-based bench slot ``slot_index``."""
    return f"{SITTING_PREFIX} {slot_index + 1}"


def sitting_slots(attending_count: int) -> int:
    return max(0, attending_count - FIELD_SLOTS)


def empty_stats() -> PlayerStats:
    return PlayerStats(position_counts={position: 0 for position in POSITIONS})


def can_play_position(player: str, position: str, capabilities: Capabilities) -> bool:
    return position in capabilities.get(player, ())


def can_play_position_in_inning(
    player: str,
    position: str,
    stats: Mapping[str, PlayerStats],
    capabilities: Capabilities,
) -> bool:
    if not can_play_position(player, position, capabilities):
        return False
    counts = stats[player].position_counts
    if counts[position] >= POSITION_INNING_CAP:
        return False
    if position == Position.PITCHER.value and counts[Position.CATCHER.value] >= CATCHER_PITCH_LIMIT:
        return False
    if position == Position.CATCHER.value and counts[Position.PITCHER.value] >= PITCHER_CATCH_LIMIT:
        return False
    return True


def can_assign(
    player: str,
    position: str,
    inning: int,
    stats: Mapping[str, PlayerStats],
    partial_lineup: Lineup,
    capabilities: Capabilities,
) -> bool:
    """Whether ``player`` may take ``position`` in ``inning`` given the lineup built so far.

    Pitcher and Catcher may only be repeated as one unbroken run of innings: once a
    player has held either spot, the next assignment there must be the inning right
    after their latest one.
    """
    if not can_play_position_in_inning(player, position, stats, capabilities):
        return False
    if position not in CONSECUTIVE_ONLY_POSITIONS:
        return True
    if stats[player].position_counts[position] == 0:
        return True
    last_inning = -1
    for index, occupant in enumerate(partial_lineup.get(position, [])):
        if occupant == player:
            last_inning = index
    if last_inning != -1 and inning != last_inning + 1:
        return False
    return True
