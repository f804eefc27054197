from __future__ import annotations

import math
from typing import Sequence

from dugout.contracts import Lineup
from dugout.lineup.models import AnalyticsData, AnalyticsSummary, PlayerFrequency, PositionFrequency
from dugout.lineup.rules import INNING_COUNT, POSITIONS, is_infield_position


def calculate_analytics(lineup: Lineup, attending: Sequence[str], not_attending: Sequence[str] = ()) -> AnalyticsData:
    """Field, bench and rotation breakdown for a finished lineup.

    Non-attending players are listed after the attending ones with zero innings so a
    report can show the whole roster. Purely descriptive: nothing here feeds back into
    generation.
    """
    attending_set = set(attending)
    by_player = {player: PlayerFrequency(player=player) for player in [*attending, *not_attending]}
    by_position = {position: PositionFrequency(position=position) for position in POSITIONS}

    for inning in range(INNING_COUNT):
        on_field: set[str] = set()
        for position in POSITIONS:
            row = lineup.get(position, [])
            player = row[inning] if inning < len(row) else ""
            if not player or player not in attending_set:
                continue
            freq = by_player[player]
            freq.total_innings += 1
            freq.field_innings += 1
            freq.position_breakdown[position] = freq.position_breakdown.get(position, 0) + 1
            if is_infield_position(position):
                freq.infield_innings += 1
            else:
                freq.outfield_innings += 1
            slot = by_position[position]
            slot.total_assignments += 1
            slot.player_breakdown[player] = slot.player_breakdown.get(player, 0) + 1
            on_field.add(player)
        for player in attending:
            if player not in on_field:
                by_player[player].total_innings += 1
                by_player[player].bench_innings += 1

    field_times = [by_player[p].field_innings for p in attending]
    bench_times = [by_player[p].bench_innings for p in attending]
    summary = AnalyticsSummary(
        total_players=len(attending),
        total_innings=INNING_COUNT,
        average_field_time=_mean(field_times),
        average_bench_time=_mean(bench_times),
        fairness_score=fairness_score(field_times, bench_times),
    )
    return AnalyticsData(
        player_frequencies=list(by_player.values()),
        position_frequencies=list(by_position.values()),
        summary=summary,
    )


def fairness_score(field_times: Sequence[int], bench_times: Sequence[int], innings: int = INNING_COUNT) -> int:
    max_variance = innings**2 / 4
    field_fairness = max(0.0, 100 - _variance(field_times) / max_variance * 100)
    bench_fairness = max(0.0, 100 - _variance(bench_times) / max_variance * 100)
    # halves round up
    return math.floor((field_fairness + bench_fairness) / 2 + 0.5)


def _mean(values: Sequence[int]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _variance(values: Sequence[int]) -> float:
    if not values:
        return 0.0
    mean = _mean(values)
    return sum((v - mean) ** 2 for v in values) / len(values)
