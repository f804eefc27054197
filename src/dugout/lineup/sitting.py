from __future__ import annotations

from typing import Sequence

from dugout.contracts import FailureReason, GenerationFailure, RandomSource, SittingPlan
from dugout.lineup.rules import INNING_COUNT, MAX_BENCH_SPREAD, sitting_slots


def generate_fair_sitting_assignment(
    attending: Sequence[str],
    random_source: RandomSource,
) -> SittingPlan | GenerationFailure:
    """Pick each inning's bench so that nobody sits more than one inning longer than anyone else.

    Players still short of the per-player target sit first, then the least-benched of
    the rest. The attending order is shuffled up front so that players tied on bench
    time are drawn in a different order on each attempt.
    """
    players = list(attending)
    per_inning = sitting_slots(len(players))
    counts = {player: 0 for player in players}
    assignment: dict[int, list[str]] = {inning: [] for inning in range(INNING_COUNT)}
    if per_inning == 0:
        return SittingPlan(assignment=assignment, sitting_per_inning=0, sitting_counts=counts)

    random_source.shuffle(players)
    target = (per_inning * INNING_COUNT) // len(players)
    ceiling = target + 1

    for inning in range(INNING_COUNT):
        ranked = sorted(players, key=lambda p: (counts[p] >= target, counts[p]))
        eligible = [p for p in ranked if counts[p] < ceiling]
        if len(eligible) < per_inning:
            return GenerationFailure(
                reason=FailureReason.INSUFFICIENT_SITTERS,
                message=f"only {len(eligible)} players can sit in inning {inning + 1}, need {per_inning}",
                inning=inning,
            )

        chosen = [p for p in eligible if counts[p] < target][:per_inning]
        for player in eligible:
            if len(chosen) >= per_inning:
                break
            if player not in chosen:
                chosen.append(player)

        assignment[inning] = chosen
        for player in chosen:
            counts[player] += 1

    spread = max(counts.values()) - min(counts.values())
    if spread > MAX_BENCH_SPREAD:
        return GenerationFailure(
            reason=FailureReason.UNFAIR_BENCH_SPREAD,
            message=f"bench spread {spread} exceeds {MAX_BENCH_SPREAD}",
        )
    return SittingPlan(assignment=assignment, sitting_per_inning=per_inning, sitting_counts=counts)
