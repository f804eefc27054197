from __future__ import annotations

from collections import Counter

import pytest

from dugout.contracts import SittingPlan
from dugout.core import seeded_random
from dugout.lineup import generate_fair_sitting_assignment
from tests.helpers import FirstChoiceRandom, players


def test_full_field_roster_needs_no_bench():
    plan = generate_fair_sitting_assignment(players(9), seeded_random(1))
    assert isinstance(plan, SittingPlan)
    assert plan.sitting_per_inning == 0
    assert plan.assignment == {inning: [] for inning in range(6)}


def test_short_roster_needs_no_bench():
    plan = generate_fair_sitting_assignment(players(7), seeded_random(1))
    assert isinstance(plan, SittingPlan)
    assert all(not benched for benched in plan.assignment.values())


def test_ten_players_each_sit_at_most_once():
    plan = generate_fair_sitting_assignment(players(10), FirstChoiceRandom())
    assert isinstance(plan, SittingPlan)
    assert plan.sitting_per_inning == 1
    assert [plan.assignment[i] for i in range(6)] == [[name] for name in players(6)]
    assert sorted(plan.sitting_counts.values()) == [0] * 4 + [1] * 6


@pytest.mark.parametrize("count", [10, 11, 12, 13, 14, 15])
def test_bench_time_within_one_inning(count: int):
    for seed in range(5):
        plan = generate_fair_sitting_assignment(players(count), seeded_random(seed))
        assert isinstance(plan, SittingPlan)
        per_inning = count - 9
        tally: Counter = Counter()
        for inning in range(6):
            benched = plan.assignment[inning]
            assert len(benched) == per_inning
            assert len(set(benched)) == per_inning
            tally.update(benched)
        counts = [tally[name] for name in players(count)]
        assert max(counts) - min(counts) <= 1
        assert sum(counts) == per_inning * 6
        assert counts == [plan.sitting_counts[name] for name in players(count)]


def test_random_source_varies_who_sits():
    first = generate_fair_sitting_assignment(players(12), seeded_random(1))
    draws = {
        tuple(tuple(generate_fair_sitting_assignment(players(12), seeded_random(seed)).assignment[i]) for i in range(6))
        for seed in range(10)
    }
    assert isinstance(first, SittingPlan)
    assert len(draws) > 1
