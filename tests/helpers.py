from __future__ import annotations

from typing import Any, Sequence

from dugout.lineup import POSITIONS
from dugout.session import LineupSession

PLAYER_NAMES = [
    "Avery", "Blake", "Casey", "Drew", "Emery", "Finley", "Gray", "Harper",
    "Indy", "Jordan", "Kai", "Logan", "Morgan", "Noel", "Oakley",
]


def players(count: int) -> list[str]:
    return PLAYER_NAMES[:count]


def all_capable(names: Sequence[str]) -> dict[str, list[str]]:
    return {name: list(POSITIONS) for name in names}


def build_session(count: int, seed: int = 7, **kwargs: Any) -> LineupSession:
    session = LineupSession(seed=seed, **kwargs)
    for name in players(count):
        session.add_player(name)
        session.player_capabilities[name] = list(POSITIONS)
    return session


def rotation_lineup(names: Sequence[str]) -> dict[str, list[str]]:
    """Nine players, positions shifted by three every two innings; satisfies every rule."""
    assert len(names) == 9
    lineup: dict[str, list[str]] = {position: [] for position in POSITIONS}
    for inning in range(6):
        shift = 3 * (inning // 2)
        for index, position in enumerate(POSITIONS):
            lineup[position].append(names[(index + shift) % 9])
    return lineup


def fixed_lineup(names: Sequence[str]) -> dict[str, list[str]]:
    """First nine players each hold one position for all six innings; the rest sit throughout."""
    lineup = {position: [names[i]] * 6 for i, position in enumerate(POSITIONS)}
    for slot, name in enumerate(names[9:]):
        lineup[f"Sitting {slot + 1}"] = [name] * 6
    return lineup


def inning_occupants(lineup: dict[str, list[str]], inning: int) -> list[str]:
    return [row[inning] for row in lineup.values() if row[inning]]


class FirstChoiceRandom:
    """Always takes the first candidate and never reorders; makes draws predictable."""

    def choice(self, items):
        return items[0]

    def shuffle(self, items) -> None:
        return None

    def spawn(self, substream_id: str) -> "FirstChoiceRandom":
        return self
