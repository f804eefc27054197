from __future__ import annotations

import hashlib
import random
from typing import Any, Sequence

from dugout.contracts import RandomSource

LINEUP_STREAM = "lineup"
BATTING_ORDER_STREAM = "batting_order"


def derive_seed(seed: int, stream: str) -> int:
    """Stable child seed so independent draws (lineups, batting order) never share a sequence."""
    digest = hashlib.sha256(f"{seed}:{stream}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class LineupRandom(RandomSource):
    """Random draws for sitting ties, position picks and batting order shuffles."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("cannot draw from an empty candidate list")
        return self._rng.choice(items)

    def shuffle(self, items: list[Any]) -> None:
        self._rng.shuffle(items)

    def spawn(self, substream_id: str) -> LineupRandom:
        if self.seed is None:
            return LineupRandom()
        return LineupRandom(derive_seed(self.seed, substream_id))


def seeded_random(seed: int) -> LineupRandom:
    return LineupRandom(seed)


def random_source_for(seed: int | None) -> LineupRandom:
    # None draws from OS entropy; any int replays the same lineups.
    return LineupRandom(seed)
