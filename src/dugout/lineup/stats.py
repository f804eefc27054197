from __future__ import annotations

from typing import Sequence

from dugout.contracts import Lineup, PlayerStats
from dugout.lineup.rules import INNING_COUNT, POSITIONS, empty_stats, is_infield_position


def calculate_player_stats(lineup: Lineup, attending: Sequence[str]) -> dict[str, PlayerStats]:
    """Recount field and bench innings for every attending player.

    Unfilled cells and names outside ``attending`` are ignored. Anyone attending who is
    not on the field in an inning is counted on the bench for it, whether or not the
    lineup lists them in a sitting row.
    """
    stats = {player: empty_stats() for player in attending}
    for inning in range(INNING_COUNT):
        on_field: set[str] = set()
        for position in POSITIONS:
            row = lineup.get(position, [])
            player = row[inning] if inning < len(row) else ""
            if player and player in stats:
                stats[player].position_counts[position] += 1
                if is_infield_position(position):
                    stats[player].infield_innings += 1
                on_field.add(player)
        for player in attending:
            if player not in on_field:
                stats[player].bench_innings += 1
    return stats
