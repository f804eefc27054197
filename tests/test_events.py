from __future__ import annotations

from dugout.contracts import LineupEvent
from tests.helpers import build_session


def test_lineup_events_reach_subscribers():
    session = build_session(10, seed=123)
    received: list[LineupEvent] = []
    session.event_bus.subscribe(received.append)

    session.generate_lineup()
    pitcher = session.generated_lineups["Pitcher"][2]
    catcher = session.generated_lineups["Catcher"][2]
    session.swap_players_in_inning(2, pitcher, catcher)
    session.clear_lineup()
    session.clear_lineup()

    assert [event.event_type for event in received] == ["lineup_generated", "players_swapped", "lineup_cleared"]
    assert received[1].players == [pitcher, catcher]
    assert received[1].detail == {"inning": 2}
    assert session.event_bus.emitted_count() == 3
    assert session.event_bus.emitted_count("lineup_cleared") == 1
