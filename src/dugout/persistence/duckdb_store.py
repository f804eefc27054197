from __future__ import annotations

from pathlib import Path
from typing import Any

import duckdb

from dugout.contracts import Lineup
from dugout.lineup.models import AnalyticsData
from dugout.lineup.rules import POSITIONS


class AnalyticsStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> Any:
        return duckdb.connect(str(self.db_path))

    def initialize_schema(self) -> None:
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS mart_lineup_assignments (
                    lineup_id VARCHAR,
                    inning INTEGER,
                    slot VARCHAR,
                    player VARCHAR,
                    on_field BOOLEAN,
                    PRIMARY KEY(lineup_id, inning, slot)
                );

                CREATE TABLE IF NOT EXISTS mart_player_innings (
                    lineup_id VARCHAR,
                    player VARCHAR,
                    field_innings INTEGER,
                    infield_innings INTEGER,
                    outfield_innings INTEGER,
                    bench_innings INTEGER,
                    PRIMARY KEY(lineup_id, player)
                );

                CREATE TABLE IF NOT EXISTS mart_lineup_summaries (
                    lineup_id VARCHAR PRIMARY KEY,
                    total_players INTEGER,
                    total_innings INTEGER,
                    average_field_time DOUBLE,
                    average_bench_time DOUBLE,
                    fairness_score INTEGER,
                    is_valid BOOLEAN,
                    error_count INTEGER
                );
                """
            )

    def write_lineup(
        self,
        lineup_id: str,
        lineup: Lineup,
        analytics: AnalyticsData,
        errors: list[str],
    ) -> None:
        assignment_rows = [
            (lineup_id, inning + 1, slot, player, slot in POSITIONS)
            for slot, row in lineup.items()
            for inning, player in enumerate(row)
            if player
        ]
        player_rows = [
            (
                lineup_id,
                freq.player,
                freq.field_innings,
                freq.infield_innings,
                freq.outfield_innings,
                freq.bench_innings,
            )
            for freq in analytics.player_frequencies
        ]
        summary = analytics.summary
        with self.connect() as conn:
            conn.execute("DELETE FROM mart_lineup_assignments WHERE lineup_id = ?", [lineup_id])
            conn.execute("DELETE FROM mart_player_innings WHERE lineup_id = ?", [lineup_id])
            conn.execute("DELETE FROM mart_lineup_summaries WHERE lineup_id = ?", [lineup_id])
            if assignment_rows:
                conn.executemany("INSERT INTO mart_lineup_assignments VALUES (?, ?, ?, ?, ?)", assignment_rows)
            if player_rows:
                conn.executemany("INSERT INTO mart_player_innings VALUES (?, ?, ?, ?, ?, ?)", player_rows)
            conn.execute(
                "INSERT INTO mart_lineup_summaries VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    lineup_id,
                    summary.total_players,
                    summary.total_innings,
                    summary.average_field_time,
                    summary.average_bench_time,
                    summary.fairness_score,
                    not errors,
                    len(errors),
                ],
            )

    def fetch_player_innings(self, lineup_id: str) -> list[tuple[str, int, int]]:
        with self.connect() as conn:
            return conn.execute(
                "SELECT player, field_innings, bench_innings FROM mart_player_innings WHERE lineup_id = ? ORDER BY player",
                [lineup_id],
            ).fetchall()
