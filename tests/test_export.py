from __future__ import annotations

from pathlib import Path

import duckdb
import pytest

from dugout.export import ExportService
from dugout.lineup import calculate_analytics, validate_lineup
from dugout.persistence import AnalyticsStore
from tests.helpers import fixed_lineup, players, rotation_lineup


def _store(tmp_path: Path) -> AnalyticsStore:
    store = AnalyticsStore(tmp_path / "db" / "analytics.duckdb")
    store.initialize_schema()
    return store


def test_lineup_write_records_player_innings(tmp_path: Path):
    store = _store(tmp_path)
    names = players(11)
    lineup = fixed_lineup(names)
    errors = validate_lineup(lineup, names).errors
    store.write_lineup("L1", lineup, calculate_analytics(lineup, names), errors)

    rows = store.fetch_player_innings("L1")
    assert len(rows) == 11
    by_player = {player: (field, bench) for player, field, bench in rows}
    assert by_player["Avery"] == (6, 0)
    assert by_player["Kai"] == (0, 6)
    assert [row[0] for row in rows] == sorted(names)


def test_rewriting_a_lineup_replaces_its_rows(tmp_path: Path):
    store = _store(tmp_path)
    names = players(9)
    lineup = rotation_lineup(names)
    analytics = calculate_analytics(lineup, names)
    store.write_lineup("L1", lineup, analytics, [])
    store.write_lineup("L1", lineup, analytics, [])

    with store.connect() as conn:
        assignments = conn.execute("SELECT COUNT(*) FROM mart_lineup_assignments WHERE lineup_id = 'L1'").fetchone()[0]
        summaries = conn.execute("SELECT is_valid, fairness_score FROM mart_lineup_summaries").fetchall()
    assert assignments == 54
    assert summaries == [(True, 100)]


def test_export_csv_parquet_row_count_parity(tmp_path: Path):
    store = _store(tmp_path)
    names = players(11)
    lineup = fixed_lineup(names)
    store.write_lineup("L1", lineup, calculate_analytics(lineup, names), validate_lineup(lineup, names).errors)

    outputs = ExportService(store.db_path).export_required_datasets(tmp_path / "exports")
    csv_files = [p for p in outputs if p.suffix == ".csv"]
    parquet_files = [p for p in outputs if p.suffix == ".parquet"]
    assert len(csv_files) == 3 and len(parquet_files) == 3

    with duckdb.connect() as conn:
        for csv_path in csv_files:
            parquet_path = csv_path.with_suffix(".parquet")
            csv_count = conn.execute(f"SELECT COUNT(*) FROM read_csv_auto('{csv_path.as_posix()}')").fetchone()[0]
            parquet_count = conn.execute(f"SELECT COUNT(*) FROM parquet_scan('{parquet_path.as_posix()}')").fetchone()[0]
            assert csv_count == parquet_count
            assert csv_count > 0


def test_export_subset_of_formats(tmp_path: Path):
    store = _store(tmp_path)
    names = players(9)
    lineup = rotation_lineup(names)
    store.write_lineup("L1", lineup, calculate_analytics(lineup, names), [])

    outputs = ExportService(store.db_path).export_required_datasets(tmp_path / "exports", formats=("csv",))
    assert sorted(p.name for p in outputs) == ["lineup_assignments.csv", "lineup_summaries.csv", "player_innings.csv"]


def test_export_rejects_unknown_format(tmp_path: Path):
    store = _store(tmp_path)
    with pytest.raises(ValueError, match="unsupported export formats"):
        ExportService(store.db_path).export_required_datasets(tmp_path / "exports", formats=("xlsx",))
