from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import duckdb

EXPORT_TABLES = {
    "mart_lineup_assignments": "lineup_assignments",
    "mart_player_innings": "player_innings",
    "mart_lineup_summaries": "lineup_summaries",
}

COPY_OPTIONS = {
    "csv": "(HEADER, DELIMITER ',')",
    "parquet": "(FORMAT PARQUET)",
}


class ExportService:
    """Copies the lineup marts out of the analytics database as flat files."""

    def __init__(self, analytics_db: Path) -> None:
        self.analytics_db = analytics_db

    def export_required_datasets(self, output_dir: Path, formats: Sequence[str] = ("csv", "parquet")) -> list[Path]:
        unknown = [fmt for fmt in formats if fmt not in COPY_OPTIONS]
        if unknown:
            raise ValueError(f"unsupported export formats: {unknown}")
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        with duckdb.connect(str(self.analytics_db)) as conn:
            for table, stem in EXPORT_TABLES.items():
                for fmt in formats:
                    outputs.append(self._copy(conn, table, (output_dir / stem).with_suffix(f".{fmt}"), fmt))
        return outputs

    def _copy(self, conn: Any, table: str, path: Path, fmt: str) -> Path:
        conn.execute(f"COPY (SELECT * FROM {table} ORDER BY ALL) TO '{path.as_posix()}' {COPY_OPTIONS[fmt]}")
        return path
