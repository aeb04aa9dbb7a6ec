"""DuckDB storage for PPI sets and mapping tables produced by a run."""

from pathlib import Path
from typing import Iterable, Optional

import duckdb
import polars as pl

from ppi_overlap.ppi.models import (
    IdentifierType,
    InteractionSet,
    Protein,
    ProteinProteinInteraction,
)

PPI_SCHEMA = {"protein_a": pl.Utf8, "protein_b": pl.Utf8, "identifier_type": pl.Utf8}


class PipelineStore:
    """
    DuckDB database holding the stage outputs of pipeline runs.

    Every saved table is registered in ``_stage_tables`` with its row count and
    a description, so a finished run can be inspected with SQL.
    """

    def __init__(self, db_path: Path):
        """
        Open (or create) the database.

        Args:
            db_path: Path to DuckDB database file. Parent directories
                     are created automatically.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = duckdb.connect(str(self.db_path))

        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS _stage_tables (
                table_name VARCHAR PRIMARY KEY,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                row_count INTEGER,
                description VARCHAR
            )
        """)

    def save_dataframe(self, df: pl.DataFrame, table_name: str, description: str = "") -> None:
        """Create or replace ``table_name`` with the contents of ``df``."""
        if not isinstance(df, pl.DataFrame):
            raise ValueError("df must be polars.DataFrame")

        self.conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS SELECT * FROM df")
        self.conn.execute("""
            INSERT OR REPLACE INTO _stage_tables (table_name, row_count, description, created_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
        """, [table_name, df.height, description])

    def save_interactions(
        self,
        interactions: Iterable[ProteinProteinInteraction],
        table_name: str,
        description: str = "",
    ) -> None:
        """
        Save a PPI set as canonical pairs, one row per PPI in canonical order.

        Columns: protein_a, protein_b, identifier_type
        """
        ordered = sorted(interactions)
        df = pl.DataFrame(
            {
                "protein_a": [p.protein_a.identifier_value for p in ordered],
                "protein_b": [p.protein_b.identifier_value for p in ordered],
                "identifier_type": [p.protein_a.identifier_type.value for p in ordered],
            },
            schema=PPI_SCHEMA,
        )
        self.save_dataframe(df, table_name, description)

    def load_interactions(self, table_name: str) -> Optional[InteractionSet]:
        """Rebuild a PPI set saved with ``save_interactions``, or None if absent."""
        df = self.load_dataframe(table_name)
        if df is None:
            return None
        return frozenset(
            ProteinProteinInteraction(
                Protein(a, IdentifierType(identifier_type)),
                Protein(b, IdentifierType(identifier_type)),
            )
            for a, b, identifier_type in df.select(list(PPI_SCHEMA)).iter_rows()
        )

    def save_mapping(self, table: "MappingTable", table_name: str) -> None:
        """Save a mapping table as (source_id, target_id) rows."""
        self.save_dataframe(
            table.to_dataframe(),
            table_name,
            f"{table.name} mapping ({len(table)} keys)",
        )

    def load_dataframe(self, table_name: str) -> Optional[pl.DataFrame]:
        """Load a table, or None if it doesn't exist."""
        try:
            return self.conn.execute(f"SELECT * FROM {table_name}").pl()
        except duckdb.CatalogException:
            return None

    def has_table(self, table_name: str) -> bool:
        row = self.conn.execute(
            "SELECT COUNT(*) FROM _stage_tables WHERE table_name = ?",
            [table_name]
        ).fetchone()
        return row[0] > 0

    def list_tables(self) -> list[dict]:
        """
        Registered stage tables, most recent first.

        Returns:
            Dicts with keys table_name, created_at, row_count, description
        """
        rows = self.conn.execute("""
            SELECT table_name, created_at, row_count, description
            FROM _stage_tables
            ORDER BY created_at DESC, table_name
        """).fetchall()
        keys = ("table_name", "created_at", "row_count", "description")
        return [dict(zip(keys, row)) for row in rows]

    def drop_table(self, table_name: str) -> None:
        self.conn.execute(f"DROP TABLE IF EXISTS {table_name}")
        self.conn.execute(
            "DELETE FROM _stage_tables WHERE table_name = ?",
            [table_name]
        )

    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @classmethod
    def from_config(cls, config: "PipelineConfig") -> "PipelineStore":
        return cls(config.duckdb_path)
