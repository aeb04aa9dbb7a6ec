"""Data source provenance records with get-or-insert semantics.

A provenance record describes where a set of interactions came from. Records
are deduplicated on the exact (name, url, category, biological_entity) tuple:
registering the same source twice returns the stored record.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ppi_overlap.persistence.duckdb_store import PipelineStore

PROVENANCE_TABLE_NAME = "provenance_records"


class ProvenanceRecord(BaseModel):
    """A data source that interactions were derived from."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Assigned on insert")
    name: str = Field(..., description="Source name (e.g. StringDB)")
    url: str = Field(default="", description="Download location or file path")
    category: str = Field(default="", description="Kind of evidence (e.g. PPI, mapping)")
    biological_entity: str = Field(default="", description="Organism or entity covered")


class ProvenanceRepository:
    """DuckDB-backed store of ProvenanceRecord rows."""

    def __init__(self, store: PipelineStore):
        self.store = store
        self.store.conn.execute(f"""
            CREATE SEQUENCE IF NOT EXISTS {PROVENANCE_TABLE_NAME}_id_seq START 1
        """)
        self.store.conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {PROVENANCE_TABLE_NAME} (
                id INTEGER PRIMARY KEY DEFAULT nextval('{PROVENANCE_TABLE_NAME}_id_seq'),
                name VARCHAR NOT NULL,
                url VARCHAR NOT NULL,
                category VARCHAR NOT NULL,
                biological_entity VARCHAR NOT NULL
            )
        """)

    @staticmethod
    def _to_record(row: tuple) -> ProvenanceRecord:
        return ProvenanceRecord(
            id=row[0],
            name=row[1],
            url=row[2],
            category=row[3],
            biological_entity=row[4],
        )

    def get_by_id(self, record_id: int) -> Optional[ProvenanceRecord]:
        """Return the record with this id, or None if there is none."""
        row = self.store.conn.execute(
            f"SELECT id, name, url, category, biological_entity "
            f"FROM {PROVENANCE_TABLE_NAME} WHERE id = ?",
            [record_id],
        ).fetchone()
        return self._to_record(row) if row else None

    def get_by_name(self, name: str) -> list[ProvenanceRecord]:
        rows = self.store.conn.execute(
            f"SELECT id, name, url, category, biological_entity "
            f"FROM {PROVENANCE_TABLE_NAME} WHERE name = ? ORDER BY id",
            [name],
        ).fetchall()
        return [self._to_record(row) for row in rows]

    def add_or_get_existing(self, record: ProvenanceRecord) -> ProvenanceRecord:
        """Store a record unless an identical one exists.

        Args:
            record: Record without an id

        Returns:
            The existing record when name, url, category and biological_entity
            all match one already stored; otherwise the input with its newly
            assigned id.
        """
        key = [record.name, record.url, record.category, record.biological_entity]
        row = self.store.conn.execute(
            f"SELECT id, name, url, category, biological_entity "
            f"FROM {PROVENANCE_TABLE_NAME} "
            f"WHERE name = ? AND url = ? AND category = ? AND biological_entity = ? "
            f"ORDER BY id LIMIT 1",
            key,
        ).fetchone()
        if row:
            return self._to_record(row)

        new_id = self.store.conn.execute(
            f"INSERT INTO {PROVENANCE_TABLE_NAME} (name, url, category, biological_entity) "
            f"VALUES (?, ?, ?, ?) RETURNING id",
            key,
        ).fetchone()[0]
        return record.model_copy(update={"id": new_id})
