"""Run provenance: which inputs a run read and what each step counted."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

RUN_TABLE_NAME = "_provenance"


class ProvenanceTracker:
    """
    Collects the provenance of one pipeline run.

    A run is identified by pipeline version and config hash. Data sources are
    the ``ProvenanceRecord`` rows registered by the workflows; steps carry the
    diagnostic counts of each workflow (PPIs per source, overlap size, mapping
    failures, self-interactions skipped).
    """

    def __init__(self, pipeline_version: str, config: "PipelineConfig"):
        self.pipeline_version = pipeline_version
        self.config_hash = config.config_hash()
        self.taxon_id = config.taxon_id
        self.data_sources: list[dict] = []
        self.processing_steps: list[dict] = []
        self.created_at = datetime.now(timezone.utc)

    def record_source(self, record: "ProvenanceRecord") -> None:
        """Add a data source unless a record with the same id is already listed."""
        entry = record.model_dump()
        if entry["id"] is not None and any(s["id"] == entry["id"] for s in self.data_sources):
            return
        self.data_sources.append(entry)

    def record_step(self, step_name: str, details: Optional[dict] = None) -> None:
        """
        Record a finished step.

        Args:
            step_name: e.g. "stringdb_biogrid_overlap" or "map_yeast_to_human"
            details: Diagnostic counts of the step
        """
        step = {
            "step_name": step_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if details:
            step["details"] = details
        self.processing_steps.append(step)

    def get_steps(self) -> list[dict]:
        return self.processing_steps

    def create_metadata(self) -> dict:
        return {
            "pipeline_version": self.pipeline_version,
            "config_hash": self.config_hash,
            "taxon_id": self.taxon_id,
            "created_at": self.created_at.isoformat(),
            "data_sources": self.data_sources,
            "processing_steps": self.processing_steps,
        }

    def save_sidecar(self, output_path: Path) -> Path:
        """
        Write the run metadata next to an output as ``{path}.provenance.json``.

        Returns:
            Path of the sidecar file
        """
        sidecar_path = Path(output_path).with_suffix(".provenance.json")
        sidecar_path.parent.mkdir(parents=True, exist_ok=True)

        with open(sidecar_path, "w") as f:
            json.dump(self.create_metadata(), f, indent=2, default=str)
        return sidecar_path

    def save_to_store(self, store: "PipelineStore") -> None:
        """Append this run to the ``_provenance`` table of the store."""
        metadata = self.create_metadata()

        store.conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {RUN_TABLE_NAME} (
                version VARCHAR,
                config_hash VARCHAR,
                taxon_id VARCHAR,
                created_at TIMESTAMP,
                source_ids_json VARCHAR,
                steps_json VARCHAR
            )
        """)
        store.conn.execute(f"""
            INSERT INTO {RUN_TABLE_NAME}
                (version, config_hash, taxon_id, created_at, source_ids_json, steps_json)
            VALUES (?, ?, ?, ?, ?, ?)
        """, [
            metadata["pipeline_version"],
            metadata["config_hash"],
            metadata["taxon_id"],
            metadata["created_at"],
            json.dumps([s["id"] for s in metadata["data_sources"]]),
            json.dumps(metadata["processing_steps"], default=str),
        ])

    @staticmethod
    def load_sidecar(sidecar_path: Path) -> dict:
        with open(sidecar_path) as f:
            return json.load(f)

    @classmethod
    def from_config(
        cls,
        config: "PipelineConfig",
        version: Optional[str] = None
    ) -> "ProvenanceTracker":
        """Create a tracker; ``version`` defaults to ppi_overlap.__version__."""
        if version is None:
            from ppi_overlap import __version__
            version = __version__

        return cls(version, config)
