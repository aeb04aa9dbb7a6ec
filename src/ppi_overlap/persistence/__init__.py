"""Persistence layer for stage outputs, data source records and run provenance."""

from ppi_overlap.persistence.duckdb_store import PipelineStore
from ppi_overlap.persistence.provenance import ProvenanceTracker
from ppi_overlap.persistence.sources import ProvenanceRecord, ProvenanceRepository

__all__ = [
    "PipelineStore",
    "ProvenanceTracker",
    "ProvenanceRecord",
    "ProvenanceRepository",
]
