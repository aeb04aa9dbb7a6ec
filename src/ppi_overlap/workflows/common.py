"""Helpers shared by the pipeline workflows."""

import logging
from pathlib import Path
from typing import Optional

from ppi_overlap.errors import StageResult
from ppi_overlap.persistence import ProvenanceRecord, ProvenanceRepository, ProvenanceTracker

logger = logging.getLogger(__name__)


def register_source(
    repository: Optional[ProvenanceRepository],
    tracker: Optional[ProvenanceTracker],
    name: str,
    path: Path,
    category: str,
    biological_entity: str,
) -> None:
    """Record an input file as a data source of the current run."""
    if repository is None:
        return
    record = repository.add_or_get_existing(ProvenanceRecord(
        name=name,
        url=str(path),
        category=category,
        biological_entity=biological_entity,
    ))
    if tracker is not None:
        tracker.record_source(record)


def note_degraded(stage: str, result: StageResult, degraded: list[str]) -> None:
    """Log a stage that continued with empty input because a file was unreadable."""
    for error in result.errors:
        logger.warning(f"Stage '{stage}' continues with empty input: {error}")
        degraded.append(f"{stage}: {error}")
