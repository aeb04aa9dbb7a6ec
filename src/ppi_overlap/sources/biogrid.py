"""BioGrid tab2 interaction filter."""

from pathlib import Path

import polars as pl
import structlog

from ppi_overlap.errors import StageResult
from ppi_overlap.ppi.models import IdentifierType, InteractionSet
from ppi_overlap.records import build_interactions, read_records

logger = structlog.get_logger()

ORGANISM_A = "Organism Interactor A"
ORGANISM_B = "Organism Interactor B"
ENTREZ_A = "Entrez Gene Interactor A"
ENTREZ_B = "Entrez Gene Interactor B"


def filter_biogrid_pairs(
    records: pl.DataFrame,
    organism_taxon_id: str,
) -> tuple[InteractionSet, int]:
    """Keep intra-organism BioGrid PPIs as Entrez Gene pairs.

    Both organism columns must equal ``organism_taxon_id`` after trimming.
    Rows whose two Entrez ids are textually identical are self-interactions;
    they are excluded and counted, not treated as errors.

    Args:
        records: BioGrid tab2 records
        organism_taxon_id: NCBI taxon id (e.g. "9606")

    Returns:
        Tuple of (interactions, self_interactions_skipped)
    """
    if records.is_empty():
        return frozenset(), 0

    same_organism = records.filter(
        (pl.col(ORGANISM_A).str.strip_chars() == organism_taxon_id)
        & (pl.col(ORGANISM_B).str.strip_chars() == organism_taxon_id)
    )
    interactions, self_interactions = build_interactions(
        same_organism, ENTREZ_A, ENTREZ_B, IdentifierType.ENTREZ_GENE
    )
    logger.info(
        "biogrid_filter_complete",
        total_rows=records.height,
        organism=organism_taxon_id,
        organism_rows=same_organism.height,
        biogrid_ppis=len(interactions),
        self_interactions_skipped=self_interactions,
    )
    return interactions, self_interactions


def load_biogrid_ppis(
    path: Path | str,
    organism_taxon_id: str,
) -> StageResult[InteractionSet]:
    """Read a BioGrid tab2 file and filter it to one organism."""
    result = read_records(path, separator="\t")
    interactions, _ = filter_biogrid_pairs(result.value, organism_taxon_id)
    return StageResult.combine(interactions, result)
