"""StringDB interaction filters: binding mode and experimental evidence.

Reads ``<taxon>.protein.actions.*`` (tab-separated, header) and
``<taxon>.protein.links.full.*`` (space-separated, header) files and keeps
PPIs that are both annotated as binding and supported by experiments.
"""

from pathlib import Path

import polars as pl
import structlog

from ppi_overlap.errors import ParseError, StageResult
from ppi_overlap.ppi.models import IdentifierType, InteractionSet
from ppi_overlap.records import build_interactions, read_records

logger = structlog.get_logger()

# protein.actions columns
MODE_COLUMN = "mode"
ACTION_ITEM_A = "item_id_a"
ACTION_ITEM_B = "item_id_b"
BINDING_MODE = "binding"

# protein.links.full columns
LINK_PROTEIN_A = "protein1"
LINK_PROTEIN_B = "protein2"
EXPERIMENTS_COLUMN = "experiments"


def filter_binding(records: pl.DataFrame) -> InteractionSet:
    """Keep PPIs whose action mode is exactly ``binding``.

    Args:
        records: protein.actions records

    Returns:
        Canonical STRINGDB PPIs; A->B and B->A action rows collapse into one
    """
    if records.is_empty():
        return frozenset()

    binding = records.filter(pl.col(MODE_COLUMN) == BINDING_MODE)
    interactions, self_interactions = build_interactions(
        binding, ACTION_ITEM_A, ACTION_ITEM_B, IdentifierType.STRINGDB
    )
    logger.info(
        "stringdb_binding_complete",
        action_rows=records.height,
        binding_rows=binding.height,
        binding_ppis=len(interactions),
        self_interactions=self_interactions,
    )
    return interactions


def filter_by_evidence_score(
    records: pl.DataFrame,
    score_column: str = EXPERIMENTS_COLUMN,
    threshold: int = 0,
    source: str = "protein.links",
) -> InteractionSet:
    """Keep PPIs whose integer evidence score is strictly above ``threshold``.

    Every row's score must parse as an integer. A single malformed value
    aborts the load; no partial result is returned.

    Args:
        records: protein.links records
        score_column: Column holding the integer evidence score
        threshold: Rows with score > threshold are kept
        source: Name of the input, used in error messages

    Returns:
        Canonical STRINGDB PPIs passing the threshold

    Raises:
        ParseError: If the score column is missing or any value is not an integer
    """
    if records.is_empty():
        return frozenset()
    if score_column not in records.columns:
        raise ParseError(source, score_column, None)

    parsed = records.with_row_index("_row").with_columns(
        pl.col(score_column).str.strip_chars().cast(pl.Int64, strict=False).alias("_score")
    )
    malformed = parsed.filter(pl.col("_score").is_null())
    if malformed.height > 0:
        first = malformed.row(0, named=True)
        logger.error(
            "stringdb_score_parse_failed",
            source=source,
            column=score_column,
            value=first[score_column],
            row=first["_row"],
            malformed_rows=malformed.height,
        )
        raise ParseError(source, score_column, first[score_column], row=first["_row"])

    kept = parsed.filter(pl.col("_score") > threshold)
    interactions, self_interactions = build_interactions(
        kept, LINK_PROTEIN_A, LINK_PROTEIN_B, IdentifierType.STRINGDB
    )
    logger.info(
        "stringdb_evidence_complete",
        link_rows=records.height,
        score_column=score_column,
        threshold=threshold,
        kept_rows=kept.height,
        evidence_ppis=len(interactions),
        self_interactions=self_interactions,
    )
    return interactions


def intersect_binding_and_evidence(
    binding: InteractionSet,
    evidence: InteractionSet,
) -> InteractionSet:
    """Intersect two PPI sets by canonical identity, leaving both inputs untouched."""
    both = frozenset(binding) & frozenset(evidence)
    logger.info(
        "stringdb_intersection_complete",
        binding_ppis=len(binding),
        evidence_ppis=len(evidence),
        binding_with_evidence=len(both),
    )
    return both


def load_binding_ppis_with_evidence(
    actions_path: Path | str,
    links_path: Path | str,
    score_column: str = EXPERIMENTS_COLUMN,
    threshold: int = 0,
) -> StageResult[InteractionSet]:
    """Load StringDB PPIs that are binding and experimentally supported.

    A missing or unreadable input degrades to an empty set for that half,
    which makes the intersection empty; the failure is reported in the result.

    Raises:
        ParseError: If the links file carries a non-integer score
    """
    links = read_records(links_path, separator=" ")
    evidence = filter_by_evidence_score(
        links.value, score_column, threshold, source=str(links_path)
    )

    actions = read_records(actions_path, separator="\t")
    binding = filter_binding(actions.value)

    return StageResult.combine(intersect_binding_and_evidence(binding, evidence), links, actions)
