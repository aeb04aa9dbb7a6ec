"""Ortholog pair filter for HCOP/PANTHER-style ortholog tables.

Each line is tab-separated with no header. Columns 0 and 1 are composites
such as ``HUMAN|HGNC=11477|UniProtKB=Q8NBK3``; column 4 is the gene family
label. The resulting table maps an identifier of one species onto the set of
its orthologs' identifiers in the reference species; one gene may map to
several genes and vice versa.
"""

from pathlib import Path
from typing import Optional

import polars as pl
import structlog

from ppi_overlap.errors import StageResult
from ppi_overlap.id_mapping.mapper import (
    COMPOUND_SEPARATOR,
    UNIPROT_TAG,
    MappingTable,
    extract_tagged_token,
)
from ppi_overlap.ppi.models import IdentifierType
from ppi_overlap.records import read_records

logger = structlog.get_logger()

HUMAN = "HUMAN"
GENE_FAMILY_COLUMN = 4


def _species(composite: Optional[str]) -> Optional[str]:
    if not composite:
        return None
    return composite.split(COMPOUND_SEPARATOR, 1)[0]


def filter_ortholog_pairs(
    rows: pl.DataFrame,
    species_a: str,
    species_b: str = HUMAN,
    allow_bidirectional: bool = True,
) -> MappingTable:
    """Build a ``species_a`` -> ``species_b`` ortholog table.

    A row is used when its two columns name different species and either
    column 0 is ``species_a`` and column 1 is ``species_b`` (the configured
    direction) or, with ``allow_bidirectional``, the reverse.

    Args:
        rows: Ortholog records (headerless)
        species_a: Species whose identifiers become the keys (e.g. "YEAST")
        species_b: Species whose identifiers become the values (default: HUMAN)
        allow_bidirectional: Also accept rows listing ``species_b`` first

    Returns:
        MappingTable from ``species_a`` UniProt ids to ``species_b`` UniProt ids
    """
    table = MappingTable(
        IdentifierType.ORTHOLOG_SOURCE_ID,
        IdentifierType.UNIPROT_ACCESSION,
        name=f"{species_a}->{species_b} orthologs",
    )
    if rows.is_empty() or rows.width < 2:
        return table

    stats = table.stats
    families: set[str] = set()
    for row in rows.iter_rows():
        stats.rows_total += 1
        first, second = row[0], row[1]
        species_first, species_second = _species(first), _species(second)

        if species_first is None or species_second is None or species_first == species_second:
            stats.rows_filtered += 1
            continue

        if species_first == species_a and species_second == species_b:
            source_field, target_field = first, second
        elif allow_bidirectional and species_first == species_b and species_second == species_a:
            source_field, target_field = second, first
        else:
            stats.rows_filtered += 1
            continue

        source_id = extract_tagged_token(source_field.split(COMPOUND_SEPARATOR), UNIPROT_TAG)
        target_id = extract_tagged_token(target_field.split(COMPOUND_SEPARATOR), UNIPROT_TAG)
        if source_id is None or target_id is None:
            stats.rows_skipped += 1
            continue

        table.add(source_id, target_id)
        if len(row) > GENE_FAMILY_COLUMN and row[GENE_FAMILY_COLUMN]:
            families.add(row[GENE_FAMILY_COLUMN])

    logger.info(
        "ortholog_filter_complete",
        species_a=species_a,
        species_b=species_b,
        allow_bidirectional=allow_bidirectional,
        total_rows=stats.rows_total,
        other_species_rows=stats.rows_filtered,
        rows_without_uniprot=stats.rows_skipped,
        ortholog_proteins=len(table),
        gene_families=len(families),
    )
    return table


def load_ortholog_table(
    path: Path | str,
    species_a: str,
    species_b: str = HUMAN,
    allow_bidirectional: bool = True,
) -> StageResult[MappingTable]:
    """Read an ortholog file and build the ``species_a`` -> ``species_b`` table."""
    result = read_records(path, separator="\t", has_header=False)
    table = filter_ortholog_pairs(result.value, species_a, species_b, allow_bidirectional)
    return StageResult.combine(table, result)
