"""Interaction sources: StringDB, BioGrid and ortholog tables.

Each source module filters raw records into canonical PPI sets (or, for
orthologs, a lookup table) and offers a loader that reads the file and
reports missing input as a degraded StageResult.
"""

from ppi_overlap.sources.biogrid import filter_biogrid_pairs, load_biogrid_ppis
from ppi_overlap.sources.orthologs import (
    HUMAN,
    filter_ortholog_pairs,
    load_ortholog_table,
)
from ppi_overlap.sources.stringdb import (
    filter_binding,
    filter_by_evidence_score,
    intersect_binding_and_evidence,
    load_binding_ppis_with_evidence,
)

__all__ = [
    "filter_biogrid_pairs",
    "load_biogrid_ppis",
    "HUMAN",
    "filter_ortholog_pairs",
    "load_ortholog_table",
    "filter_binding",
    "filter_by_evidence_score",
    "intersect_binding_and_evidence",
    "load_binding_ppis_with_evidence",
]
