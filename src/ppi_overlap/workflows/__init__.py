"""End-to-end workflows combining sources, identifier mapping and overlap."""

from ppi_overlap.workflows.species_to_human import (
    SpeciesMappingSummary,
    run_species_to_human,
)
from ppi_overlap.workflows.stringdb_biogrid import (
    OverlapSummary,
    run_stringdb_biogrid_overlap,
)

__all__ = [
    "SpeciesMappingSummary",
    "run_species_to_human",
    "OverlapSummary",
    "run_stringdb_biogrid_overlap",
]
