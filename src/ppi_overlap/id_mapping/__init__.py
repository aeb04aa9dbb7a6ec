"""Identifier mapping module.

Provides multi-valued namespace lookup tables built from mapping files and
the resolvers that translate PPI sets through them.
"""

from ppi_overlap.id_mapping.mapper import (
    FieldSpec,
    MappingStats,
    MappingTable,
    TokenMode,
    build_mapping,
    extract_tagged_token,
    extract_tokens,
    load_entrez_to_stringdb,
    load_stringdb_to_uniprot,
)
from ppi_overlap.id_mapping.resolver import (
    MappingFailure,
    ResolutionResult,
    resolve_cross_product,
    resolve_pick_one,
)

__all__ = [
    "FieldSpec",
    "MappingStats",
    "MappingTable",
    "TokenMode",
    "build_mapping",
    "extract_tagged_token",
    "extract_tokens",
    "load_entrez_to_stringdb",
    "load_stringdb_to_uniprot",
    "MappingFailure",
    "ResolutionResult",
    "resolve_cross_product",
    "resolve_pick_one",
]
