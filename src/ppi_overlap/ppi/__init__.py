"""Protein and PPI entities with order-independent identity."""

from ppi_overlap.ppi.models import (
    PAIR_SEPARATOR,
    IdentifierType,
    InteractionSet,
    Protein,
    ProteinProteinInteraction,
    sorted_interactions,
)

__all__ = [
    "PAIR_SEPARATOR",
    "IdentifierType",
    "InteractionSet",
    "Protein",
    "ProteinProteinInteraction",
    "sorted_interactions",
]
