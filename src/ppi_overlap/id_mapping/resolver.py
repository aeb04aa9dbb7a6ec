"""Translate PPI sets into another identifier namespace.

Two resolution strategies are provided:

- ``resolve_pick_one``: each endpoint is replaced by a single representative
  target identifier (the lexicographically smallest one). Used when mapping a
  species' PPIs onto UniProt/human identifiers.
- ``resolve_cross_product``: every mapped value of endpoint A is paired with
  every mapped value of endpoint B. Used for BioGrid/StringDB cross-referencing.

For the same input the cross-product result is a superset of the pick-one
result and usually larger; callers choose the strategy explicitly.

Both strategies share the same miss and self-interaction policy: an endpoint
without a mapping is recorded as a failure and the whole PPI is dropped; a
pair whose endpoints resolve to the same identifier is dropped and counted.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ppi_overlap.id_mapping.mapper import MappingTable
from ppi_overlap.ppi.models import (
    IdentifierType,
    InteractionSet,
    Protein,
    ProteinProteinInteraction,
)

logger = logging.getLogger(__name__)

PICK_ONE = "pick_one"
CROSS_PRODUCT = "cross_product"


@dataclass(frozen=True)
class MappingFailure:
    """An identifier that had no entry in a required mapping table.

    Attributes:
        identifier: Raw identifier value that failed to map
        identifier_type: Namespace of the identifier
        target_type: Namespace it was expected to map into
    """
    identifier: str
    identifier_type: IdentifierType
    target_type: IdentifierType


@dataclass
class ResolutionResult:
    """Outcome of resolving a PPI set into a target namespace.

    Attributes:
        interactions: Resolved PPIs in the target namespace
        failures: One entry per unmapped endpoint occurrence
        self_interactions: Pairs dropped because both endpoints resolved to
            the same identifier
        origins: For each resolved PPI, the source PPIs it was mapped from
        strategy: Name of the strategy that produced the result
    """
    interactions: InteractionSet
    failures: list[MappingFailure] = field(default_factory=list)
    self_interactions: int = 0
    origins: dict[ProteinProteinInteraction, set[ProteinProteinInteraction]] = field(
        default_factory=dict
    )
    strategy: str = ""

    @property
    def failed_identifiers(self) -> list[str]:
        return [f.identifier for f in self.failures]


def _lookup(
    protein: Protein,
    mapping: MappingTable,
    failures: list[MappingFailure],
) -> frozenset[str]:
    mapped = mapping.resolve(protein.identifier_value)
    if not mapped:
        failures.append(MappingFailure(
            identifier=protein.identifier_value,
            identifier_type=protein.identifier_type,
            target_type=mapping.target_type,
        ))
    return mapped


def _resolve(
    interactions: Iterable[ProteinProteinInteraction],
    mapping: MappingTable,
    target_type: Optional[IdentifierType],
    strategy: str,
) -> ResolutionResult:
    target_type = target_type or mapping.target_type
    failures: list[MappingFailure] = []
    origins: dict[ProteinProteinInteraction, set[ProteinProteinInteraction]] = {}
    self_interactions = 0
    total = 0

    # Sorted so the failure list order does not depend on set iteration order
    for ppi in sorted(interactions):
        total += 1
        mapped_a = _lookup(ppi.protein_a, mapping, failures)
        mapped_b = _lookup(ppi.protein_b, mapping, failures)
        if not mapped_a or not mapped_b:
            continue

        if strategy == PICK_ONE:
            combinations = [(min(mapped_a), min(mapped_b))]
        else:
            combinations = [(a, b) for a in sorted(mapped_a) for b in sorted(mapped_b)]

        for value_a, value_b in combinations:
            if value_a == value_b:
                self_interactions += 1
                continue
            resolved = ProteinProteinInteraction.from_identifiers(value_a, value_b, target_type)
            origins.setdefault(resolved, set()).add(ppi)

    result = ResolutionResult(
        interactions=frozenset(origins),
        failures=failures,
        self_interactions=self_interactions,
        origins=origins,
        strategy=strategy,
    )
    logger.info(
        f"Resolved {total} PPIs via {mapping.name} ({strategy}): "
        f"{len(result.interactions)} mapped, {len(failures)} endpoint mapping failures, "
        f"{self_interactions} self-interactions after mapping dropped"
    )
    return result


def resolve_pick_one(
    interactions: Iterable[ProteinProteinInteraction],
    mapping: MappingTable,
    target_type: Optional[IdentifierType] = None,
) -> ResolutionResult:
    """Resolve each endpoint to one representative identifier.

    When an identifier maps to several targets, the lexicographically smallest
    is used so that repeated runs give the same result.

    Args:
        interactions: PPIs in the mapping table's source namespace
        mapping: Lookup table into the target namespace
        target_type: Namespace to tag resolved proteins with
            (default: the table's target namespace)

    Returns:
        ResolutionResult with at most one resolved PPI per input PPI
    """
    return _resolve(interactions, mapping, target_type, PICK_ONE)


def resolve_cross_product(
    interactions: Iterable[ProteinProteinInteraction],
    mapping: MappingTable,
    target_type: Optional[IdentifierType] = None,
) -> ResolutionResult:
    """Resolve each PPI into every combination of its endpoints' mapped values.

    Args:
        interactions: PPIs in the mapping table's source namespace
        mapping: Lookup table into the target namespace
        target_type: Namespace to tag resolved proteins with
            (default: the table's target namespace)

    Returns:
        ResolutionResult; one input PPI may yield several resolved PPIs
    """
    return _resolve(interactions, mapping, target_type, CROSS_PRODUCT)
