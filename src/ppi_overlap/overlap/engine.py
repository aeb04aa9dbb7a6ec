"""Overlap and remainder computation between two PPI sets."""

from dataclasses import dataclass
from typing import Iterable

import structlog

from ppi_overlap.ppi.models import InteractionSet, ProteinProteinInteraction

logger = structlog.get_logger()


@dataclass(frozen=True)
class OverlapResult:
    """Partition of two PPI sets expressed in the same namespace.

    Attributes:
        intersection: PPIs present in both sets
        remainder_x: PPIs only in the first set
        remainder_y: PPIs only in the second set
    """
    intersection: InteractionSet
    remainder_x: InteractionSet
    remainder_y: InteractionSet

    @property
    def union(self) -> InteractionSet:
        return self.intersection | self.remainder_x | self.remainder_y


def compute_overlap(
    set_x: Iterable[ProteinProteinInteraction],
    set_y: Iterable[ProteinProteinInteraction],
) -> OverlapResult:
    """Split two PPI sets into their intersection and per-set remainders.

    Membership is by canonical PPI identity. The inputs are copied, never
    modified, and the three outputs are pairwise disjoint with
    ``intersection | remainder_x | remainder_y == set_x | set_y``.
    """
    x = frozenset(set_x)
    y = frozenset(set_y)
    intersection = x & y
    result = OverlapResult(
        intersection=intersection,
        remainder_x=x - intersection,
        remainder_y=y - intersection,
    )
    logger.info(
        "overlap_complete",
        set_x=len(x),
        set_y=len(y),
        overlap=len(result.intersection),
        remainder_x=len(result.remainder_x),
        remainder_y=len(result.remainder_y),
    )
    return result
