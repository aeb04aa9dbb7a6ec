"""Overlap engine for PPI sets in a common namespace."""

from ppi_overlap.overlap.engine import OverlapResult, compute_overlap

__all__ = ["OverlapResult", "compute_overlap"]
