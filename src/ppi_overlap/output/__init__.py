"""Output generation: pair lists, failure logs and run summaries."""

from ppi_overlap.output.writers import (
    write_failure_log,
    write_mapped_pairs,
    write_pair_list,
    write_run_summary,
)

__all__ = [
    "write_failure_log",
    "write_mapped_pairs",
    "write_pair_list",
    "write_run_summary",
]
