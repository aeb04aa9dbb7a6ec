"""Pair-list, failure-log and run-summary writers."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import yaml

from ppi_overlap.id_mapping.resolver import MappingFailure, ResolutionResult
from ppi_overlap.ppi.models import PAIR_SEPARATOR, ProteinProteinInteraction


def _prepare(path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def write_pair_list(
    interactions: Iterable[ProteinProteinInteraction],
    path: Path,
) -> int:
    """
    Write PPIs as tab-separated pairs in canonical order.

    Returns:
        Number of pairs written
    """
    path = _prepare(path)
    count = 0
    with open(path, "w") as f:
        for ppi in sorted(interactions):
            f.write(f"{ppi}\n")
            count += 1
    return count


def write_mapped_pairs(result: ResolutionResult, path: Path) -> int:
    """
    Write resolved PPIs, each annotated with the source pairs it came from.

    Line format::

        P12345<TAB>Q67890<TAB>(mapped from: 4932.YAL001C 4932.YBR002W)

    Several source pairs are separated by "; ".

    Returns:
        Number of pairs written
    """
    path = _prepare(path)
    count = 0
    with open(path, "w") as f:
        for ppi in sorted(result.interactions):
            sources = "; ".join(
                " ".join(origin.canonical_key) for origin in sorted(result.origins[ppi])
            )
            f.write(f"{ppi}{PAIR_SEPARATOR}(mapped from: {sources})\n")
            count += 1
    return count


def write_failure_log(
    failures: Iterable[MappingFailure],
    path: Path,
    append: bool = False,
) -> int:
    """
    Write identifiers that had no mapping entry, one per line.

    Args:
        failures: Mapping failures in the order they were recorded
        path: Output text file
        append: Append to an existing log instead of replacing it

    Returns:
        Number of lines written
    """
    path = _prepare(path)
    count = 0
    with open(path, "a" if append else "w") as f:
        for failure in failures:
            f.write(f"{failure.identifier}\n")
            count += 1
    return count


def write_run_summary(
    statistics: dict,
    output_files: list[Path],
    path: Path,
) -> Path:
    """
    Write a YAML summary of a run next to its outputs.

    Args:
        statistics: Diagnostic counts (PPIs per source, overlap size,
            mapping failures, self-interactions skipped)
        output_files: Files produced by the run
        path: Summary file path

    Returns:
        Path of the written summary
    """
    path = _prepare(path)
    summary = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "output_files": [Path(p).name for p in output_files],
        "statistics": statistics,
    }
    with open(path, "w") as f:
        yaml.dump(summary, f, default_flow_style=False, sort_keys=False)
    return path
