"""Tests for pair-list, failure-log and summary writers."""

import yaml

from ppi_overlap.id_mapping import MappingFailure, MappingTable, resolve_pick_one
from ppi_overlap.output import (
    write_failure_log,
    write_mapped_pairs,
    write_pair_list,
    write_run_summary,
)
from ppi_overlap.ppi import IdentifierType, ProteinProteinInteraction


def _ppi(a, b):
    return ProteinProteinInteraction.from_identifiers(a, b, IdentifierType.UNIPROT_ACCESSION)


def test_pair_list_sorted_and_canonical(tmp_path):
    path = tmp_path / "pairs" / "overlap.tsv"

    count = write_pair_list({_ppi("Q9", "Q10"), _ppi("B", "A")}, path)

    assert count == 2
    assert path.read_text() == "A\tB\nQ10\tQ9\n"


def test_empty_pair_list_creates_empty_file(tmp_path):
    path = tmp_path / "empty.tsv"

    assert write_pair_list(frozenset(), path) == 0
    assert path.exists()
    assert path.read_text() == ""


def test_mapped_pairs_annotated_with_sources(tmp_path):
    table = MappingTable(IdentifierType.STRINGDB, IdentifierType.UNIPROT_ACCESSION)
    for source, target in [("S1", "U1"), ("S2", "U2"), ("S3", "U2")]:
        table.add(source, target)
    interactions = [
        ProteinProteinInteraction.from_identifiers("S2", "S1", IdentifierType.STRINGDB),
        ProteinProteinInteraction.from_identifiers("S1", "S3", IdentifierType.STRINGDB),
    ]
    result = resolve_pick_one(interactions, table)
    path = tmp_path / "mapped.tsv"

    assert write_mapped_pairs(result, path) == 1
    assert path.read_text() == "U1\tU2\t(mapped from: S1 S2; S1 S3)\n"


def test_failure_log_one_line_per_occurrence(tmp_path):
    path = tmp_path / "failures.txt"
    failures = [
        MappingFailure("107", IdentifierType.ENTREZ_GENE, IdentifierType.STRINGDB),
        MappingFailure("107", IdentifierType.ENTREZ_GENE, IdentifierType.STRINGDB),
    ]

    assert write_failure_log(failures, path) == 2
    assert path.read_text() == "107\n107\n"


def test_failure_log_append(tmp_path):
    path = tmp_path / "failures.txt"
    first = [MappingFailure("A", IdentifierType.STRINGDB, IdentifierType.UNIPROT_ACCESSION)]
    second = [MappingFailure("B", IdentifierType.STRINGDB, IdentifierType.UNIPROT_ACCESSION)]

    write_failure_log(first, path)
    write_failure_log(second, path, append=True)
    assert path.read_text() == "A\nB\n"

    write_failure_log(second, path)
    assert path.read_text() == "B\n"


def test_run_summary_yaml(tmp_path):
    output = tmp_path / "overlap.tsv"
    path = write_run_summary({"overlap": 3, "degraded_stages": []}, [output], tmp_path / "summary.yaml")

    with open(path) as f:
        summary = yaml.safe_load(f)

    assert summary["statistics"]["overlap"] == 3
    assert summary["output_files"] == ["overlap.tsv"]
    assert "generated_at" in summary
