"""StringDB / BioGrid PPI overlap for the reference organism.

Steps:
1. StringDB PPIs that are binding and have experiments > threshold
2. BioGrid intra-organism PPIs as Entrez Gene pairs
3. Cross-product mapping of BioGrid PPIs into StringDB identifiers
4. Overlap and remainders in the StringDB namespace
5. Cross-product rendering of each partition into UniProt accessions
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ppi_overlap.config.schema import PipelineConfig
from ppi_overlap.id_mapping import (
    load_entrez_to_stringdb,
    load_stringdb_to_uniprot,
    resolve_cross_product,
)
from ppi_overlap.output import write_failure_log, write_pair_list, write_run_summary
from ppi_overlap.overlap import compute_overlap
from ppi_overlap.persistence import PipelineStore, ProvenanceRepository, ProvenanceTracker
from ppi_overlap.ppi.models import IdentifierType
from ppi_overlap.sources import load_binding_ppis_with_evidence, load_biogrid_ppis
from ppi_overlap.workflows.common import note_degraded, register_source

logger = logging.getLogger(__name__)

OVERLAP_DIR = "overlaps"
OVERLAP_FILE = "StringDB-BioGrid-PPIoverlap.tsv"
STRINGDB_ONLY_FILE = "StringDB-only-PPIs.tsv"
BIOGRID_ONLY_FILE = "BioGrid-only-PPIs.tsv"
BIOGRID_FAILURES_FILE = "failedMappingsFromBioGrid.txt"
UNIPROT_FAILURES_FILE = "stringToUniprotMappingFailure.txt"


@dataclass
class OverlapSummary:
    """Diagnostic counts of a StringDB/BioGrid overlap run."""
    stringdb_ppis: int = 0
    biogrid_ppis: int = 0
    entrez_to_stringdb_keys: int = 0
    mapped_biogrid_ppis: int = 0
    biogrid_mapping_failures: int = 0
    biogrid_self_interactions_after_mapping: int = 0
    overlap: int = 0
    stringdb_only: int = 0
    biogrid_only: int = 0
    uniprot_mapping_failures: int = 0
    degraded_stages: list[str] = field(default_factory=list)
    output_files: list[Path] = field(default_factory=list)

    def statistics(self) -> dict:
        return {
            "stringdb_ppis": self.stringdb_ppis,
            "biogrid_ppis": self.biogrid_ppis,
            "entrez_to_stringdb_keys": self.entrez_to_stringdb_keys,
            "mapped_biogrid_ppis": self.mapped_biogrid_ppis,
            "biogrid_mapping_failures": self.biogrid_mapping_failures,
            "biogrid_self_interactions_after_mapping": self.biogrid_self_interactions_after_mapping,
            "overlap": self.overlap,
            "stringdb_only": self.stringdb_only,
            "biogrid_only": self.biogrid_only,
            "uniprot_mapping_failures": self.uniprot_mapping_failures,
            "degraded_stages": self.degraded_stages,
        }


def run_stringdb_biogrid_overlap(
    config: PipelineConfig,
    store: Optional[PipelineStore] = None,
    provenance: Optional[ProvenanceTracker] = None,
) -> OverlapSummary:
    """Compute the StringDB/BioGrid overlap and write the partitions.

    Args:
        config: Pipeline configuration
        store: Optional store receiving the PPI sets
        provenance: Optional tracker receiving sources and step counts

    Returns:
        OverlapSummary with diagnostic counts and written files

    Raises:
        ParseError: If the StringDB links file has a non-integer score
    """
    summary = OverlapSummary()
    taxon = config.taxon_id
    output_dir = config.output_dir / OVERLAP_DIR
    repository = ProvenanceRepository(store) if store is not None else None

    actions_path = config.resolve_path(config.stringdb.actions_file)
    links_path = config.resolve_path(config.stringdb.links_file)
    biogrid_path = config.resolve_path(config.biogrid.file)
    entrez_path = config.resolve_path(config.mappings.entrez_to_stringdb)
    uniprot_path = config.resolve_path(config.mappings.stringdb_to_uniprot)

    for source_name, path, category in [
        ("StringDB protein.actions", actions_path, "PPI"),
        ("StringDB protein.links", links_path, "PPI"),
        ("BioGrid", biogrid_path, "PPI"),
        ("StringDB entrez_2_string", entrez_path, "identifier mapping"),
        ("StringDB uniprot_2_string", uniprot_path, "identifier mapping"),
    ]:
        register_source(repository, provenance, source_name, path, category, taxon)

    # 1. StringDB
    logger.info("Calculating StringDB/BioGrid PPI overlap...")
    stringdb = load_binding_ppis_with_evidence(
        actions_path,
        links_path,
        score_column=config.stringdb.score_column,
        threshold=config.stringdb.experiments_threshold,
    )
    note_degraded("stringdb_ppis", stringdb, summary.degraded_stages)
    summary.stringdb_ppis = len(stringdb.value)
    logger.info(f"Number of PPIs from StringDB: {summary.stringdb_ppis}")

    # 2. BioGrid
    biogrid = load_biogrid_ppis(biogrid_path, taxon)
    note_degraded("biogrid_ppis", biogrid, summary.degraded_stages)
    summary.biogrid_ppis = len(biogrid.value)
    logger.info(f"Number of PPIs from BioGrid: {summary.biogrid_ppis}")

    # 3. BioGrid -> StringDB
    entrez_to_string = load_entrez_to_stringdb(entrez_path, taxon_id=taxon)
    note_degraded("entrez_to_stringdb", entrez_to_string, summary.degraded_stages)
    summary.entrez_to_stringdb_keys = len(entrez_to_string.value)

    mapped_biogrid = resolve_cross_product(
        biogrid.value, entrez_to_string.value, IdentifierType.STRINGDB
    )
    summary.mapped_biogrid_ppis = len(mapped_biogrid.interactions)
    summary.biogrid_mapping_failures = len(mapped_biogrid.failures)
    summary.biogrid_self_interactions_after_mapping = mapped_biogrid.self_interactions

    biogrid_failures_path = output_dir / BIOGRID_FAILURES_FILE
    write_failure_log(mapped_biogrid.failures, biogrid_failures_path)

    # 4. Overlap in the StringDB namespace
    result = compute_overlap(stringdb.value, mapped_biogrid.interactions)
    summary.overlap = len(result.intersection)
    summary.stringdb_only = len(result.remainder_x)
    summary.biogrid_only = len(result.remainder_y)
    logger.info(f"Size of StringDB/BioGrid PPI Overlap: {summary.overlap}")

    # 5. Render each partition as UniProt pairs
    to_uniprot = load_stringdb_to_uniprot(uniprot_path, taxon_id=taxon)
    note_degraded("stringdb_to_uniprot", to_uniprot, summary.degraded_stages)
    logger.info(f"{len(to_uniprot.value)} StringDB-to-UniProt mappings loaded")

    uniprot_failures_path = output_dir / UNIPROT_FAILURES_FILE
    partitions = [
        (result.intersection, OVERLAP_FILE),
        (result.remainder_x, STRINGDB_ONLY_FILE),
        (result.remainder_y, BIOGRID_ONLY_FILE),
    ]
    written = [biogrid_failures_path]
    for index, (interactions, filename) in enumerate(partitions):
        rendered = resolve_cross_product(
            interactions, to_uniprot.value, IdentifierType.UNIPROT_ACCESSION
        )
        write_pair_list(rendered.interactions, output_dir / filename)
        write_failure_log(rendered.failures, uniprot_failures_path, append=index > 0)
        summary.uniprot_mapping_failures += len(rendered.failures)
        written.append(output_dir / filename)
    written.append(uniprot_failures_path)

    summary.output_files = written
    summary_path = write_run_summary(
        summary.statistics(), written, output_dir / "overlap_summary.yaml"
    )
    summary.output_files.append(summary_path)

    if store is not None:
        store.save_interactions(
            stringdb.value, "stringdb_ppis", "StringDB PPIs: binding with experiments"
        )
        store.save_interactions(
            mapped_biogrid.interactions, "biogrid_ppis_stringdb",
            "BioGrid PPIs mapped to StringDB (cross-product)",
        )
        store.save_interactions(result.intersection, "overlap_ppis", "StringDB/BioGrid overlap")
        store.save_interactions(result.remainder_x, "stringdb_only_ppis", "StringDB-only PPIs")
        store.save_interactions(result.remainder_y, "biogrid_only_ppis", "BioGrid-only PPIs")
        store.save_mapping(entrez_to_string.value, "entrez_to_stringdb")
        store.save_mapping(to_uniprot.value, "stringdb_to_uniprot")

    if provenance is not None:
        provenance.record_step("stringdb_biogrid_overlap", summary.statistics())

    return summary
