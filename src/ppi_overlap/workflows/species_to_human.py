"""Map a species' StringDB PPIs onto UniProt and then onto human orthologs.

Steps:
1. StringDB PPIs of the species that are binding and have experiments > threshold
2. Species StringDB -> UniProt table and species -> human ortholog table
3. Pick-one resolution StringDB -> species UniProt
4. Pick-one resolution species UniProt -> human UniProt via orthologs
5. Write annotated pair lists, failure log and run summary
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ppi_overlap.config.schema import PipelineConfig
from ppi_overlap.id_mapping import load_stringdb_to_uniprot, resolve_pick_one
from ppi_overlap.output import (
    write_failure_log,
    write_mapped_pairs,
    write_pair_list,
    write_run_summary,
)
from ppi_overlap.persistence import PipelineStore, ProvenanceRepository, ProvenanceTracker
from ppi_overlap.ppi.models import IdentifierType
from ppi_overlap.sources import load_binding_ppis_with_evidence, load_ortholog_table
from ppi_overlap.workflows.common import note_degraded, register_source

logger = logging.getLogger(__name__)


@dataclass
class SpeciesMappingSummary:
    """Diagnostic counts of a species-to-human run."""
    species: str
    stringdb_ppis: int = 0
    ortholog_proteins: int = 0
    stringdb_to_uniprot_keys: int = 0
    uniprot_ppis: int = 0
    human_ppis: int = 0
    uniprot_mapping_failures: int = 0
    ortholog_mapping_failures: int = 0
    self_interactions_skipped: int = 0
    degraded_stages: list[str] = field(default_factory=list)
    output_files: list[Path] = field(default_factory=list)

    def statistics(self) -> dict:
        return {
            "species": self.species,
            "stringdb_ppis": self.stringdb_ppis,
            "ortholog_proteins": self.ortholog_proteins,
            "stringdb_to_uniprot_keys": self.stringdb_to_uniprot_keys,
            "uniprot_ppis": self.uniprot_ppis,
            "human_ppis": self.human_ppis,
            "uniprot_mapping_failures": self.uniprot_mapping_failures,
            "ortholog_mapping_failures": self.ortholog_mapping_failures,
            "self_interactions_skipped": self.self_interactions_skipped,
            "degraded_stages": self.degraded_stages,
        }


def run_species_to_human(
    config: PipelineConfig,
    species_name: str,
    store: Optional[PipelineStore] = None,
    provenance: Optional[ProvenanceTracker] = None,
) -> SpeciesMappingSummary:
    """Produce the species-to-human PPI map for one configured species.

    Args:
        config: Pipeline configuration
        species_name: Name of a species listed under ``species`` in the config
        store: Optional store receiving the intermediate PPI sets
        provenance: Optional tracker receiving sources and step counts

    Returns:
        SpeciesMappingSummary with diagnostic counts and written files

    Raises:
        ValueError: If the species is not configured
        ParseError: If the species' links file has a non-integer score
    """
    species = config.get_species(species_name)
    if species is None:
        raise ValueError(f"Species '{species_name}' is not configured")

    name = species.name
    summary = SpeciesMappingSummary(species=name)
    output_dir = config.output_dir / f"{name}_results"
    repository = ProvenanceRepository(store) if store is not None else None

    actions_path = config.resolve_path(species.actions_file)
    links_path = config.resolve_path(species.links_file)
    ortholog_path = config.resolve_path(config.orthologs.file)
    mapping_path = config.resolve_path(species.stringdb_to_uniprot)

    for source_name, path, category in [
        ("StringDB protein.actions", actions_path, "PPI"),
        ("StringDB protein.links", links_path, "PPI"),
        ("Ortholog table", ortholog_path, "ortholog mapping"),
        ("StringDB uniprot_2_string", mapping_path, "identifier mapping"),
    ]:
        register_source(repository, provenance, source_name, path, category, name)

    # 1. StringDB binding PPIs with experimental evidence
    logger.info(f"Loading StringDB PPIs for {name}")
    stringdb = load_binding_ppis_with_evidence(
        actions_path,
        links_path,
        score_column=config.stringdb.score_column,
        threshold=config.stringdb.experiments_threshold,
    )
    note_degraded("stringdb_ppis", stringdb, summary.degraded_stages)
    summary.stringdb_ppis = len(stringdb.value)

    # 2. Lookup tables
    orthologs = load_ortholog_table(
        ortholog_path,
        species_a=name,
        species_b=config.orthologs.reference_species,
        allow_bidirectional=config.orthologs.allow_bidirectional,
    )
    note_degraded("ortholog_table", orthologs, summary.degraded_stages)
    summary.ortholog_proteins = len(orthologs.value)

    to_uniprot = load_stringdb_to_uniprot(mapping_path, taxon_id=species.taxon_id)
    note_degraded("stringdb_to_uniprot", to_uniprot, summary.degraded_stages)
    summary.stringdb_to_uniprot_keys = len(to_uniprot.value)

    # 3. StringDB -> species UniProt
    species_ppis = resolve_pick_one(
        stringdb.value, to_uniprot.value, IdentifierType.UNIPROT_ACCESSION
    )
    summary.uniprot_ppis = len(species_ppis.interactions)
    summary.uniprot_mapping_failures = len(species_ppis.failures)

    # 4. Species UniProt -> human UniProt
    human_ppis = resolve_pick_one(
        species_ppis.interactions, orthologs.value, IdentifierType.UNIPROT_ACCESSION
    )
    summary.human_ppis = len(human_ppis.interactions)
    summary.ortholog_mapping_failures = len(human_ppis.failures)
    summary.self_interactions_skipped = (
        species_ppis.self_interactions + human_ppis.self_interactions
    )
    logger.info(f"{summary.self_interactions_skipped} self-interactions were omitted")

    # 5. Outputs
    binding_path = output_dir / f"{name}_binding_PPIs_with_experiments.tsv"
    mapped_path = output_dir / f"{name}_MAPPED_PPIS.tsv"
    human_path = output_dir / f"{name}_PPIS_mapped_to_human.tsv"
    failures_path = output_dir / f"{name}_mapping_failures.txt"

    write_pair_list(stringdb.value, binding_path)
    write_mapped_pairs(species_ppis, mapped_path)
    write_mapped_pairs(human_ppis, human_path)
    write_failure_log(species_ppis.failures, failures_path)
    write_failure_log(human_ppis.failures, failures_path, append=True)
    summary.output_files = [binding_path, mapped_path, human_path, failures_path]

    summary_path = write_run_summary(
        summary.statistics(), summary.output_files, output_dir / f"{name}_summary.yaml"
    )
    summary.output_files.append(summary_path)

    if store is not None:
        prefix = name.lower()
        store.save_interactions(
            stringdb.value, f"{prefix}_stringdb_ppis",
            f"{name} StringDB PPIs: binding with experiments",
        )
        store.save_interactions(
            species_ppis.interactions, f"{prefix}_uniprot_ppis",
            f"{name} PPIs mapped to UniProt (pick-one)",
        )
        store.save_interactions(
            human_ppis.interactions, f"{prefix}_human_ppis",
            f"{name} PPIs mapped to human orthologs (pick-one)",
        )
        store.save_mapping(to_uniprot.value, f"{prefix}_stringdb_to_uniprot")
        store.save_mapping(orthologs.value, f"{prefix}_orthologs")

    if provenance is not None:
        provenance.record_step(f"map_{name.lower()}_to_human", summary.statistics())

    return summary
