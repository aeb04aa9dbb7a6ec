"""Integration tests for the overlap and species-to-human workflows."""

import pytest
import yaml

from ppi_overlap.config.loader import load_config
from ppi_overlap.errors import ParseError
from ppi_overlap.persistence import PipelineStore, ProvenanceRepository, ProvenanceTracker
from ppi_overlap.workflows import run_species_to_human, run_stringdb_biogrid_overlap

from conftest import make_config_text


def _lines(path):
    return path.read_text().splitlines()


# ============================================================================
# StringDB / BioGrid overlap
# ============================================================================

class TestStringDBBioGridOverlap:

    def test_counts(self, test_config):
        summary = run_stringdb_biogrid_overlap(test_config)

        assert summary.stringdb_ppis == 2
        assert summary.biogrid_ppis == 4
        assert summary.mapped_biogrid_ppis == 2
        assert summary.biogrid_mapping_failures == 1
        assert summary.biogrid_self_interactions_after_mapping == 1
        assert summary.overlap == 1
        assert summary.stringdb_only == 1
        assert summary.biogrid_only == 1
        assert summary.uniprot_mapping_failures == 1
        assert summary.degraded_stages == []

    def test_output_files(self, test_config):
        run_stringdb_biogrid_overlap(test_config)
        out = test_config.output_dir / "overlaps"

        assert _lines(out / "StringDB-BioGrid-PPIoverlap.tsv") == ["Q1\tQ2", "Q1\tQ2b"]
        assert _lines(out / "StringDB-only-PPIs.tsv") == []
        assert _lines(out / "BioGrid-only-PPIs.tsv") == ["Q10\tQ9"]
        assert _lines(out / "failedMappingsFromBioGrid.txt") == ["107"]
        assert _lines(out / "stringToUniprotMappingFailure.txt") == ["9606.P4"]

        with open(out / "overlap_summary.yaml") as f:
            summary = yaml.safe_load(f)
        assert summary["statistics"]["overlap"] == 1

    def test_store_and_provenance(self, test_config):
        provenance = ProvenanceTracker.from_config(test_config)
        with PipelineStore.from_config(test_config) as store:
            run_stringdb_biogrid_overlap(test_config, store=store, provenance=provenance)

            overlap = store.load_dataframe("overlap_ppis")
            assert overlap["protein_a"].to_list() == ["9606.P1"]
            assert overlap["protein_b"].to_list() == ["9606.P2"]
            assert store.has_table("biogrid_only_ppis")
            assert len(store.load_interactions("biogrid_ppis_stringdb")) == 2
            assert store.has_table("entrez_to_stringdb")
            assert len(ProvenanceRepository(store).get_by_name("BioGrid")) == 1

        assert len(provenance.data_sources) == 5
        assert provenance.get_steps()[0]["step_name"] == "stringdb_biogrid_overlap"

    def test_rerun_does_not_duplicate_sources(self, test_config):
        with PipelineStore.from_config(test_config) as store:
            run_stringdb_biogrid_overlap(test_config, store=store)
            run_stringdb_biogrid_overlap(test_config, store=store)
            assert len(ProvenanceRepository(store).get_by_name("BioGrid")) == 1

    def test_missing_biogrid_degrades(self, tmp_path, data_dir):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(make_config_text(tmp_path, data_dir, biogrid_file="absent.txt"))
        config = load_config(config_path)

        summary = run_stringdb_biogrid_overlap(config)

        assert summary.biogrid_ppis == 0
        assert summary.overlap == 0
        assert summary.stringdb_only == 2
        assert any(stage.startswith("biogrid_ppis") for stage in summary.degraded_stages)

        out = config.output_dir / "overlaps"
        assert _lines(out / "StringDB-BioGrid-PPIoverlap.tsv") == []
        assert _lines(out / "StringDB-only-PPIs.tsv") == ["Q1\tQ2", "Q1\tQ2b"]

    def test_undecodable_biogrid_degrades(self, tmp_path, data_dir):
        (data_dir / "latin1.biogrid.txt").write_bytes(b"#BioGRID Interaction ID\t\xff\xfe\n1\t\xe9\xe8\n")
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            make_config_text(tmp_path, data_dir, biogrid_file="latin1.biogrid.txt")
        )

        summary = run_stringdb_biogrid_overlap(load_config(config_path))

        assert summary.biogrid_ppis == 0
        assert summary.stringdb_only == 2
        assert any(stage.startswith("biogrid_ppis") for stage in summary.degraded_stages)

    def test_both_stringdb_inputs_missing_are_reported(self, tmp_path, data_dir):
        config_text = make_config_text(tmp_path, data_dir, links_file="absent.links.txt").replace(
            "actions_file: 9606.protein.actions.txt", "actions_file: absent.actions.txt"
        )
        config_path = tmp_path / "config.yaml"
        config_path.write_text(config_text)

        summary = run_stringdb_biogrid_overlap(load_config(config_path))

        stringdb_stages = [s for s in summary.degraded_stages if s.startswith("stringdb_ppis")]
        assert summary.stringdb_ppis == 0
        assert len(stringdb_stages) == 2
        assert any("absent.links.txt" in s for s in stringdb_stages)
        assert any("absent.actions.txt" in s for s in stringdb_stages)

    def test_malformed_score_aborts(self, tmp_path, data_dir):
        (data_dir / "bad.links.txt").write_text(
            "protein1 protein2 experiments\n9606.P1 9606.P2 x\n"
        )
        config_path = tmp_path / "config.yaml"
        config_path.write_text(make_config_text(tmp_path, data_dir, links_file="bad.links.txt"))

        with pytest.raises(ParseError):
            run_stringdb_biogrid_overlap(load_config(config_path))


# ============================================================================
# Species to human
# ============================================================================

class TestSpeciesToHuman:

    def test_counts(self, test_config):
        summary = run_species_to_human(test_config, "yeast")

        assert summary.species == "YEAST"
        assert summary.stringdb_ppis == 3
        assert summary.ortholog_proteins == 2
        assert summary.uniprot_ppis == 1
        assert summary.human_ppis == 1
        assert summary.uniprot_mapping_failures == 1
        assert summary.ortholog_mapping_failures == 0
        assert summary.self_interactions_skipped == 1

    def test_output_files(self, test_config):
        run_species_to_human(test_config, "YEAST")
        out = test_config.output_dir / "YEAST_results"

        assert _lines(out / "YEAST_binding_PPIs_with_experiments.tsv") == [
            "4932.Y1\t4932.Y2",
            "4932.Y3\t4932.Y4",
            "4932.Y5\t4932.Y6",
        ]
        assert _lines(out / "YEAST_MAPPED_PPIS.tsv") == [
            "YU1\tYU2\t(mapped from: 4932.Y1 4932.Y2)"
        ]
        assert _lines(out / "YEAST_PPIS_mapped_to_human.tsv") == [
            "H1\tH2\t(mapped from: YU1 YU2)"
        ]
        assert _lines(out / "YEAST_mapping_failures.txt") == ["4932.Y6"]
        assert (out / "YEAST_summary.yaml").exists()

    def test_unidirectional_orthologs_lose_reversed_rows(self, tmp_path, data_dir):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            make_config_text(tmp_path, data_dir).replace(
                "allow_bidirectional: true", "allow_bidirectional: false"
            )
        )
        summary = run_species_to_human(load_config(config_path), "YEAST")

        assert summary.ortholog_proteins == 1
        assert summary.human_ppis == 0
        assert summary.ortholog_mapping_failures == 1

    def test_store_tables(self, test_config):
        with PipelineStore.from_config(test_config) as store:
            run_species_to_human(test_config, "YEAST", store=store)

            human = store.load_dataframe("yeast_human_ppis")
            assert human["protein_a"].to_list() == ["H1"]
            assert store.load_dataframe("yeast_stringdb_ppis").height == 3
            assert store.load_dataframe("yeast_orthologs").height == 2

    def test_unknown_species(self, test_config):
        with pytest.raises(ValueError):
            run_species_to_human(test_config, "WORM")
