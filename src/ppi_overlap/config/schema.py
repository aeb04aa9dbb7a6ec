"""Pydantic models for pipeline configuration.

Configuration is loaded once at process start and passed explicitly to every
stage. All models are frozen so a loaded config cannot change under a run.
"""

import hashlib
import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Referenced for provenance only; the pipeline never calls it.
UNIPROT_MAPPING_SERVICE_URL = "https://www.uniprot.org/uploadlists/"


class StringDBConfig(BaseModel):
    """StringDB input files for the reference organism."""

    model_config = ConfigDict(frozen=True)

    actions_file: Path = Field(
        ...,
        description="protein.actions file (tab-separated, header)",
    )
    links_file: Path = Field(
        ...,
        description="protein.links.full file (space-separated, header)",
    )
    score_column: str = Field(
        default="experiments",
        description="Integer evidence column in the links file",
    )
    experiments_threshold: int = Field(
        default=0,
        ge=0,
        description="Keep PPIs whose evidence score is strictly greater than this",
    )


class MappingFilesConfig(BaseModel):
    """StringDB cross-reference files."""

    model_config = ConfigDict(frozen=True)

    stringdb_to_uniprot: Path = Field(
        ...,
        description="all_organisms.uniprot_2_string file",
    )
    entrez_to_stringdb: Path = Field(
        ...,
        description="all_organisms.entrez_2_string file",
    )


class OrthologConfig(BaseModel):
    """Ortholog table settings."""

    model_config = ConfigDict(frozen=True)

    file: Path = Field(..., description="Ortholog table (HCOP/PANTHER format)")
    reference_species: str = Field(
        default="HUMAN",
        description="Species label PPIs are mapped onto",
    )
    allow_bidirectional: bool = Field(
        default=True,
        description="Accept ortholog rows listing the reference species first",
    )


class BioGridConfig(BaseModel):
    """BioGrid input file."""

    model_config = ConfigDict(frozen=True)

    file: Path = Field(..., description="BIOGRID-ORGANISM tab2 file")


class SpeciesConfig(BaseModel):
    """A non-reference species whose StringDB PPIs are mapped to human."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Species label used in the ortholog table (e.g. YEAST)")
    taxon_id: str = Field(..., description="NCBI taxon id (e.g. 4932)")
    actions_file: Path
    links_file: Path
    stringdb_to_uniprot: Path = Field(
        ...,
        description="Species uniprot_2_string mapping file",
    )

    @field_validator("name")
    @classmethod
    def upper_case_name(cls, v: str) -> str:
        return v.upper()


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(
        ...,
        description="Directory holding the input files",
    )
    output_dir: Path = Field(
        ...,
        description="Directory for pair lists and failure logs",
    )
    duckdb_path: Path = Field(
        ...,
        description="Path to DuckDB database file",
    )
    taxon_id: str = Field(
        default="9606",
        description="NCBI taxon id of the reference organism",
    )
    stringdb: StringDBConfig
    mappings: MappingFilesConfig
    orthologs: OrthologConfig
    biogrid: BioGridConfig
    species: list[SpeciesConfig] = Field(default_factory=list)
    uniprot_mapping_service_url: str = Field(
        default=UNIPROT_MAPPING_SERVICE_URL,
        description="UniProt ID-mapping service (not called at run time)",
    )

    @field_validator("data_dir", "output_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    def resolve_path(self, path: Path) -> Path:
        """Resolve an input path relative to ``data_dir``."""
        return path if path.is_absolute() else self.data_dir / path

    def get_species(self, name: str) -> Optional[SpeciesConfig]:
        name = name.upper()
        for species in self.species:
            if species.name == name:
                return species
        return None

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking which settings produced an output.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
