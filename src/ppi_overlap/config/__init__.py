from .loader import load_config, load_config_with_overrides
from .schema import (
    BioGridConfig,
    MappingFilesConfig,
    OrthologConfig,
    PipelineConfig,
    SpeciesConfig,
    StringDBConfig,
)

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "PipelineConfig",
    "StringDBConfig",
    "MappingFilesConfig",
    "OrthologConfig",
    "BioGridConfig",
    "SpeciesConfig",
]
