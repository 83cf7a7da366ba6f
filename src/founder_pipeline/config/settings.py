"""
Configuration settings for the Founder pipeline.

This module provides centralized configuration management using pydantic-settings
for environment variables, file-based configuration, and defaults.
"""

import json
from pathlib import Path
from typing import Optional, Dict, Tuple
from functools import lru_cache

from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from ..core.types import FASTA_EXTENSIONS, FASTA_LINE_WIDTH


class GeneCutterSettings(BaseModel):
    """LANL GeneCutter endpoint settings."""
    
    url: str = "https://www.hiv.lanl.gov/cgi-bin/GENE_CUTTER/simpleGC"
    region: str = "env"
    return_format: str = "fasta"
    upload_field: str = "seq_upload"
    upload_filename: str = "sample.fasta"
    # Sent alongside the required fields, e.g. {"codon_align": "yes"}
    extra_fields: Dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = None  # None waits as long as requests does
    verify_ssl: bool = True
    
    @validator("timeout")
    def validate_timeout(cls, v):
        """Reject non-positive timeouts."""
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v


class AggregationSettings(BaseModel):
    """Settings for combining input FASTA files."""
    
    extensions: Tuple[str, ...] = FASTA_EXTENSIONS
    line_width: int = FASTA_LINE_WIDTH


class PipelineSettings(BaseModel):
    """Layout and collaborator settings for a full pipeline run."""
    
    work_dir_name: str = "work"
    results_dir_name: str = "results"
    combined_filename: str = "combined_sga.fasta"
    annotated_suffix: str = ".direction.fasta"
    locator_command: str = "locator"
    aa_output_name: str = "genecutter_aa.fasta"
    na_output_name: str = "genecutter_na.fasta"
    keep_original: bool = False
    
    def annotated_filename(self) -> str:
        """Name of the file the annotation step writes next to the combined FASTA."""
        return Path(self.combined_filename).stem + self.annotated_suffix


class LoggingSettings(BaseModel):
    """Logging configuration."""
    
    level: str = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"
    log_file: Optional[Path] = None
    log_rotation: str = "7 days"
    enable_json_logging: bool = False


class Settings(BaseSettings):
    """Main application settings."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FOUNDER_",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )
    
    # Application metadata
    app_name: str = "Founder Pipeline"
    app_version: str = "0.1.0"
    debug: bool = False
    
    # Configuration sections
    gene_cutter: GeneCutterSettings = Field(default_factory=GeneCutterSettings)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    @validator("logging", pre=True)
    def normalize_log_level(cls, v):
        """Upper-case the log level so loguru accepts it."""
        if isinstance(v, dict) and "level" in v:
            v = {**v, "level": str(v["level"]).upper()}
        return v
    
    def save_config(self, path: Path) -> None:
        """Save current configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.model_dump(), f, indent=2, default=str)
    
    @classmethod
    def load_config(cls, path: Path) -> "Settings":
        """Load configuration from file."""
        try:
            with open(path, 'r') as f:
                config_data = json.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {path}",
                config_key="config_file",
                config_value=path,
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Configuration file is not valid JSON: {path}",
                config_key="config_file",
                config_value=path,
            ) from e
        return cls(**config_data)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def create_environment_config(environment: str = "production") -> Settings:
    """Create environment-specific configuration."""
    if environment == "development":
        return Settings(
            debug=True,
            logging=LoggingSettings(level="DEBUG"),
            pipeline=PipelineSettings(keep_original=True),
        )
    elif environment == "production":
        return Settings()
    else:
        raise ConfigurationError(
            f"Unknown environment: {environment}",
            config_key="environment",
            config_value=environment,
        )
