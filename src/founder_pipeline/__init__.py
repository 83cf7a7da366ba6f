"""
Founder Pipeline
================

Sequence combination and classification core of the Founder pipeline.

This package provides tools for:
- Combining a directory of per-sample FASTA files into one alignment input
- Submitting annotated FASTA to the LANL GeneCutter service
- Splitting the GeneCutter response into amino-acid and nucleotide FASTA

Modules:
    core: Types, alphabets and exceptions
    fasta: Aggregation and GeneCutter response classification
    config: Configuration management
    utils: Logging, file staging, HTTP client and command helpers

Example:
    >>> from founder_pipeline import aggregate, submit_and_classify
    >>> aggregate("samples/", "work/combined_sga.fasta")
    >>> aa_count, na_count = submit_and_classify(
    ...     "work/combined_sga.direction.fasta", "env",
    ...     "results/genecutter_aa.fasta", "results/genecutter_na.fasta",
    ... )
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("founder-pipeline")
except PackageNotFoundError:
    __version__ = "unknown"

__license__ = "MIT"

from .core.exceptions import (
    FounderError,
    AggregationError,
    ClassificationError,
    PipelineError,
)
from .core.types import AlphabetClass
from .config.settings import get_settings
from .fasta.aggregator import aggregate
from .fasta.gene_cutter import submit_and_classify
from .main_orchestrator import run_pipeline

__all__ = [
    "__version__",
    "FounderError",
    "AggregationError",
    "ClassificationError",
    "PipelineError",
    "AlphabetClass",
    "get_settings",
    "aggregate",
    "submit_and_classify",
    "run_pipeline",
]
