"""Core types, alphabets and exceptions for the Founder pipeline."""

from .exceptions import (
    FounderError,
    AggregationError,
    ClassificationError,
    PipelineError,
    ConfigurationError,
)
from .types import AlphabetClass, SourceFileSet, ClassificationResult, PipelinePaths
from .alphabet import classify_alphabet, find_invalid_dna_characters

__all__ = [
    "FounderError",
    "AggregationError",
    "ClassificationError",
    "PipelineError",
    "ConfigurationError",
    "AlphabetClass",
    "SourceFileSet",
    "ClassificationResult",
    "PipelinePaths",
    "classify_alphabet",
    "find_invalid_dna_characters",
]
