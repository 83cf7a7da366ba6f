"""Utility functions for the Founder pipeline."""

from .logging import setup_logging
from .commands import run_command
from .file_operations import SafeFileOperations, StagedFastaOutput

__all__ = [
    "setup_logging",
    "run_command",
    "SafeFileOperations",
    "StagedFastaOutput",
]
