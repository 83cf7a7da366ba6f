"""
Type definitions for the Founder pipeline.

This module defines the core data structures shared by the aggregation
and GeneCutter stages.
"""

from typing import Iterator, List, Tuple, Union
from dataclasses import dataclass, field
from pathlib import Path
from enum import Enum


PathLike = Union[str, Path]

FASTA_EXTENSIONS = ("fa", "fasta", "fna", "faa")
FASTA_LINE_WIDTH = 60


class AlphabetClass(str, Enum):
    """Alphabet of a sequence, derived from the characters it uses."""
    
    NUCLEOTIDE = "nucleotide"
    AMINO_ACID = "amino_acid"
    INVALID = "invalid"


@dataclass(frozen=True)
class SourceFileSet:
    """FASTA files selected from an input directory, in merge order."""
    
    input_dir: Path
    paths: Tuple[Path, ...] = ()
    
    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)
    
    def __len__(self) -> int:
        return len(self.paths)
    
    @classmethod
    def from_directory(
        cls,
        input_dir: PathLike,
        extensions: Tuple[str, ...] = FASTA_EXTENSIONS,
    ) -> "SourceFileSet":
        """
        Select regular files whose extension matches the FASTA family.
        
        Matching is case-insensitive and the result is sorted by path so
        that merge order is reproducible.
        
        Raises:
            OSError: If the directory cannot be listed
        """
        directory = Path(input_dir)
        wanted = {ext.lower().lstrip(".") for ext in extensions}
        selected = [
            entry
            for entry in directory.iterdir()
            if entry.is_file() and entry.suffix[1:].lower() in wanted
        ]
        return cls(input_dir=directory, paths=tuple(sorted(selected)))


@dataclass
class AggregationResult:
    """Summary of a completed aggregation run."""
    
    output_path: Path
    files_processed: List[Path] = field(default_factory=list)
    record_count: int = 0
    processing_time: float = 0.0


@dataclass
class ClassificationResult:
    """Outcome of splitting a GeneCutter response into AA and NA FASTA."""
    
    aa_count: int
    na_count: int
    aa_path: Path
    na_path: Path
    skipped: int = 0
    
    def __iter__(self):
        # Allows ``aa_count, na_count = result``
        yield self.aa_count
        yield self.na_count


@dataclass
class PipelinePaths:
    """Directory layout of a single pipeline run."""
    
    input: Path
    output: Path
    work: Path
    results: Path
    
    @classmethod
    def create(
        cls,
        input_dir: PathLike,
        output_dir: PathLike,
        work_name: str = "work",
        results_name: str = "results",
    ) -> "PipelinePaths":
        output = Path(output_dir)
        return cls(
            input=Path(input_dir),
            output=output,
            work=output / work_name,
            results=output / results_name,
        )
