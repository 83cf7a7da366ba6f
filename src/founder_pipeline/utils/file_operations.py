"""
File operations utilities for the Founder pipeline.

This module provides the FASTA reading and staged writing primitives used
by both pipeline stages. Outputs are written to a temporary sibling file
and moved into place only once the stage succeeds.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterator, Optional, TextIO

from Bio import SeqIO
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord
from loguru import logger

from ..core.types import PathLike, FASTA_LINE_WIDTH


class SafeFileOperations:
    """Safe file operations shared by the pipeline stages."""
    
    @staticmethod
    def ensure_directory(dir_path: PathLike) -> Path:
        """
        Ensure directory exists, create if necessary.
        
        Raises:
            OSError: If directory cannot be created
        """
        path = Path(dir_path)
        path.mkdir(parents=True, exist_ok=True)
        return path
    
    @staticmethod
    def ensure_parent(file_path: PathLike) -> Optional[Path]:
        """Create the parent directory of ``file_path`` when it has one."""
        parent = Path(file_path).parent
        if str(parent) in ("", "."):
            return None
        return SafeFileOperations.ensure_directory(parent)


class StagedFastaOutput:
    """
    FASTA output written to a temporary file and renamed on commit.
    
    Usage::
    
        output = StagedFastaOutput(path)
        output.open()
        try:
            output.write(record)
            output.commit()
        finally:
            output.discard()
    
    ``discard`` is a no-op once ``commit`` has succeeded, so a failed run
    never leaves a partial file at ``path`` and never clobbers an earlier one.
    """
    
    def __init__(self, path: PathLike, line_width: int = FASTA_LINE_WIDTH):
        self.path = Path(path)
        self.line_width = line_width
        self.temp_path: Optional[Path] = None
        self.record_count = 0
        self._handle: Optional[TextIO] = None
        self._writer: Optional[FastaWriter] = None
    
    def open(self) -> "StagedFastaOutput":
        """
        Create the temporary file next to the final path.
        
        Raises:
            OSError: If the temporary file cannot be created
        """
        directory = self.path.parent if str(self.path.parent) else Path(".")
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=directory,
        )
        self.temp_path = Path(temp_name)
        self._handle = os.fdopen(fd, "w", encoding="utf-8")
        self._writer = FastaWriter(self._handle, wrap=self.line_width)
        return self
    
    def write(self, record: SeqRecord) -> None:
        """
        Append one record.
        
        Raises:
            OSError: If the write fails
        """
        if self._writer is None:
            raise RuntimeError("StagedFastaOutput.open() must be called first")
        self._writer.write_record(record)
        self.record_count += 1
    
    def commit(self) -> Path:
        """
        Flush and move the temporary file onto the final path.
        
        Raises:
            OSError: If flushing or renaming fails
        """
        if self._handle is None or self.temp_path is None:
            raise RuntimeError("StagedFastaOutput.open() must be called first")
        self._handle.close()
        self._handle = None
        os.replace(self.temp_path, self.path)
        self.temp_path = None
        return self.path
    
    def discard(self) -> None:
        """Close and delete the temporary file if it still exists."""
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.warning(f"Failed to close staged output {self.temp_path}: {e}")
            self._handle = None
        if self.temp_path is not None:
            self.temp_path.unlink(missing_ok=True)
            self.temp_path = None


def iter_fasta(handle: TextIO) -> Iterator[SeqRecord]:
    """
    Parse FASTA records lazily from an open text handle.
    
    Biopython removes spaces from sequence lines, so they never reach
    alphabet validation.
    """
    return SeqIO.parse(handle, "fasta")
