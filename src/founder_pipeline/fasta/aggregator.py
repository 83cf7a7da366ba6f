"""
Combine a directory of FASTA files into a single alignment input.

Files are selected by extension, merged in sorted path order and every
record is checked against the DNA alphabet before it is written.
"""

import time
from pathlib import Path
from typing import Iterator, Optional

from Bio.SeqRecord import SeqRecord

from ..config.settings import Settings
from ..core.alphabet import find_invalid_dna_characters
from ..core.base import SequenceProcessor
from ..core.exceptions import (
    FastaFileOpenError,
    FastaParseError,
    InputDirectoryError,
    InvalidSequenceError,
    OutputDirectoryError,
    OutputFileError,
    OutputWriteError,
)
from ..core.types import AggregationResult, PathLike, SourceFileSet
from ..utils.file_operations import SafeFileOperations, StagedFastaOutput, iter_fasta
from ..utils.logging import performance_monitor


class FastaAggregator(SequenceProcessor):
    """Streams validated records from many FASTA files into one."""
    
    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.extensions = tuple(self.settings.aggregation.extensions)
        self.line_width = self.settings.aggregation.line_width
    
    def validate_input(self, input_dir: PathLike) -> None:
        """Check that the input directory exists and is a directory."""
        if not Path(input_dir).is_dir():
            raise InputDirectoryError(input_dir)
    
    def select_sources(self, input_dir: PathLike) -> SourceFileSet:
        """Build the sorted set of FASTA files to merge."""
        try:
            return SourceFileSet.from_directory(input_dir, self.extensions)
        except OSError as e:
            raise InputDirectoryError(input_dir) from e
    
    def read_records(self, path: Path) -> Iterator[SeqRecord]:
        """
        Yield the records of one input file.
        
        Raises:
            FastaFileOpenError: If the file cannot be opened
            FastaParseError: If the file cannot be read or parsed
        """
        try:
            handle = open(path, "r", encoding="utf-8")
        except OSError as e:
            raise FastaFileOpenError(path) from e
        
        with handle:
            try:
                yield from iter_fasta(handle)
            except (ValueError, OSError) as e:
                raise FastaParseError(path, str(e)) from e
    
    def process(self, input_dir: PathLike, output_path: PathLike) -> AggregationResult:
        """
        Combine every FASTA file of ``input_dir`` into ``output_path``.
        
        Args:
            input_dir: Directory holding per-sample FASTA files
            output_path: Combined FASTA file to create or overwrite
            
        Returns:
            AggregationResult describing the run
            
        Raises:
            AggregationError: On the first failure; the output is left untouched
        """
        start_time = time.time()
        output_path = Path(output_path)
        self.stats["runs"] += 1
        
        self.validate_input(input_dir)
        sources = self.select_sources(input_dir)
        self.logger.info(f"Combining {len(sources)} FASTA files from {input_dir}")
        
        try:
            SafeFileOperations.ensure_parent(output_path)
        except OSError as e:
            self.stats["failures"] += 1
            raise OutputDirectoryError(output_path.parent) from e
        
        output = StagedFastaOutput(output_path, line_width=self.line_width)
        try:
            output.open()
        except OSError as e:
            self.stats["failures"] += 1
            raise OutputFileError(output_path) from e
        
        result = AggregationResult(output_path=output_path)
        try:
            for path in sources:
                file_records = 0
                for record in self.read_records(path):
                    invalid = find_invalid_dna_characters(record.seq)
                    if invalid:
                        raise InvalidSequenceError(path, record.id, invalid)
                    try:
                        output.write(record)
                    except OSError as e:
                        raise OutputWriteError(output_path) from e
                    file_records += 1
                
                self.logger.debug(f"{path.name}: {file_records} records")
                result.files_processed.append(path)
                result.record_count += file_records
            
            try:
                output.commit()
            except OSError as e:
                raise OutputWriteError(output_path) from e
        except Exception:
            self.stats["failures"] += 1
            raise
        finally:
            output.discard()
        
        result.processing_time = time.time() - start_time
        self.logger.info(
            f"Wrote {result.record_count} records from "
            f"{len(result.files_processed)} files to {output_path}"
        )
        return result


@performance_monitor
def aggregate(
    input_dir: PathLike,
    output_path: PathLike,
    settings: Optional[Settings] = None,
) -> AggregationResult:
    """Convenience function to combine a directory of FASTA files."""
    return FastaAggregator(settings).process(input_dir, output_path)
