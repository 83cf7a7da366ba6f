"""
Custom exceptions for the Founder pipeline.

This module defines the exception hierarchy used throughout the package.
Every error carries its structured context (paths, record identifiers,
status codes, offending characters) as attributes and in ``details``.
"""

from typing import Optional, Any, Dict


class FounderError(Exception):
    """Base exception class for all Founder pipeline errors."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize FounderError.
        
        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
    
    def __str__(self) -> str:
        """Return string representation of the error."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.details:
            result += f" (Details: {self.details})"
        return result


# Aggregation stage

class AggregationError(FounderError):
    """Raised when combining FASTA files fails."""


class InputDirectoryError(AggregationError):
    """Raised when the input directory cannot be listed."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to read input directory: {path}",
            error_code="COMBINE_READ_DIR",
            details={"path": str(path)},
        )
        self.path = path


class FastaFileOpenError(AggregationError):
    """Raised when an input FASTA file cannot be opened."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to open FASTA file: {path}",
            error_code="COMBINE_OPEN_FILE",
            details={"path": str(path)},
        )
        self.path = path


class FastaParseError(AggregationError):
    """Raised when an input FASTA file cannot be parsed."""
    
    def __init__(self, path: Any, reason: Optional[str] = None):
        details = {"path": str(path)}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Invalid FASTA record in file: {path}",
            error_code="COMBINE_FASTA_PARSE",
            details=details,
        )
        self.path = path
        self.reason = reason


class InvalidSequenceError(AggregationError):
    """Raised when a record contains characters outside the DNA alphabet."""
    
    def __init__(self, path: Any, record_id: str, invalid_chars: str):
        """
        Initialize InvalidSequenceError.
        
        Args:
            path: File holding the offending record
            record_id: Identifier of the offending record
            invalid_chars: Sorted, deduplicated offending characters
        """
        super().__init__(
            f"Invalid sequence characters in file {path} record {record_id}: {invalid_chars}",
            error_code="COMBINE_INVALID_SEQ",
            details={
                "path": str(path),
                "record_id": record_id,
                "invalid_chars": invalid_chars,
            },
        )
        self.path = path
        self.record_id = record_id
        self.invalid_chars = invalid_chars


class OutputDirectoryError(AggregationError):
    """Raised when the output directory cannot be created."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to create output directory: {path}",
            error_code="COMBINE_OUTPUT_DIR",
            details={"path": str(path)},
        )
        self.path = path


class OutputFileError(AggregationError):
    """Raised when the output file cannot be created."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to create output file: {path}",
            error_code="COMBINE_OUTPUT_FILE",
            details={"path": str(path)},
        )
        self.path = path


class OutputWriteError(AggregationError):
    """Raised when writing the combined FASTA fails."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to write output FASTA: {path}",
            error_code="COMBINE_WRITE",
            details={"path": str(path)},
        )
        self.path = path


# GeneCutter stage

class ClassificationError(FounderError):
    """Raised when submitting to GeneCutter or splitting its response fails."""


class AnnotatedInputError(ClassificationError):
    """Raised when the annotated FASTA file cannot be opened."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to open annotated FASTA file: {path}",
            error_code="GC_OPEN_INPUT",
            details={"path": str(path)},
        )
        self.path = path


class GeneCutterRequestError(ClassificationError):
    """Raised when the GeneCutter request cannot be completed."""
    
    def __init__(self, url: str, reason: Optional[str] = None):
        details = {"url": url}
        if reason:
            details["reason"] = reason
        super().__init__(
            "GeneCutter request failed",
            error_code="GC_REQUEST",
            details=details,
        )
        self.url = url
        self.reason = reason


class GeneCutterStatusError(ClassificationError):
    """Raised when GeneCutter answers with a non-success status."""
    
    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"GeneCutter request failed: {status_code}",
            error_code="GC_STATUS",
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class ResponseReadError(ClassificationError):
    """Raised when the GeneCutter response body cannot be read."""
    
    def __init__(self, url: str, reason: Optional[str] = None):
        details = {"url": url}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Failed to read GeneCutter response body",
            error_code="GC_RESPONSE_READ",
            details=details,
        )
        self.url = url
        self.reason = reason


class ClassificationOutputError(ClassificationError):
    """Raised when an output directory or file cannot be created."""
    
    def __init__(self, path: Any, operation: str = "create"):
        super().__init__(
            f"Failed to {operation} output path: {path}",
            error_code="GC_OUTPUT",
            details={"path": str(path), "operation": operation},
        )
        self.path = path
        self.operation = operation


class NoFastaBlocksError(ClassificationError):
    """Raised when the response holds no usable FASTA content."""
    
    def __init__(self):
        super().__init__(
            "No FASTA blocks found in GeneCutter response",
            error_code="GC_NO_FASTA",
        )


class ResponseParseError(ClassificationError):
    """Raised when an extracted block cannot be parsed as FASTA."""
    
    def __init__(self, block_index: int, reason: Optional[str] = None):
        details: Dict[str, Any] = {"block_index": block_index}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Invalid FASTA record in GeneCutter response",
            error_code="GC_FASTA_PARSE",
            details=details,
        )
        self.block_index = block_index
        self.reason = reason


class ClassificationWriteError(ClassificationError):
    """Raised when writing a classified record fails."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Failed to write output FASTA: {path}",
            error_code="GC_WRITE",
            details={"path": str(path)},
        )
        self.path = path


class MissingAminoAcidError(ClassificationError):
    """Raised when the response yields nucleotide records only."""
    
    def __init__(self, na_count: int = 0):
        super().__init__(
            "Found NA FASTA but no AA FASTA in response",
            error_code="GC_MISSING_AA",
            details={"na_count": na_count},
        )
        self.na_count = na_count


class MissingNucleotideError(ClassificationError):
    """Raised when the response yields amino-acid records only."""
    
    def __init__(self, aa_count: int = 0):
        super().__init__(
            "Found AA FASTA but no NA FASTA in response",
            error_code="GC_MISSING_NA",
            details={"aa_count": aa_count},
        )
        self.aa_count = aa_count


# Pipeline orchestration

class PipelineError(FounderError):
    """Raised when the pipeline cannot continue between stages."""


class AnnotationOutputMissingError(PipelineError):
    """Raised when the annotation step did not produce its output file."""
    
    def __init__(self, path: Any):
        super().__init__(
            f"Locator output file missing: {path}",
            error_code="MAIN_LOCATOR_MISSING",
            details={"path": str(path)},
        )
        self.path = path


class CommandFailedError(PipelineError):
    """Raised when an external command cannot be run or exits non-zero."""
    
    def __init__(
        self,
        program: str,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"program": program}
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr.strip()
        super().__init__(
            f"Failed to run command: {program}",
            error_code="MAIN_COMMAND",
            details=details,
        )
        self.program = program
        self.returncode = returncode
        self.stderr = stderr


class ConfigurationError(FounderError):
    """Raised when there's a configuration-related error."""
    
    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        """
        Initialize ConfigurationError.
        
        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Invalid configuration value
            **kwargs: Additional arguments passed to parent
        """
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)
        
        super().__init__(message, details=details, **kwargs)
        self.config_key = config_key
        self.config_value = config_value
