"""
GeneCutter stage: submit annotated FASTA, split the answer into AA and NA.
"""

import time
from pathlib import Path
from typing import Optional

from ..config.settings import Settings
from ..core.base import SequenceProcessor
from ..core.exceptions import (
    AnnotatedInputError,
    ClassificationOutputError,
    MissingAminoAcidError,
    MissingNucleotideError,
)
from ..core.types import ClassificationResult, PathLike
from ..utils.api_clients import APIClientConfig, GeneCutterClient
from ..utils.file_operations import SafeFileOperations, StagedFastaOutput
from ..utils.logging import performance_monitor
from .response_parser import extract_fasta_blocks, split_fasta_blocks


class ResponseClassifier(SequenceProcessor):
    """
    Submits a FASTA file to GeneCutter and writes the AA and NA records.
    
    Both outputs are staged and only replace the final paths once the
    response has produced at least one record of each class.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[GeneCutterClient] = None,
    ):
        super().__init__(settings)
        self._owns_client = client is None
        self.client = client or GeneCutterClient(
            APIClientConfig.from_settings(self.settings.gene_cutter)
        )
    
    def close(self) -> None:
        """Close the GeneCutter client if this classifier created it."""
        if self._owns_client:
            self.client.close()
    
    def __enter__(self) -> "ResponseClassifier":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
    
    def validate_input(self, annotated_fasta_path: PathLike) -> None:
        """Check that the annotated FASTA is an existing file."""
        if not Path(annotated_fasta_path).is_file():
            raise AnnotatedInputError(annotated_fasta_path)
    
    def classify_text(
        self,
        text: str,
        aa_output_path: PathLike,
        na_output_path: PathLike,
    ) -> ClassificationResult:
        """
        Split an already fetched response body into the two outputs.
        
        Raises:
            ClassificationError: If the text holds no usable FASTA, a class is
                missing, or an output cannot be written
        """
        aa_path = Path(aa_output_path)
        na_path = Path(na_output_path)
        
        for path in (aa_path, na_path):
            try:
                SafeFileOperations.ensure_parent(path)
            except OSError as e:
                raise ClassificationOutputError(path.parent, "create directory") from e
        
        blocks = extract_fasta_blocks(text)
        self.logger.debug(f"Extracted {len(blocks)} FASTA blocks from response")
        
        line_width = self.settings.aggregation.line_width
        aa_output = StagedFastaOutput(aa_path, line_width=line_width)
        na_output = StagedFastaOutput(na_path, line_width=line_width)
        try:
            for output in (aa_output, na_output):
                try:
                    output.open()
                except OSError as e:
                    raise ClassificationOutputError(output.path, "create file") from e
            
            counts = split_fasta_blocks(blocks, aa_output, na_output)
            
            if counts.aa_count == 0:
                raise MissingAminoAcidError(counts.na_count)
            if counts.na_count == 0:
                raise MissingNucleotideError(counts.aa_count)
            
            for output in (aa_output, na_output):
                try:
                    output.commit()
                except OSError as e:
                    raise ClassificationOutputError(output.path, "write") from e
        finally:
            aa_output.discard()
            na_output.discard()
        
        self.logger.info(
            f"GeneCutter results: AA count {counts.aa_count}, NA count {counts.na_count}"
        )
        return ClassificationResult(
            aa_count=counts.aa_count,
            na_count=counts.na_count,
            aa_path=aa_path,
            na_path=na_path,
            skipped=counts.skipped,
        )
    
    def process(
        self,
        annotated_fasta_path: PathLike,
        region_selector: Optional[str],
        aa_output_path: PathLike,
        na_output_path: PathLike,
    ) -> ClassificationResult:
        """
        Submit ``annotated_fasta_path`` and classify the response.
        
        Args:
            annotated_fasta_path: FASTA produced by the annotation step
            region_selector: GeneCutter region; configured default when None
            aa_output_path: Destination of amino-acid records
            na_output_path: Destination of nucleotide records
            
        Returns:
            ClassificationResult, unpackable as ``(aa_count, na_count)``
        """
        start_time = time.time()
        self.stats["runs"] += 1
        region = region_selector or self.settings.gene_cutter.region
        
        try:
            self.validate_input(annotated_fasta_path)
            response = self.client.submit(annotated_fasta_path, region)
            result = self.classify_text(response.text, aa_output_path, na_output_path)
        except Exception:
            self.stats["failures"] += 1
            raise
        
        self.logger.debug(f"GeneCutter stage finished in {time.time() - start_time:.2f}s")
        return result


@performance_monitor
def submit_and_classify(
    annotated_fasta_path: PathLike,
    region_selector: Optional[str],
    aa_output_path: PathLike,
    na_output_path: PathLike,
    settings: Optional[Settings] = None,
    client: Optional[GeneCutterClient] = None,
) -> ClassificationResult:
    """Convenience function running the whole GeneCutter stage."""
    with ResponseClassifier(settings, client=client) as classifier:
        return classifier.process(
            annotated_fasta_path, region_selector, aa_output_path, na_output_path
        )
