"""
Main orchestrator for the Founder pipeline.

Runs the stages in order: combine the input FASTA files, annotate the
combined file with the external locator tool, then submit the annotated
file to GeneCutter and split the answer into AA and NA FASTA. Each stage
depends on the previous one's output, so the first error stops the run.
"""

import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config.settings import Settings
from .core.base import SequenceProcessor
from .core.exceptions import (
    AnnotationOutputMissingError,
    FounderError,
    InputDirectoryError,
    OutputDirectoryError,
)
from .core.types import AggregationResult, ClassificationResult, PathLike, PipelinePaths
from .fasta.aggregator import FastaAggregator
from .fasta.gene_cutter import ResponseClassifier
from .utils.api_clients import GeneCutterClient
from .utils.commands import run_command
from .utils.file_operations import SafeFileOperations


@dataclass
class PipelineJobConfig:
    """Configuration for one pipeline run."""
    
    input_dir: Path
    output_dir: Path
    region: Optional[str] = None
    keep_original: Optional[bool] = None
    run_annotation: bool = True
    # Used instead of the conventional locator output when annotation is skipped
    annotated_path: Optional[Path] = None
    
    def __post_init__(self):
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        if self.annotated_path is not None:
            self.annotated_path = Path(self.annotated_path)


@dataclass
class PipelineJobResult:
    """Result of a pipeline run."""
    
    paths: PipelinePaths
    status: str = "running"
    aggregation: Optional[AggregationResult] = None
    classification: Optional[ClassificationResult] = None
    output_files: List[Path] = field(default_factory=list)
    processing_time: float = 0.0
    
    @property
    def success(self) -> bool:
        """Check if the run completed successfully."""
        return self.status == "success"
    
    def get_summary(self) -> Dict[str, Any]:
        """Get run summary."""
        return {
            "status": self.status,
            "records_combined": self.aggregation.record_count if self.aggregation else 0,
            "aa_count": self.classification.aa_count if self.classification else 0,
            "na_count": self.classification.na_count if self.classification else 0,
            "processing_time": self.processing_time,
            "output_files": [str(f) for f in self.output_files],
        }


class FounderPipelineOrchestrator(SequenceProcessor):
    """Runs the combine, annotate and GeneCutter stages for one sample set."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[GeneCutterClient] = None,
    ):
        super().__init__(settings)
        self.aggregator = FastaAggregator(self.settings)
        self.classifier = ResponseClassifier(self.settings, client=client)
    
    def close(self) -> None:
        """Release the GeneCutter client."""
        self.classifier.close()
    
    def __enter__(self) -> "FounderPipelineOrchestrator":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
    
    def validate_input(self, job: PipelineJobConfig) -> None:
        """Check that the input directory exists."""
        if not job.input_dir.is_dir():
            raise InputDirectoryError(job.input_dir)
    
    def build_paths(self, job: PipelineJobConfig) -> PipelinePaths:
        """Derive the work and results directories of a run."""
        return PipelinePaths.create(
            job.input_dir,
            job.output_dir,
            work_name=self.settings.pipeline.work_dir_name,
            results_name=self.settings.pipeline.results_dir_name,
        )
    
    def annotate(self, combined_path: Path) -> Path:
        """
        Run the locator tool on the combined FASTA.
        
        Returns:
            Path of the annotated FASTA the tool is expected to write
            
        Raises:
            CommandFailedError: If the tool cannot be run or fails
            AnnotationOutputMissingError: If the expected output is absent
        """
        pipeline = self.settings.pipeline
        annotated = combined_path.with_name(pipeline.annotated_filename())
        
        self.logger.info(f"Annotating {combined_path} with {pipeline.locator_command}")
        run_command(pipeline.locator_command, ["-i", str(combined_path)])
        
        return self.require_annotated(annotated)
    
    @staticmethod
    def require_annotated(annotated: Path) -> Path:
        if not annotated.is_file():
            raise AnnotationOutputMissingError(annotated)
        return annotated
    
    def process(self, job: PipelineJobConfig) -> PipelineJobResult:
        """
        Run the pipeline.
        
        Raises:
            FounderError: From whichever stage failed first
        """
        self.validate_input(job)
        paths = self.build_paths(job)
        result = PipelineJobResult(paths=paths)
        pipeline = self.settings.pipeline
        keep_original = pipeline.keep_original if job.keep_original is None else job.keep_original
        start_time = time.time()
        self.stats["runs"] += 1
        
        self.logger.info(
            f"Running founder pipeline: input={paths.input} output={paths.output} "
            f"keep_original={keep_original}"
        )
        
        try:
            for directory in (paths.work, paths.results):
                try:
                    SafeFileOperations.ensure_directory(directory)
                except OSError as e:
                    raise OutputDirectoryError(directory) from e
            
            combined = paths.work / pipeline.combined_filename
            self.logger.info("Combining sequences")
            result.aggregation = self.aggregator.process(paths.input, combined)
            
            if job.run_annotation:
                annotated = self.annotate(combined)
            else:
                annotated = self.require_annotated(
                    job.annotated_path or combined.with_name(pipeline.annotated_filename())
                )
            
            self.logger.info("Sending annotated sequences to GeneCutter")
            result.classification = self.classifier.process(
                annotated,
                job.region,
                paths.results / pipeline.aa_output_name,
                paths.results / pipeline.na_output_name,
            )
            result.output_files = [
                result.classification.aa_path,
                result.classification.na_path,
            ]
            result.status = "success"
        except FounderError:
            result.status = "failed"
            self.stats["failures"] += 1
            raise
        finally:
            result.processing_time = time.time() - start_time
        
        if not keep_original:
            shutil.rmtree(paths.work)
            self.logger.debug(f"Removed intermediate directory {paths.work}")
        
        return result


def run_pipeline(
    input_dir: PathLike,
    output_dir: PathLike,
    region: Optional[str] = None,
    keep_original: Optional[bool] = None,
    run_annotation: bool = True,
    annotated_path: Optional[PathLike] = None,
    settings: Optional[Settings] = None,
) -> PipelineJobResult:
    """Convenience function to run the full pipeline."""
    job = PipelineJobConfig(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        region=region,
        keep_original=keep_original,
        run_annotation=run_annotation,
        annotated_path=Path(annotated_path) if annotated_path else None,
    )
    with FounderPipelineOrchestrator(settings) as orchestrator:
        return orchestrator.process(job)
