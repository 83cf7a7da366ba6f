"""FASTA aggregation and GeneCutter response classification."""

from .aggregator import FastaAggregator, aggregate
from .gene_cutter import ResponseClassifier, submit_and_classify
from .response_parser import extract_fasta_blocks, split_fasta_blocks

__all__ = [
    "FastaAggregator",
    "aggregate",
    "ResponseClassifier",
    "submit_and_classify",
    "extract_fasta_blocks",
    "split_fasta_blocks",
]
