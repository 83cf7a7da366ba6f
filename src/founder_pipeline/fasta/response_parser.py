"""
Split a GeneCutter response into nucleotide and amino-acid records.

GeneCutter answers with text of uncertain structure: HTML, plain text, or
FASTA surrounded by markup. Parsing happens in two phases that can be
used separately:

1. ``extract_fasta_blocks`` pulls out everything that looks like FASTA.
2. ``split_fasta_blocks`` parses those blocks and routes each record to the
   AA or NA output according to ``classify_alphabet``.
"""

import io
import re
from dataclasses import dataclass
from typing import Iterator, List

from Bio import SeqIO
from Bio.SeqRecord import SeqRecord
from loguru import logger

from ..core.alphabet import classify_alphabet
from ..core.exceptions import (
    ClassificationWriteError,
    NoFastaBlocksError,
    ResponseParseError,
)
from ..core.types import AlphabetClass
from ..utils.file_operations import StagedFastaOutput


MARKUP_TAG = re.compile(r"<[^<>]*>")


def extract_fasta_blocks(text: str) -> List[str]:
    """
    Extract all FASTA blocks from arbitrary text.
    
    A block starts at a line beginning with ``>`` and runs, blank lines
    included, until the next ``>`` line or the end of the text. Blocks whose
    header is not followed by any line containing a letter are dropped.
    Text before the first header is ignored.
    
    Args:
        text: Response body
        
    Returns:
        Blocks in order of appearance, each newline-terminated
    """
    blocks: List[str] = []
    current: List[str] = []
    
    for line in text.splitlines():
        trimmed = line.rstrip()
        
        if trimmed.startswith(">"):
            if current:
                blocks.append("\n".join(current) + "\n")
            current = [trimmed]
        elif current:
            current.append(trimmed)
    
    if current:
        blocks.append("\n".join(current) + "\n")
    
    return [block for block in blocks if _has_sequence_content(block)]


def _has_sequence_content(block: str) -> bool:
    lines = block.splitlines()
    return any(
        any(char.isascii() and char.isalpha() for char in line)
        for line in lines[1:]
    )


def strip_markup(block: str) -> str:
    """
    Remove inline markup tags such as ``<br>`` or ``</pre>`` from the
    sequence lines of a block. Header lines are returned unchanged.
    """
    lines = [
        line if line.startswith(">") else MARKUP_TAG.sub("", line)
        for line in block.splitlines()
    ]
    return "\n".join(lines) + "\n"


def parse_block(block: str, block_index: int = 0) -> List[SeqRecord]:
    """
    Parse one extracted block into records.
    
    Raises:
        ResponseParseError: If the block is not valid FASTA
    """
    try:
        return list(SeqIO.parse(io.StringIO(strip_markup(block)), "fasta"))
    except ValueError as e:
        raise ResponseParseError(block_index, str(e)) from e


def iter_block_records(blocks: List[str]) -> Iterator[SeqRecord]:
    """Yield the records of every block in order."""
    for index, block in enumerate(blocks):
        yield from parse_block(block, index)


@dataclass
class SplitCounts:
    """Records routed to each output by ``split_fasta_blocks``."""
    
    aa_count: int = 0
    na_count: int = 0
    skipped: int = 0


def split_fasta_blocks(
    blocks: List[str],
    aa_output: StagedFastaOutput,
    na_output: StagedFastaOutput,
) -> SplitCounts:
    """
    Classify the records of ``blocks`` and write them to the two outputs.
    
    Records with an empty sequence cannot be classified; they are logged
    and skipped.
    
    Raises:
        NoFastaBlocksError: If ``blocks`` is empty
        ResponseParseError: If a block cannot be parsed
        ClassificationWriteError: If an output cannot be written
    """
    if not blocks:
        raise NoFastaBlocksError()
    
    counts = SplitCounts()
    for record in iter_block_records(blocks):
        alphabet = classify_alphabet(record.seq)
        
        if alphabet is AlphabetClass.INVALID:
            logger.warning(f"Skipping record {record.id}: empty sequence")
            counts.skipped += 1
            continue
        
        if alphabet is AlphabetClass.NUCLEOTIDE:
            target = na_output
        else:
            target = aa_output
        
        try:
            target.write(record)
        except OSError as e:
            raise ClassificationWriteError(target.path) from e
        
        if alphabet is AlphabetClass.NUCLEOTIDE:
            counts.na_count += 1
        else:
            counts.aa_count += 1
    
    return counts
