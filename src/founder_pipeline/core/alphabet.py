"""
Sequence alphabets used by the pipeline.

Two separate alphabets live here:

* ``DNA_ALPHABET`` validates raw reads before they are combined. It holds the
  four bases, the IUPAC ambiguity codes and the gap character.
* ``NUCLEOTIDE_ALPHABET`` decides whether a GeneCutter record is nucleotide
  or amino acid. It additionally accepts ``U`` and ``.``.
"""

from typing import Union

from .types import AlphabetClass


DNA_ALPHABET = frozenset("ACGTNRYSWKMBDHV-")

NUCLEOTIDE_ALPHABET = frozenset("ACGTURYKMSWBDHVN-.")


def _as_text(sequence: Union[str, bytes, object]) -> str:
    if isinstance(sequence, bytes):
        return sequence.decode("ascii", errors="replace")
    return str(sequence)


def find_invalid_dna_characters(sequence) -> str:
    """
    Return the characters of ``sequence`` outside the DNA alphabet.
    
    The result is deduplicated and sorted so error messages are stable.
    Case is ignored when checking membership but preserved in the result.
    
    Args:
        sequence: ``str``, ``bytes`` or ``Bio.Seq.Seq``
        
    Returns:
        Offending characters joined into one string, empty when valid
    """
    text = _as_text(sequence)
    bad = {char for char in text if char.upper() not in DNA_ALPHABET}
    return "".join(sorted(bad))


def is_valid_dna(sequence) -> bool:
    """Check whether every character of ``sequence`` is a DNA code."""
    return not find_invalid_dna_characters(sequence)


def classify_alphabet(sequence) -> AlphabetClass:
    """
    Classify a sequence as nucleotide or amino acid.
    
    A sequence made only of nucleotide codes (any case) is nucleotide;
    anything else is amino acid. An empty sequence is never nucleotide and
    is reported as ``AlphabetClass.INVALID``.
    """
    text = _as_text(sequence)
    if not text:
        return AlphabetClass.INVALID
    if all(char.upper() in NUCLEOTIDE_ALPHABET for char in text):
        return AlphabetClass.NUCLEOTIDE
    return AlphabetClass.AMINO_ACID
