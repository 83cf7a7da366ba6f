"""Tests for combining a directory of FASTA files."""

from pathlib import Path

import pytest

from founder_pipeline.core.exceptions import (
    AggregationError,
    FastaParseError,
    InputDirectoryError,
    InvalidSequenceError,
    OutputDirectoryError,
)
from founder_pipeline.core.types import SourceFileSet
from founder_pipeline.fasta.aggregator import FastaAggregator, aggregate

from conftest import make_record, read_fasta, write_fasta


pytestmark = pytest.mark.unit


class TestSourceSelection:
    
    def test_selects_fasta_family_sorted(self, temp_dir: Path):
        for name in ["c.FNA", "a.fasta", "b.Fa", "d.faa", "e.txt", "f.fastq", "g"]:
            (temp_dir / name).write_text(">x\nACGT\n")
        (temp_dir / "h.fa").mkdir()
        
        sources = SourceFileSet.from_directory(temp_dir)
        
        assert [p.name for p in sources] == ["a.fasta", "b.Fa", "c.FNA", "d.faa"]
        assert len(sources) == 4
    
    def test_missing_directory(self, temp_dir: Path, test_settings):
        with pytest.raises(InputDirectoryError) as exc_info:
            FastaAggregator(test_settings).process(temp_dir / "missing", temp_dir / "out.fasta")
        assert exc_info.value.path == temp_dir / "missing"


class TestAggregation:
    
    def test_combines_in_sorted_file_order(self, sample_dir: Path, temp_dir: Path, test_settings):
        output = temp_dir / "out" / "nested" / "combined.fasta"
        
        result = FastaAggregator(test_settings).process(sample_dir, output)
        
        records = read_fasta(output)
        assert [r.id for r in records] == ["s1a", "s1b", "s2"]
        assert [str(r.seq) for r in records] == ["ACGTACGTAC", "ggccttaa", "ACGTNNACGT-RYKM"]
        assert result.record_count == 3
        assert [p.name for p in result.files_processed] == ["sample_a.fasta", "sample_b.fa"]
    
    def test_preserves_identifier_and_description(self, sample_dir: Path, temp_dir: Path, test_settings):
        output = temp_dir / "combined.fasta"
        FastaAggregator(test_settings).process(sample_dir, output)
        
        records = {r.id: r for r in read_fasta(output)}
        assert records["s2"].description == "s2 second sample"
        assert records["s1b"].description == "s1b lower case"
        assert records["s1a"].description == "s1a"
    
    def test_wraps_sequence_lines_at_60(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "input"
        write_fasta(input_dir / "long.fasta", [make_record("long", "ACGT" * 37 + "AC")])
        output = temp_dir / "combined.fasta"
        
        FastaAggregator(test_settings).process(input_dir, output)
        
        lines = output.read_text().splitlines()
        assert lines[0] == ">long"
        assert [len(line) for line in lines[1:]] == [60, 60, 30]
        assert str(read_fasta(output)[0].seq) == "ACGT" * 37 + "AC"
    
    def test_empty_directory_gives_empty_file(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "empty"
        input_dir.mkdir()
        output = temp_dir / "combined.fasta"
        
        result = FastaAggregator(test_settings).process(input_dir, output)
        
        assert output.exists()
        assert output.read_text() == ""
        assert result.record_count == 0
    
    def test_empty_file_contributes_nothing(self, sample_dir: Path, temp_dir: Path, test_settings):
        (sample_dir / "sample_0.fa").write_text("")
        output = temp_dir / "combined.fasta"
        
        result = FastaAggregator(test_settings).process(sample_dir, output)
        
        assert result.record_count == 3
        assert len(result.files_processed) == 3
    
    def test_overwrites_existing_output(self, sample_dir: Path, temp_dir: Path, test_settings):
        output = temp_dir / "combined.fasta"
        output.write_text(">old\nAAAA\n")
        
        FastaAggregator(test_settings).process(sample_dir, output)
        
        assert "old" not in [r.id for r in read_fasta(output)]
    
    def test_spaces_inside_sequence_lines_are_dropped(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "input"
        input_dir.mkdir()
        (input_dir / "spaced.fasta").write_text(">s1\nAC GT\nAC GT\n")
        output = temp_dir / "combined.fasta"
        
        result = FastaAggregator(test_settings).process(input_dir, output)
        
        assert result.record_count == 1
        assert str(read_fasta(output)[0].seq) == "ACGTACGT"
    
    def test_convenience_function(self, sample_dir: Path, temp_dir: Path):
        result = aggregate(sample_dir, temp_dir / "combined.fasta")
        assert result.record_count == 3


class TestAggregationFailures:
    
    def test_amino_acid_record_is_rejected(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "input"
        (input_dir).mkdir()
        (input_dir / "a.fasta").write_text(">s1\nACGT\n")
        (input_dir / "b.fa").write_text(">s2\nMKVL\n")
        output = temp_dir / "combined.fasta"
        
        with pytest.raises(InvalidSequenceError) as exc_info:
            FastaAggregator(test_settings).process(input_dir, output)
        
        error = exc_info.value
        assert error.path == input_dir / "b.fa"
        assert error.record_id == "s2"
        assert error.invalid_chars == "L"
        assert error.details["record_id"] == "s2"
        assert isinstance(error, AggregationError)
    
    def test_invalid_characters_are_sorted_and_distinct(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "input"
        write_fasta(input_dir / "x.fasta", [make_record("bad", "ACGTZQXQZ")])
        
        with pytest.raises(InvalidSequenceError) as exc_info:
            FastaAggregator(test_settings).process(input_dir, temp_dir / "combined.fasta")
        
        assert exc_info.value.invalid_chars == "QXZ"
        assert "record bad: QXZ" in str(exc_info.value)
    
    def test_failure_leaves_no_partial_output(self, sample_dir: Path, temp_dir: Path, test_settings):
        write_fasta(sample_dir / "sample_c.fasta", [make_record("s3", "ACGTE")])
        output = temp_dir / "combined.fasta"
        
        with pytest.raises(InvalidSequenceError):
            FastaAggregator(test_settings).process(sample_dir, output)
        
        assert not output.exists()
        assert list(temp_dir.glob(".combined.fasta.*")) == []
    
    def test_failure_keeps_previous_output(self, sample_dir: Path, temp_dir: Path, test_settings):
        write_fasta(sample_dir / "sample_c.fasta", [make_record("s3", "ACGTE")])
        output = temp_dir / "combined.fasta"
        output.write_text(">previous\nACGT\n")
        
        with pytest.raises(InvalidSequenceError):
            FastaAggregator(test_settings).process(sample_dir, output)
        
        assert output.read_text() == ">previous\nACGT\n"
    
    def test_undecodable_file_is_a_parse_error(self, temp_dir: Path, test_settings):
        input_dir = temp_dir / "input"
        input_dir.mkdir()
        (input_dir / "broken.fasta").write_bytes(b">s1\nAC\xff\xfeGT\n")
        
        with pytest.raises(FastaParseError) as exc_info:
            FastaAggregator(test_settings).process(input_dir, temp_dir / "combined.fasta")
        
        assert exc_info.value.path == input_dir / "broken.fasta"
    
    def test_uncreatable_output_directory(self, sample_dir: Path, temp_dir: Path, test_settings):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        
        with pytest.raises(OutputDirectoryError):
            FastaAggregator(test_settings).process(sample_dir, blocker / "combined.fasta")
    
    def test_statistics_count_failures(self, sample_dir: Path, temp_dir: Path, test_settings):
        aggregator = FastaAggregator(test_settings)
        write_fasta(sample_dir / "sample_c.fasta", [make_record("s3", "ACGTE")])
        
        with pytest.raises(InvalidSequenceError):
            aggregator.process(sample_dir, temp_dir / "combined.fasta")
        
        stats = aggregator.get_statistics()
        assert stats["runs"] == 1
        assert stats["failures"] == 1
