"""
Test configuration and fixtures for the Founder pipeline.

This module provides common test fixtures and configuration for the test suite.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
import requests
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from loguru import logger

from founder_pipeline.config.settings import Settings, get_settings
from founder_pipeline.utils.api_clients import APIClientConfig, GeneCutterClient


GENE_CUTTER_URL = "https://genecutter.test/cgi-bin/simpleGC"

MIXED_RESPONSE = (
    "<html><body>\n"
    "<h1>GeneCutter results</h1>\n"
    "<pre>\n"
    ">B.FR.83.HXB2_env_NA HXB2 reference\n"
    "ATGAGAGTGAAGGAGAAATATCAGCACTTGTGGAGATGGGGG\n"
    "TGGAGATGGGGCACCATGCTCCTTGGGATGTTGATGATCTGT\n"
    ">sample1_env_NA\n"
    "ATGAGAGTGAAGGGGATCAGGAAGAATTATCAGCACTTGTGG\n"
    ">B.FR.83.HXB2_env_AA HXB2 reference\n"
    "MRVKEKYQHLWRWGWRWGTMLLGMLMICS\n"
    ">sample1_env_AA\n"
    "MRVKGIRKNYQHLW</pre>\n"
    "</body></html>\n"
)


def make_record(record_id: str, sequence: str, description: str = "") -> SeqRecord:
    """Build a SeqRecord the way SeqIO.parse would return it."""
    return SeqRecord(
        Seq(sequence),
        id=record_id,
        description=f"{record_id} {description}".strip(),
    )


def write_fasta(path: Path, records: List[SeqRecord]) -> Path:
    """Write records to ``path`` as FASTA."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as handle:
        SeqIO.write(records, handle, "fasta")
    return path


def read_fasta(path: Path) -> List[SeqRecord]:
    with open(path) as handle:
        return list(SeqIO.parse(handle, "fasta"))


def make_response(text: str, status_code: int = 200, url: str = GENE_CUTTER_URL) -> requests.Response:
    """Build a fully read ``requests.Response``."""
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    response._content_consumed = True
    response.encoding = "utf-8"
    response.url = url
    return response


class FakeSession:
    """Stands in for ``requests.Session``; records every POST."""
    
    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.uploads: List[bytes] = []
        self.closed = False
    
    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        for _, (_, handle) in kwargs.get("files", {}).items():
            self.uploads.append(handle.read())
        if self.error is not None:
            raise self.error
        return self.response
    
    def close(self):
        self.closed = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing GeneCutter at a test URL."""
    return Settings(gene_cutter={"url": GENE_CUTTER_URL})


@pytest.fixture
def sample_dir(temp_dir: Path) -> Path:
    """Input directory with two nucleotide FASTA files and some noise."""
    input_dir = temp_dir / "input"
    write_fasta(
        input_dir / "sample_b.fa",
        [make_record("s2", "ACGTNNACGT-RYKM", "second sample")],
    )
    write_fasta(
        input_dir / "sample_a.fasta",
        [
            make_record("s1a", "ACGTACGTAC"),
            make_record("s1b", "ggccttaa", "lower case"),
        ],
    )
    (input_dir / "notes.txt").write_text(">x\nNOT A SEQUENCE\n")
    return input_dir


@pytest.fixture
def annotated_fasta(temp_dir: Path) -> Path:
    """Annotated FASTA as produced by the locator step."""
    return write_fasta(
        temp_dir / "work" / "combined_sga.direction.fasta",
        [make_record("sample1", "ATGAGAGTGAAGGGGATCAGG")],
    )


@pytest.fixture
def fake_session() -> FakeSession:
    """Session answering with a mixed AA/NA GeneCutter page."""
    return FakeSession(response=make_response(MIXED_RESPONSE))


@pytest.fixture
def gene_cutter_client(fake_session: FakeSession) -> GeneCutterClient:
    """GeneCutter client wired to ``fake_session``."""
    return GeneCutterClient(APIClientConfig(url=GENE_CUTTER_URL), session=fake_session)


# Test markers for different test categories
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "network: mark test as requiring network access")


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Isolate every test from FOUNDER_* variables and cached settings."""
    saved = {key: value for key, value in os.environ.items() if key.startswith("FOUNDER_")}
    for key in saved:
        os.environ.pop(key)
    get_settings.cache_clear()
    
    yield
    
    for key in [k for k in os.environ if k.startswith("FOUNDER_")]:
        os.environ.pop(key)
    os.environ.update(saved)
    get_settings.cache_clear()
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
