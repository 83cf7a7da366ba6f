"""Tests for the GeneCutter HTTP client."""

from pathlib import Path
from unittest import mock

import pytest
import requests

from founder_pipeline.config.settings import GeneCutterSettings
from founder_pipeline.core.exceptions import (
    AnnotatedInputError,
    GeneCutterRequestError,
    GeneCutterStatusError,
    ResponseReadError,
)
from founder_pipeline.utils.api_clients import APIClientConfig, GeneCutterClient

from conftest import GENE_CUTTER_URL, FakeSession, make_response


pytestmark = pytest.mark.unit


class TestSubmit:
    
    def test_sends_multipart_upload(self, gene_cutter_client, fake_session, annotated_fasta: Path):
        response = gene_cutter_client.submit(annotated_fasta, "env")
        
        assert response.success
        assert ">sample1_env_AA" in response.text
        
        call = fake_session.calls[0]
        assert call["url"] == GENE_CUTTER_URL
        assert call["data"] == {"region": "env", "return_format": "fasta"}
        assert list(call["files"]) == ["seq_upload"]
        assert call["files"]["seq_upload"][0] == "sample.fasta"
        assert call["timeout"] is None
        assert fake_session.uploads == [annotated_fasta.read_bytes()]
    
    def test_extra_fields_and_timeout_from_settings(self, annotated_fasta: Path, fake_session):
        settings = GeneCutterSettings(
            url=GENE_CUTTER_URL,
            extra_fields={"codon_align": "yes"},
            timeout=12.5,
        )
        client = GeneCutterClient(APIClientConfig.from_settings(settings), session=fake_session)
        
        client.submit(annotated_fasta, "gag")
        
        call = fake_session.calls[0]
        assert call["data"] == {"codon_align": "yes", "region": "gag", "return_format": "fasta"}
        assert call["timeout"] == 12.5
    
    def test_required_fields_override_extra_fields(self, annotated_fasta: Path, fake_session):
        config = APIClientConfig(url=GENE_CUTTER_URL, extra_fields={"region": "pol"})
        client = GeneCutterClient(config, session=fake_session)
        
        client.submit(annotated_fasta, "env")
        
        assert fake_session.calls[0]["data"]["region"] == "env"
    
    def test_missing_input_file(self, gene_cutter_client, fake_session, temp_dir: Path):
        with pytest.raises(AnnotatedInputError) as exc_info:
            gene_cutter_client.submit(temp_dir / "nope.fasta", "env")
        
        assert exc_info.value.path == temp_dir / "nope.fasta"
        assert fake_session.calls == []
    
    @pytest.mark.parametrize("error", [
        requests.ConnectionError("connection refused"),
        requests.Timeout("timed out"),
    ])
    def test_request_failure(self, annotated_fasta: Path, error):
        client = GeneCutterClient(
            APIClientConfig(url=GENE_CUTTER_URL),
            session=FakeSession(error=error),
        )
        
        with pytest.raises(GeneCutterRequestError) as exc_info:
            client.submit(annotated_fasta, "env")
        
        assert exc_info.value.url == GENE_CUTTER_URL
        assert exc_info.value.__cause__ is error
        assert client.stats["failed_requests"] == 1
    
    def test_non_success_status(self, annotated_fasta: Path):
        client = GeneCutterClient(
            APIClientConfig(url=GENE_CUTTER_URL),
            session=FakeSession(response=make_response("Internal error", status_code=503)),
        )
        
        with pytest.raises(GeneCutterStatusError) as exc_info:
            client.submit(annotated_fasta, "env")
        
        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)
    
    def test_unreadable_body(self, annotated_fasta: Path):
        broken = mock.MagicMock()
        broken.status_code = 200
        type(broken).text = mock.PropertyMock(
            side_effect=requests.exceptions.ChunkedEncodingError("connection reset")
        )
        client = GeneCutterClient(
            APIClientConfig(url=GENE_CUTTER_URL),
            session=FakeSession(response=broken),
        )
        
        with pytest.raises(ResponseReadError):
            client.submit(annotated_fasta, "env")
    
    def test_statistics(self, gene_cutter_client, annotated_fasta: Path):
        gene_cutter_client.submit(annotated_fasta, "env")
        
        assert gene_cutter_client.stats["total_requests"] == 1
        assert gene_cutter_client.stats["successful_requests"] == 1


def test_default_session_does_not_retry():
    client = GeneCutterClient(APIClientConfig(url=GENE_CUTTER_URL))
    
    adapter = client.session.get_adapter("https://www.hiv.lanl.gov/")
    assert adapter.max_retries.total == 0
    client.close()
