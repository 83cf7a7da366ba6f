"""
HTTP client for the LANL GeneCutter service.

GeneCutter takes a multipart upload of nucleotide FASTA plus form fields
and answers with HTML or plain text that embeds the requested FASTA.
The client returns that body as opaque text; parsing lives in
``founder_pipeline.fasta.response_parser``.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from ..config.settings import GeneCutterSettings
from ..core.exceptions import (
    AnnotatedInputError,
    GeneCutterRequestError,
    GeneCutterStatusError,
    ResponseReadError,
)
from ..core.types import PathLike
from .logging import LoggerMixin


@dataclass
class APIResponse:
    """Standardized API response wrapper."""
    
    status_code: int
    text: str
    headers: Dict[str, str]
    url: str
    processing_time: float
    
    @property
    def success(self) -> bool:
        """Check if request was successful."""
        return 200 <= self.status_code < 300


@dataclass
class APIClientConfig:
    """Configuration for the GeneCutter client."""
    
    url: str
    upload_field: str = "seq_upload"
    upload_filename: str = "sample.fasta"
    return_format: str = "fasta"
    extra_fields: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    verify_ssl: bool = True
    
    @classmethod
    def from_settings(cls, settings: GeneCutterSettings) -> "APIClientConfig":
        return cls(
            url=settings.url,
            upload_field=settings.upload_field,
            upload_filename=settings.upload_filename,
            return_format=settings.return_format,
            extra_fields=dict(settings.extra_fields),
            timeout=settings.timeout,
            verify_ssl=settings.verify_ssl,
        )


class GeneCutterClient(LoggerMixin):
    """
    Submits FASTA to GeneCutter.
    
    One POST per call, no automatic retries; a caller that wants retries
    wraps ``submit`` itself.
    """
    
    def __init__(self, config: APIClientConfig, session: Optional[requests.Session] = None):
        """Initialize API client."""
        self.config = config
        self.session = session or self._create_session()
        self.stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "total_processing_time": 0.0,
        }
    
    def _create_session(self) -> requests.Session:
        """Create configured requests session."""
        session = requests.Session()
        
        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        
        return session
    
    def build_form(self, region: str) -> Dict[str, str]:
        """Form fields sent alongside the uploaded file."""
        form = dict(self.config.extra_fields)
        form["region"] = region
        form["return_format"] = self.config.return_format
        return form
    
    def submit(self, fasta_path: PathLike, region: str) -> APIResponse:
        """
        Upload ``fasta_path`` and return the response body.
        
        Args:
            fasta_path: Annotated FASTA file to upload
            region: Genomic region selector, e.g. ``env``
            
        Returns:
            APIResponse with a 2xx status
            
        Raises:
            AnnotatedInputError: If the file cannot be opened
            GeneCutterRequestError: On connection failure or timeout
            ResponseReadError: If the body cannot be read
            GeneCutterStatusError: On a non-success status
        """
        fasta_path = Path(fasta_path)
        url = self.config.url
        
        try:
            upload = open(fasta_path, "rb")
        except OSError as e:
            raise AnnotatedInputError(fasta_path) from e
        
        self.logger.info(f"Submitting {fasta_path} to GeneCutter (region={region})")
        start_time = time.time()
        self.stats["total_requests"] += 1
        
        with upload:
            try:
                response = self.session.post(
                    url,
                    files={self.config.upload_field: (self.config.upload_filename, upload)},
                    data=self.build_form(region),
                    timeout=self.config.timeout,
                    verify=self.config.verify_ssl,
                    stream=True,
                )
            except requests.RequestException as e:
                self.stats["failed_requests"] += 1
                raise GeneCutterRequestError(url, str(e)) from e
        
        with response:
            try:
                body = response.text
            except requests.RequestException as e:
                self.stats["failed_requests"] += 1
                raise ResponseReadError(url, str(e)) from e
        
        processing_time = time.time() - start_time
        self.stats["total_processing_time"] += processing_time
        
        api_response = APIResponse(
            status_code=response.status_code,
            text=body,
            headers=dict(response.headers),
            url=url,
            processing_time=processing_time,
        )
        
        if not api_response.success:
            self.stats["failed_requests"] += 1
            self.logger.error(f"GeneCutter request failed: {response.status_code}")
            raise GeneCutterStatusError(url, response.status_code)
        
        self.stats["successful_requests"] += 1
        self.logger.debug(
            f"GeneCutter answered {response.status_code} with {len(body)} characters "
            f"in {processing_time:.2f}s"
        )
        return api_response
    
    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
