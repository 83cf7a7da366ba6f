"""
Base classes for the Founder pipeline.

This module provides the abstract base class shared by the pipeline
stages: settings access, logging and simple run statistics.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..config.settings import Settings, get_settings
from ..utils.logging import LoggerMixin


class SequenceProcessor(LoggerMixin, ABC):
    """
    Abstract base class for pipeline stages.
    
    Subclasses implement ``validate_input`` and ``process``; both raise a
    ``FounderError`` subclass on failure rather than returning status flags.
    """
    
    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize processor with configuration.
        
        Args:
            settings: Optional settings; the cached global settings otherwise
        """
        self.settings = settings or get_settings()
        self.stats: Dict[str, Any] = {
            "runs": 0,
            "failures": 0,
        }
    
    @abstractmethod
    def validate_input(self, *args: Any) -> None:
        """
        Validate input before processing.
        
        Raises:
            FounderError: If validation fails
        """
        pass
    
    @abstractmethod
    def process(self, *args: Any, **kwargs: Any) -> Any:
        """Run the stage and return its result."""
        pass
    
    def get_statistics(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return {**self.stats, "processor_name": self.__class__.__name__}
