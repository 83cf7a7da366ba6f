"""
Logging utilities for the Founder pipeline.

This module provides centralized logging configuration using loguru
with structured logging support and performance monitoring.
"""

import sys
import time
import functools
from pathlib import Path
from typing import Optional, Dict, Any
from loguru import logger


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    enable_json: bool = False,
    rotation: str = "1 week",
) -> None:
    """
    Setup centralized logging configuration.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        format_string: Custom format string
        enable_json: Enable JSON structured logging
        rotation: Log rotation interval
    """
    logger.remove()
    
    if format_string is None:
        if enable_json:
            format_string = "{message}"
        else:
            format_string = (
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}"
            )
    
    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=not enable_json,
        serialize=enable_json,
    )
    
    if log_file:
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=rotation,
            serialize=enable_json,
        )
    
    logger.debug("Logging system initialized")


def log_performance(func_name: str, execution_time: float, **metrics: Any) -> None:
    """
    Log performance metrics.
    
    Args:
        func_name: Name of the function
        execution_time: Execution time in seconds
        **metrics: Additional performance metrics
    """
    logger.bind(execution_time=execution_time, metrics=metrics).info(
        f"Performance: {func_name} executed in {execution_time:.3f}s"
    )


def log_error_with_context(
    error: Exception,
    context: Dict[str, Any],
    stage: Optional[str] = None
) -> None:
    """
    Log error with additional context.
    
    Args:
        error: Exception that occurred
        context: Additional context information
        stage: Optional pipeline stage name
    """
    logger.bind(
        error_type=type(error).__name__,
        context=context,
        stage=stage,
    ).error(f"Error in {stage or 'operation'}: {error}")


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""
    
    @property
    def logger(self):
        """Get logger instance with class name."""
        return logger.bind(class_name=self.__class__.__name__)


def performance_monitor(func):
    """
    Decorator to monitor function performance.
    
    Args:
        func: Function to monitor
        
    Returns:
        Wrapped function with performance monitoring
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            log_error_with_context(
                e,
                {
                    "function": func.__name__,
                    "execution_time": time.time() - start_time,
                },
                stage=func.__name__,
            )
            raise
        
        log_performance(func.__name__, time.time() - start_time)
        return result
    
    return wrapper
