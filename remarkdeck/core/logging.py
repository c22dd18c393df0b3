"""Logging configuration for RemarkDeck."""
import logging
import sys
from typing import TextIO

NOISY_LOGGERS = (
    "azure.core.pipeline.policies.http_logging_policy",
    "azure.identity",
    "httpx",
    "openai",
    "agent_framework",
)


def setup_logging(level: int = logging.INFO, stream: TextIO = sys.stdout) -> None:
    """
    Configure application logging.
    
    Args:
        level: Logging level (default: INFO)
        stream: Stream log records are written to (default: stdout)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(stream)
        ]
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)
