"""Core utilities and shared components for s3-actions."""

from .config import settings
from .exceptions import ConfigurationError, ErrorKind, S3ActionsError
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "ConfigurationError",
    "ErrorKind",
    "S3ActionsError",
    "get_logger",
    "get_tracer",
]
