"""Utility functions for git-workspace-keeper.

This package provides utility modules:
- logging: Logging configuration and logger creation
- urls: Credential handling for remote URLs
- fs: Forced directory wiping
"""

from .logging import setup_logging, get_logger, ColoredFormatter
from .urls import strip_credentials, embed_token, redact_credentials, validate_endpoint
from .fs import delete_by_force

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    # URLs
    "strip_credentials",
    "embed_token",
    "redact_credentials",
    "validate_endpoint",
    # Filesystem
    "delete_by_force",
]
