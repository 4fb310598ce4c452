"""
Error types raised by codemend.

Extraction and diffing never raise; only terminal I/O (confirmation,
file writes) and the collaborators around the core can fail.
"""


class CodemendError(Exception):
    """Base class for all codemend errors."""


class ConfigError(CodemendError):
    """Raised when configuration is missing or invalid."""


class ApplyError(CodemendError):
    """Raised when an accepted merge cannot be written to disk."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason
