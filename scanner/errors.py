"""Error types raised while resolving and scanning files."""

from graph.model import CyclicDependencyError


class ScanError(Exception):
    """Base class for resolution and scanning failures."""


class NotFoundError(ScanError):
    """A reference could not be resolved to an existing file or directory."""

    def __init__(self, reference: str, message: str = ""):
        self.reference = reference
        super().__init__(message or f"Path '{reference}' can't be resolved in any load path")


class NotScannedError(ScanError):
    """A chain was requested for a file that was never scanned."""

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"File '{file_id}' has not been scanned")


class DecodeError(ScanError):
    """A file could not be decoded as UTF-8 text."""

    def __init__(self, file_id: str, reason: object = ""):
        self.file_id = file_id
        super().__init__(f"Cannot decode '{file_id}' as UTF-8: {reason}")


class ConfigError(ScanError):
    """A configuration file is unreadable or holds invalid values."""


__all__ = [
    "ScanError",
    "NotFoundError",
    "NotScannedError",
    "DecodeError",
    "ConfigError",
    "CyclicDependencyError",
]
