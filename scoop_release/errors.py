"""Error types raised by scoop-release."""

from __future__ import annotations


class ScoopReleaseError(RuntimeError):
    """Base class for fatal scoop-release failures."""


class ConfigError(ScoopReleaseError):
    """Raised when the configuration file cannot be loaded or validated."""


class PreconditionError(ScoopReleaseError):
    """Raised when the inputs of a run cannot produce a manifest."""


class NoWindowsBuildError(PreconditionError):
    """Raised when no windows archive qualifies for the manifest."""

    def __init__(self, message: str = "scoop requires a windows build and archive") -> None:
        super().__init__(message)


class TemplateError(ScoopReleaseError):
    """Raised when a template cannot be expanded."""


class ChecksumError(ScoopReleaseError):
    """Raised when an artifact checksum cannot be computed."""


class MetadataError(ScoopReleaseError):
    """Raised when an archive lacks the build metadata needed for its binaries."""


class RemoteWriteError(ScoopReleaseError):
    """Raised when the bucket repository rejects or fails a file write."""


__all__ = [
    "ChecksumError",
    "ConfigError",
    "MetadataError",
    "NoWindowsBuildError",
    "PreconditionError",
    "RemoteWriteError",
    "ScoopReleaseError",
    "TemplateError",
]
