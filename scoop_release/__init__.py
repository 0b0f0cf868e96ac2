"""Generate scoop.sh manifests for release archives and publish them to a bucket."""

__version__ = "0.1.0"
from .artifacts import ArchiveContents, ArtifactRef, ArtifactStore, ArtifactType
from .config import CommitAuthor, ProjectConfig, RepoRef, ScoopConfig, load_config
from .context import ReleaseContext
from .errors import (
    ChecksumError,
    ConfigError,
    MetadataError,
    NoWindowsBuildError,
    PreconditionError,
    RemoteWriteError,
    ScoopReleaseError,
    TemplateError,
)
from .schemas.manifest import Manifest, Resource
from .scoop import PublishConfig, PublishResult, RunResult, ScoopPipe

__all__ = [
    "__version__",
    "ArchiveContents",
    "ArtifactRef",
    "ArtifactStore",
    "ArtifactType",
    "CommitAuthor",
    "ProjectConfig",
    "RepoRef",
    "ScoopConfig",
    "load_config",
    "ReleaseContext",
    "ChecksumError",
    "ConfigError",
    "MetadataError",
    "NoWindowsBuildError",
    "PreconditionError",
    "RemoteWriteError",
    "ScoopReleaseError",
    "TemplateError",
    "Manifest",
    "Resource",
    "PublishConfig",
    "PublishResult",
    "RunResult",
    "ScoopPipe",
]
