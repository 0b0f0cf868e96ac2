"""Data passed between the run and publish phases."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional

from ..config import CommitAuthor, RepoRef, ScoopConfig
from ..schemas.manifest import Manifest


@dataclass(frozen=True)
class PublishConfig:
    """Snapshot of the scoop settings the publish phase needs."""

    bucket: RepoRef
    folder: str
    name: str
    commit_message_template: str
    commit_author: CommitAuthor
    skip_upload: str
    url_template: str = ""

    @classmethod
    def from_scoop(cls, scoop: ScoopConfig) -> "PublishConfig":
        return cls(
            bucket=scoop.bucket.model_copy(),
            folder=scoop.folder,
            name=scoop.name,
            commit_message_template=scoop.commit_message_template,
            commit_author=scoop.commit_author.model_copy(),
            skip_upload=scoop.skip_upload,
            url_template=scoop.url_template,
        )

    @property
    def filename(self) -> str:
        return f"{self.name}.json"

    def with_url_template(self, url_template: str) -> "PublishConfig":
        return replace(self, url_template=url_template)


@dataclass(slots=True)
class RunResult:
    manifest_path: Path
    content: bytes
    manifest: Manifest
    publish_config: PublishConfig


@dataclass(slots=True)
class PublishResult:
    status: str
    reason: Optional[str] = None
    repo: Optional[str] = None
    path: Optional[str] = None
    commit_message: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"
