"""Release context shared by the run and publish phases."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from .artifacts import ArtifactStore
from .config import ProjectConfig
from .errors import ConfigError
from .versioning import Semver, parse_semver, version_from_tag


@dataclass
class ReleaseContext:
    config: ProjectConfig
    tag: str
    version: str
    semver: Semver
    env: Dict[str, str] = field(default_factory=dict)
    artifacts: ArtifactStore = field(default_factory=ArtifactStore)
    workspace_root: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_tag(
        cls,
        config: ProjectConfig,
        tag: str,
        *,
        env: Optional[Mapping[str, str]] = None,
        artifacts: Optional[ArtifactStore] = None,
        workspace_root: Optional[Path] = None,
    ) -> "ReleaseContext":
        try:
            semver = parse_semver(tag)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        merged_env = dict(os.environ if env is None else env)
        merged_env.update(_parse_env_entries(config.env))
        return cls(
            config=config,
            tag=tag.strip(),
            version=version_from_tag(tag),
            semver=semver,
            env=merged_env,
            artifacts=artifacts or ArtifactStore(),
            workspace_root=workspace_root or Path.cwd(),
        )

    @property
    def dist(self) -> Path:
        dist = Path(self.config.dist or "dist")
        if not dist.is_absolute():
            dist = self.workspace_root / dist
        return dist


def _parse_env_entries(entries: list[str]) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ConfigError(f"env entries must be KEY=VALUE (got '{entry}')")
        key, value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ConfigError("env entry key cannot be empty.")
        pairs[key] = value
    return pairs
