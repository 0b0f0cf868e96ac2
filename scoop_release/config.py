"""Pydantic models for the release configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


class RepoRef(BaseModel):
    """A repository on the git host. Every field may hold a template."""

    owner: str = ""
    name: str = ""
    branch: Optional[str] = None
    token: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class CommitAuthor(BaseModel):
    name: str = ""
    email: str = ""

    model_config = ConfigDict(extra="forbid")


class ScoopConfig(BaseModel):
    bucket: RepoRef = Field(default_factory=RepoRef)
    folder: str = ""
    name: str = ""
    homepage: str = ""
    license: str = ""
    description: str = ""
    persist: List[str] = Field(default_factory=list)
    pre_install: List[str] = Field(default_factory=list)
    post_install: List[str] = Field(default_factory=list)
    url_template: str = ""
    commit_message_template: str = Field(default="", alias="commit_msg_template")
    commit_author: CommitAuthor = Field(default_factory=CommitAuthor)
    skip_upload: str = Field(default="", description="'true' always skips, 'auto' skips prereleases.")
    goamd64: str = ""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("skip_upload", mode="before")
    @classmethod
    def _coerce_skip_upload(cls, value: Any) -> Any:
        # YAML reads a bare `true` as a boolean.
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return ""
        return value


class ReleaseConfig(BaseModel):
    draft: bool = False
    disable: bool = False
    github: RepoRef = Field(default_factory=RepoRef)

    model_config = ConfigDict(extra="forbid")


class ProjectConfig(BaseModel):
    project_name: str = ""
    dist: str = "dist"
    env: List[str] = Field(default_factory=list, description="Extra KEY=VALUE pairs exposed to templates.")
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    scoop: ScoopConfig = Field(default_factory=ScoopConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(path: Path) -> ProjectConfig:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid configuration at {path}: {exc}") from exc
    return parse_config(payload or {}, source=str(path))


def parse_config(payload: Any, *, source: str = "<config>") -> ProjectConfig:
    if not isinstance(payload, dict):
        raise ConfigError(f"Invalid configuration at {source}: expected a mapping")
    try:
        return ProjectConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration at {source}: {exc}") from exc


__all__ = [
    "CommitAuthor",
    "ProjectConfig",
    "ReleaseConfig",
    "RepoRef",
    "ScoopConfig",
    "load_config",
    "parse_config",
]
