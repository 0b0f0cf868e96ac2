from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from scoop_release.artifacts import ArchiveContents, ArtifactRef, ArtifactStore, ArtifactType
from scoop_release.client.base import Client, Repo
from scoop_release.config import CommitAuthor, ProjectConfig, parse_config
from scoop_release.context import ReleaseContext


class FakeClient(Client):
    """Records calls instead of talking to a git host."""

    name = "fake"

    def __init__(
        self,
        url_template: str = "https://dl.example.com/{{ .Tag }}/{{ .ArtifactName }}",
        *,
        error: Optional[Exception] = None,
    ) -> None:
        self.url_template = url_template
        self.error = error
        self.token: Optional[str] = None
        self.url_template_calls = 0
        self.created: List[Dict[str, Any]] = []

    def release_url_template(self, ctx: ReleaseContext) -> str:
        self.url_template_calls += 1
        return self.url_template

    def create_file(
        self,
        ctx: ReleaseContext,
        author: CommitAuthor,
        repo: Repo,
        content: bytes,
        path: str,
        message: str,
    ) -> None:
        if self.error is not None:
            raise self.error
        self.created.append(
            {
                "author": author,
                "repo": repo,
                "content": content,
                "path": path,
                "message": message,
                "token": self.token,
            }
        )

    def with_token(self, token: str) -> "FakeClient":
        self.token = token
        return self


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


def _base_config() -> Dict[str, Any]:
    return {
        "project_name": "myapp",
        "dist": "dist",
        "release": {"github": {"owner": "acme", "name": "myapp"}},
        "scoop": {
            "bucket": {"owner": "acme", "name": "scoop-bucket"},
            "homepage": "https://example.com",
            "license": "MIT",
            "description": "My app",
        },
    }


@pytest.fixture()
def make_config() -> Callable[..., ProjectConfig]:
    def _make(**overrides: Any) -> ProjectConfig:
        payload = _base_config()
        scoop_overrides = overrides.pop("scoop", {})
        release_overrides = overrides.pop("release", {})
        payload["scoop"].update(scoop_overrides)
        payload["release"].update(release_overrides)
        payload.update(overrides)
        return parse_config(payload)

    return _make


@pytest.fixture()
def make_archive(tmp_path: Path) -> Callable[..., ArtifactRef]:
    def _make(
        name: str,
        goarch: str,
        *,
        goos: str = "windows",
        goamd64: str = "v1",
        kind: ArtifactType = ArtifactType.UPLOADABLE_ARCHIVE,
        content: bytes = b"archive",
        binaries: Sequence[str] = ("myapp.exe",),
        wrap_dir: Optional[str] = None,
        with_contents: bool = True,
    ) -> ArtifactRef:
        path = tmp_path / "dist" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        contents = None
        if with_contents:
            builds = tuple(
                ArtifactRef(name=binary, path=tmp_path / "build" / binary, type=ArtifactType.BINARY, goos=goos, goarch=goarch)
                for binary in binaries
            )
            contents = ArchiveContents(builds=builds, wrap_dir=wrap_dir)
        return ArtifactRef(
            name=name,
            path=path,
            type=kind,
            goos=goos,
            goarch=goarch,
            goamd64=goamd64 if goarch == "amd64" else "",
            contents=contents,
        )

    return _make


@pytest.fixture()
def make_context(tmp_path: Path, make_config: Callable[..., ProjectConfig]) -> Callable[..., ReleaseContext]:
    def _make(
        artifacts: Sequence[ArtifactRef] = (),
        *,
        tag: str = "v1.0.0",
        config: Optional[ProjectConfig] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> ReleaseContext:
        return ReleaseContext.from_tag(
            config or make_config(),
            tag,
            env=env or {},
            artifacts=ArtifactStore(list(artifacts)),
            workspace_root=tmp_path,
        )

    return _make


@pytest.fixture()
def client_factory() -> Callable[..., FakeClient]:
    return FakeClient
