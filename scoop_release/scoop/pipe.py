"""Scoop pipe: generate the manifest (run) and push it to the bucket (publish)."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..artifacts import ArtifactRef, ArtifactType, by_type
from ..client import default_commit_author
from ..errors import ScoopReleaseError
from .manifest import build_manifest, load_manifest, render_manifest
from .models import PublishConfig, PublishResult, RunResult
from .publisher import publish_manifest
from .resolver import resolve_architectures
from .selector import select_windows_archives

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Client
    from ..context import ReleaseContext


logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE_TEMPLATE = "Scoop update for {{ .ProjectName }} version {{ .Tag }}"
DEFAULT_GOAMD64 = "v1"


class ScoopPipe:
    """Builds and publishes scoop manifests."""

    def __str__(self) -> str:
        return "scoop manifests"

    def skip(self, ctx: "ReleaseContext") -> bool:
        return not ctx.config.scoop.bucket.name

    def default(self, ctx: "ReleaseContext") -> None:
        scoop = ctx.config.scoop
        if not scoop.name:
            scoop.name = ctx.config.project_name
        scoop.commit_author = default_commit_author(scoop.commit_author)
        if not scoop.commit_message_template:
            scoop.commit_message_template = DEFAULT_COMMIT_MESSAGE_TEMPLATE
        if not scoop.goamd64:
            scoop.goamd64 = DEFAULT_GOAMD64

    def run(self, ctx: "ReleaseContext", client: "Client") -> RunResult:
        """Write ``{name}.json`` into the dist directory."""

        scoop = ctx.config.scoop
        archives = select_windows_archives(ctx.artifacts, scoop.goamd64)

        architecture, publish_config = resolve_architectures(
            ctx,
            client,
            PublishConfig.from_scoop(scoop),
            archives,
        )
        manifest = build_manifest(ctx, scoop, architecture)
        content = render_manifest(manifest)

        path = ctx.dist / publish_config.filename
        logger.info("writing manifest %s", path)
        _write_atomic(path, content)

        if not any(artifact.path == path for artifact in ctx.artifacts.filter(by_type(ArtifactType.SCOOP_MANIFEST))):
            ctx.artifacts.add(
                ArtifactRef(
                    name=publish_config.filename,
                    path=path,
                    type=ArtifactType.SCOOP_MANIFEST,
                )
            )
        return RunResult(
            manifest_path=path,
            content=content,
            manifest=manifest,
            publish_config=publish_config,
        )

    def publish(self, ctx: "ReleaseContext", client: "Client", run: RunResult) -> PublishResult:
        return publish_manifest(ctx, client, run)

    def load_run(self, ctx: "ReleaseContext", manifest_path: Optional[Path] = None) -> RunResult:
        """Rebuild the run result from a manifest written by an earlier process."""

        publish_config = PublishConfig.from_scoop(ctx.config.scoop)
        path = manifest_path or ctx.dist / publish_config.filename
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise ScoopReleaseError(f"could not read scoop manifest {path}: {exc}") from exc
        try:
            manifest = load_manifest(content)
        except ValueError as exc:
            raise ScoopReleaseError(f"invalid scoop manifest {path}: {exc}") from exc
        return RunResult(
            manifest_path=path,
            content=content,
            manifest=manifest,
            publish_config=publish_config,
        )


def _write_atomic(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise ScoopReleaseError(f"failed to write scoop manifest {path}: {exc}") from exc
