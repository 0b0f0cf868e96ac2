"""Commit a generated manifest into the bucket repository."""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING

from ..client import new_if_token, repo_from_ref, resolve_commit_author, template_ref
from ..errors import ScoopReleaseError
from ..templates import TemplateRenderer
from .guard import check_skip
from .models import PublishResult, RunResult

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Client
    from ..context import ReleaseContext


logger = logging.getLogger(__name__)


def publish_manifest(ctx: "ReleaseContext", client: "Client", run: RunResult) -> PublishResult:
    config = run.publish_config

    reason = check_skip(ctx, config)
    if reason:
        logger.info("skipped: %s", reason)
        return PublishResult(status="skipped", reason=reason, logs=[f"skipped: {reason}"])

    client = new_if_token(ctx, client, config.bucket.token)
    renderer = TemplateRenderer(ctx)
    message = renderer.apply(config.commit_message_template)
    author = resolve_commit_author(ctx, config.commit_author)

    try:
        content = run.manifest_path.read_bytes()
    except OSError as exc:
        raise ScoopReleaseError(f"could not read scoop manifest {run.manifest_path}: {exc}") from exc

    repo = repo_from_ref(template_ref(renderer.apply, config.bucket))
    path = posixpath.join(config.folder, config.filename)
    logger.info("publishing %s to %s via %s", path, repo, client.name)
    client.create_file(ctx, author, repo, content, path, message)

    return PublishResult(
        status="published",
        repo=str(repo),
        path=path,
        commit_message=message,
        logs=[f"Committed {path} to {repo} as {author.name} <{author.email}>"],
    )
