"""Commit author defaults and templating."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import CommitAuthor
from ..templates import TemplateRenderer

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


DEFAULT_AUTHOR_NAME = "releasebot"
DEFAULT_AUTHOR_EMAIL = "bot@scoop-release.dev"


def default_commit_author(author: CommitAuthor) -> CommitAuthor:
    return CommitAuthor(
        name=author.name or DEFAULT_AUTHOR_NAME,
        email=author.email or DEFAULT_AUTHOR_EMAIL,
    )


def resolve_commit_author(ctx: "ReleaseContext", author: CommitAuthor) -> CommitAuthor:
    """Render name and email templates, falling back to the defaults when blank."""

    renderer = TemplateRenderer(ctx)
    return default_commit_author(
        CommitAuthor(
            name=renderer.apply(author.name),
            email=renderer.apply(author.email),
        )
    )
