"""Clients for the git host that stores the bucket."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from requests import Session

from ..templates import TemplateRenderer
from .author import default_commit_author, resolve_commit_author
from .base import Client, Repo, repo_from_ref, template_ref
from .github import DEFAULT_API_URL, DEFAULT_DOWNLOAD_URL, GitHubClient

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


TOKEN_ENV = "GITHUB_TOKEN"


def new_client(ctx: "ReleaseContext", *, session: Optional[Session] = None) -> Client:
    """Build the GitHub client from the context environment."""

    return GitHubClient(
        ctx.env.get(TOKEN_ENV) or None,
        api_url=ctx.env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        download_url=ctx.env.get("GITHUB_DOWNLOAD_URL") or DEFAULT_DOWNLOAD_URL,
        session=session,
    )


def new_if_token(ctx: "ReleaseContext", client: Client, token: Optional[str]) -> Client:
    """Return ``client`` re-scoped to ``token`` (a template) when one is configured."""

    if not token:
        return client
    rendered = TemplateRenderer(ctx).apply(token)
    if not rendered:
        return client
    return client.with_token(rendered)


__all__ = [
    "Client",
    "GitHubClient",
    "Repo",
    "TOKEN_ENV",
    "default_commit_author",
    "new_client",
    "new_if_token",
    "repo_from_ref",
    "resolve_commit_author",
    "template_ref",
]
