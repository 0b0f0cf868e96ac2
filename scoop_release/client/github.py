"""GitHub implementation of the publishing client."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Dict, Optional
from urllib.parse import quote

import requests
from requests import Response, Session
from requests.exceptions import RequestException

from ..config import CommitAuthor
from ..errors import ConfigError, RemoteWriteError
from ..templates import TemplateRenderer
from .base import Client, Repo, repo_from_ref, template_ref

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_DOWNLOAD_URL = "https://github.com"


class GitHubClient(Client):
    name = "github"

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        api_url: str = DEFAULT_API_URL,
        download_url: str = DEFAULT_DOWNLOAD_URL,
        session: Optional[Session] = None,
        timeout: int = 20,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.download_url = download_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def with_token(self, token: str) -> "GitHubClient":
        return GitHubClient(
            token,
            api_url=self.api_url,
            download_url=self.download_url,
            session=self.session,
            timeout=self.timeout,
        )

    def release_url_template(self, ctx: "ReleaseContext") -> str:
        ref = template_ref(TemplateRenderer(ctx).apply, ctx.config.release.github)
        if not ref.owner or not ref.name:
            raise ConfigError(
                "release.github owner and name are required to derive the default url_template; "
                "set scoop.url_template explicitly otherwise."
            )
        repo = repo_from_ref(ref)
        return f"{self.download_url}/{repo.owner}/{repo.name}/releases/download/{{{{ .Tag }}}}/{{{{ .ArtifactName }}}}"

    def create_file(
        self,
        ctx: "ReleaseContext",
        author: CommitAuthor,
        repo: Repo,
        content: bytes,
        path: str,
        message: str,
    ) -> None:
        url = f"{self.api_url}/repos/{repo.owner}/{repo.name}/contents/{quote(path.lstrip('/'))}"
        existing_sha, existing_content = self._get_existing(url, repo, path)
        if existing_content == content:
            logger.info("%s already up to date in %s, nothing to commit", path, repo)
            return

        payload: Dict[str, object] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "committer": {"name": author.name, "email": author.email},
            "author": {"name": author.name, "email": author.email},
        }
        if repo.branch:
            payload["branch"] = repo.branch
        if existing_sha:
            payload["sha"] = existing_sha

        logger.info("pushing %s to %s", path, repo)
        response = self._request("put", url, repo, path, json=payload)
        if response.status_code not in (200, 201):
            raise RemoteWriteError(
                f"could not update {path} in {repo}: GitHub returned "
                f"{response.status_code}: {response.text or response.reason}"
            )

    def _get_existing(self, url: str, repo: Repo, path: str) -> tuple[Optional[str], Optional[bytes]]:
        params = {"ref": repo.branch} if repo.branch else None
        response = self._request("get", url, repo, path, params=params)
        if response.status_code == 404:
            return None, None
        if response.status_code != 200:
            raise RemoteWriteError(
                f"could not read {path} from {repo}: GitHub returned "
                f"{response.status_code}: {response.text or response.reason}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteWriteError(f"could not read {path} from {repo}: invalid response body: {exc}") from exc
        if not isinstance(data, dict):
            raise RemoteWriteError(f"could not read {path} from {repo}: {path} is not a file")
        try:
            existing = base64.b64decode(data.get("content") or "")
        except (binascii.Error, ValueError):
            existing = None
        return data.get("sha"), existing

    def _request(self, method: str, url: str, repo: Repo, path: str, **kwargs: object) -> Response:
        try:
            return getattr(self.session, method)(
                url,
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except RequestException as exc:
            raise RemoteWriteError(f"could not update {path} in {repo}: {exc}") from exc

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers
