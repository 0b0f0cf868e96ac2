"""Version-control client interface used to publish manifests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ..config import CommitAuthor, RepoRef

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


@dataclass(frozen=True)
class Repo:
    owner: str
    name: str
    branch: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class Client(ABC):
    name: str

    @abstractmethod
    def release_url_template(self, ctx: "ReleaseContext") -> str:
        """Return the host's default download URL template for release assets."""

    @abstractmethod
    def create_file(
        self,
        ctx: "ReleaseContext",
        author: CommitAuthor,
        repo: Repo,
        content: bytes,
        path: str,
        message: str,
    ) -> None:
        """Create or update ``path`` in ``repo`` with ``content`` as one commit."""

    @abstractmethod
    def with_token(self, token: str) -> "Client":
        """Return a client of the same kind authenticated with ``token``."""


def template_ref(apply: Callable[[str], str], ref: RepoRef) -> RepoRef:
    """Expand every templated field of ``ref``."""

    return RepoRef(
        owner=apply(ref.owner),
        name=apply(ref.name),
        branch=apply(ref.branch) if ref.branch else ref.branch,
        token=ref.token,
    )


def repo_from_ref(ref: RepoRef) -> Repo:
    return Repo(owner=ref.owner, name=ref.name, branch=ref.branch or None)
