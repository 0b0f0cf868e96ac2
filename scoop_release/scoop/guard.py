from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .models import PublishConfig

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


def check_skip(ctx: "ReleaseContext", config: PublishConfig) -> Optional[str]:
    """Return why publishing should be skipped, or ``None`` to publish.

    Checks run in order and the first match wins.
    """

    skip_upload = config.skip_upload.strip()
    if skip_upload == "true":
        return "scoop.skip_upload is true"
    if skip_upload == "auto" and ctx.semver.is_prerelease:
        return "release is prerelease"
    if ctx.config.release.draft:
        return "release is marked as draft"
    if ctx.config.release.disable:
        return "release is disabled"
    return None
