"""Turn selected archives into per-architecture manifest resources."""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from ..artifacts import ArtifactRef
from ..errors import ChecksumError, MetadataError, TemplateError
from ..schemas.manifest import Resource
from ..templates import TemplateRenderer
from .models import PublishConfig

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Client
    from ..context import ReleaseContext


logger = logging.getLogger(__name__)

ARCHITECTURES = {
    "386": "32bit",
    "amd64": "64bit",
}


def resolve_architectures(
    ctx: "ReleaseContext",
    client: "Client",
    config: PublishConfig,
    artifacts: Iterable[ArtifactRef],
) -> Tuple[Dict[str, Resource], PublishConfig]:
    """Resolve one resource per architecture key.

    When no URL template is configured the client's default is fetched once and
    returned in the updated config so the publish phase sees the same value.
    """

    if not config.url_template:
        config = config.with_url_template(client.release_url_template(ctx))

    renderer = TemplateRenderer(ctx)
    architecture: Dict[str, Resource] = {}
    for artifact in artifacts:
        if artifact.goos != "windows":
            continue
        arch = ARCHITECTURES.get(artifact.goarch)
        if arch is None:
            continue
        architecture[arch] = resolve_resource(renderer.with_artifact(artifact), artifact, config.url_template, arch)
    return architecture, config


def resolve_resource(renderer: TemplateRenderer, artifact: ArtifactRef, url_template: str, arch: str) -> Resource:
    try:
        url = renderer.apply(url_template)
    except TemplateError as exc:
        raise TemplateError(f"url_template for {arch} ({artifact.name}): {exc}") from exc

    try:
        checksum = artifact.checksum("sha256")
    except ChecksumError as exc:
        raise ChecksumError(f"{arch}: {exc}") from exc

    logger.debug(
        "scoop url templating: template=%s url=%s sum=%s artifact=%s",
        url_template,
        url,
        checksum,
        artifact.name,
    )
    return Resource(url=url, bin=binaries(artifact, arch), hash=checksum)


def binaries(artifact: ArtifactRef, arch: str = "") -> List[str]:
    """Paths of the binaries inside the archive, relative to its root."""

    if artifact.contents is None:
        label = f"{arch} ({artifact.name})" if arch else artifact.name
        raise MetadataError(f"{label}: archive carries no build metadata")
    wrap = artifact.contents.wrap_dir or ""
    return [posixpath.join(wrap, build.name) for build in artifact.contents.builds]
