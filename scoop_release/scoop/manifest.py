"""Assemble and serialize the scoop manifest."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Mapping, Union

from ..config import ScoopConfig
from ..schemas.manifest import Manifest, Resource

if TYPE_CHECKING:  # pragma: no cover
    from ..context import ReleaseContext


def build_manifest(ctx: "ReleaseContext", scoop: ScoopConfig, architecture: Mapping[str, Resource]) -> Manifest:
    return Manifest(
        version=ctx.version,
        architecture=dict(architecture),
        homepage=scoop.homepage,
        license=scoop.license,
        description=scoop.description,
        persist=list(scoop.persist),
        pre_install=list(scoop.pre_install),
        post_install=list(scoop.post_install),
    )


def render_manifest(manifest: Manifest) -> bytes:
    """Serialize with four-space indentation; identical input gives identical bytes."""

    return json.dumps(manifest.to_document(), indent=4, ensure_ascii=False).encode("utf-8")


def load_manifest(content: Union[bytes, str]) -> Manifest:
    return Manifest.model_validate_json(content)
