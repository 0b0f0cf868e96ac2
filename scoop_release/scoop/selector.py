from __future__ import annotations

from typing import List

from ..artifacts import (
    ArtifactRef,
    ArtifactStore,
    ArtifactType,
    and_,
    by_goamd64,
    by_goarch,
    by_goos,
    by_type,
    or_,
)
from ..errors import NoWindowsBuildError


def select_windows_archives(artifacts: ArtifactStore, goamd64: str) -> List[ArtifactRef]:
    """Return windows archives for 386 and for amd64 built at the ``goamd64`` level."""

    archives = artifacts.filter(
        and_(
            by_goos("windows"),
            by_type(ArtifactType.UPLOADABLE_ARCHIVE),
            or_(
                and_(by_goarch("amd64"), by_goamd64(goamd64)),
                by_goarch("386"),
            ),
        )
    ).list()
    if not archives:
        raise NoWindowsBuildError()
    return archives
