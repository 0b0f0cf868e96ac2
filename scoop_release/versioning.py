from __future__ import annotations

import re
from dataclasses import dataclass


_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True)
class Semver:
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)


def parse_semver(tag: str) -> Semver:
    match = _SEMVER_RE.match(tag.strip())
    if not match:
        raise ValueError(f"Tag '{tag}' is not a semantic version (expected [v]MAJOR.MINOR.PATCH[-PRE][+BUILD]).")
    return Semver(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=match.group("prerelease") or "",
        build=match.group("build") or "",
    )


def version_from_tag(tag: str) -> str:
    tag = tag.strip()
    return tag[1:] if tag.startswith("v") else tag
