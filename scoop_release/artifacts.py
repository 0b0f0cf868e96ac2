"""Artifact references and the in-memory store the pipes filter."""

from __future__ import annotations

import hashlib
import json
import zlib
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple

from .errors import ChecksumError, ConfigError


class ArtifactType(str, Enum):
    BINARY = "Binary"
    UPLOADABLE_ARCHIVE = "Archive"
    UPLOADABLE_BINARY = "Uploadable Binary"
    CHECKSUM = "Checksum"
    SCOOP_MANIFEST = "Scoop Manifest"


_CHUNK_SIZE = 1024 * 1024
_HASHLIB_ALGORITHMS = ("md5", "sha1", "sha224", "sha256", "sha384", "sha512")


@dataclass(frozen=True)
class ArchiveContents:
    """What an archive wraps: the builds it contains and their folder, if any."""

    builds: Tuple["ArtifactRef", ...] = ()
    wrap_dir: Optional[str] = None


@dataclass(frozen=True)
class ArtifactRef:
    name: str
    path: Path
    type: ArtifactType
    goos: str = ""
    goarch: str = ""
    goamd64: str = ""
    contents: Optional[ArchiveContents] = None

    def checksum(self, algorithm: str = "sha256") -> str:
        """Return the hex digest of the artifact file."""

        algorithm = algorithm.lower()
        if algorithm == "crc32":
            return _crc32(self.path, self.name)
        if algorithm not in _HASHLIB_ALGORITHMS:
            raise ChecksumError(f"invalid algorithm for {self.name}: {algorithm}")
        digest = hashlib.new(algorithm)
        try:
            with Path(self.path).open("rb") as handle:
                for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                    digest.update(chunk)
        except OSError as exc:
            raise ChecksumError(f"failed to checksum {self.name} at {self.path}: {exc}") from exc
        return digest.hexdigest()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ArtifactRef":
        """Build a reference from an ``artifacts.json`` entry."""

        try:
            name = str(payload["name"])
            kind = ArtifactType(payload.get("type", ArtifactType.BINARY.value))
        except KeyError as exc:
            raise ConfigError(f"artifact entry is missing {exc}") from exc
        except ValueError as exc:
            raise ConfigError(f"artifact {payload.get('name')!r} has unknown type: {exc}") from exc

        extra = payload.get("extra") or {}
        if not isinstance(extra, Mapping):
            raise ConfigError(f"artifact {name!r}: extra must be an object")
        contents: Optional[ArchiveContents] = None
        if "Builds" in extra:
            builds = extra.get("Builds") or []
            if not isinstance(builds, list):
                raise ConfigError(f"artifact {name!r}: extra.Builds must be a list")
            for index, build in enumerate(builds):
                if not isinstance(build, Mapping):
                    raise ConfigError(f"artifact {name!r}: extra.Builds[{index}] is not an object")
            contents = ArchiveContents(
                builds=tuple(cls.from_dict(build) for build in builds),
                wrap_dir=extra.get("WrappedIn") or None,
            )
        return cls(
            name=name,
            path=Path(str(payload.get("path", name))),
            type=kind,
            goos=str(payload.get("goos", "")),
            goarch=str(payload.get("goarch", "")),
            goamd64=str(payload.get("goamd64", "")),
            contents=contents,
        )


def _crc32(path: Path, name: str) -> str:
    value = 0
    try:
        with Path(path).open("rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                value = zlib.crc32(chunk, value)
    except OSError as exc:
        raise ChecksumError(f"failed to checksum {name} at {path}: {exc}") from exc
    return f"{value & 0xFFFFFFFF:08x}"


Predicate = Callable[[ArtifactRef], bool]


def by_goos(goos: str) -> Predicate:
    return lambda artifact: artifact.goos == goos


def by_goarch(goarch: str) -> Predicate:
    return lambda artifact: artifact.goarch == goarch


def by_goamd64(goamd64: str) -> Predicate:
    return lambda artifact: artifact.goamd64 == goamd64


def by_type(kind: ArtifactType) -> Predicate:
    return lambda artifact: artifact.type == kind


def and_(*predicates: Predicate) -> Predicate:
    return lambda artifact: all(predicate(artifact) for predicate in predicates)


def or_(*predicates: Predicate) -> Predicate:
    return lambda artifact: any(predicate(artifact) for predicate in predicates)


@dataclass
class ArtifactStore:
    items: List[ArtifactRef] = field(default_factory=list)

    def add(self, artifact: ArtifactRef) -> None:
        self.items.append(artifact)

    def filter(self, predicate: Predicate) -> "ArtifactStore":
        return ArtifactStore([artifact for artifact in self.items if predicate(artifact)])

    def list(self) -> List[ArtifactRef]:
        return list(self.items)

    def __iter__(self) -> Iterator[ArtifactRef]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def load_artifacts(path: Path, *, base_dir: Optional[Path] = None) -> ArtifactStore:
    """Load an ``artifacts.json`` listing; relative paths resolve against ``base_dir``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid artifacts file at {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise ConfigError(f"Invalid artifacts file at {path}: expected a JSON list")

    store = ArtifactStore()
    for entry in _iter_entries(payload, path):
        artifact = ArtifactRef.from_dict(entry)
        if base_dir is not None and not artifact.path.is_absolute():
            artifact = _rebase(artifact, base_dir)
        store.add(artifact)
    return store


def _iter_entries(payload: Iterable[Any], path: Path) -> Iterator[Mapping[str, Any]]:
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ConfigError(f"Invalid artifacts file at {path}: entry {index} is not an object")
        yield entry


def _rebase(artifact: ArtifactRef, base_dir: Path) -> ArtifactRef:
    return replace(artifact, path=base_dir / artifact.path)
