"""Pydantic models describing a scoop.sh app manifest.

See https://github.com/ScoopInstaller/Scoop/wiki/App-Manifests for the format.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


_OMIT_WHEN_EMPTY = ("homepage", "license", "description", "persist", "pre_install", "post_install")


class Resource(BaseModel):
    """Download location, binaries and checksum for one architecture."""

    url: str = Field(..., description="URL to the archive.")
    bin: List[str] = Field(default_factory=list, description="Binaries inside the archive.")
    hash: str = Field(..., description="SHA-256 checksum of the archive.")

    model_config = ConfigDict(extra="forbid", frozen=True)


class Manifest(BaseModel):
    version: str
    architecture: Dict[str, Resource] = Field(default_factory=dict)
    homepage: Optional[str] = None
    license: Optional[str] = Field(default=None, description="SPDX identifier or URL of the license.")
    description: Optional[str] = None
    persist: List[str] = Field(default_factory=list, description="Paths kept between updates.")
    pre_install: List[str] = Field(default_factory=list)
    post_install: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("homepage", "license", "description", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return value or None

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON document with sorted architectures and empty fields dropped."""

        payload = self.model_dump(mode="json")
        architecture = payload["architecture"]
        payload["architecture"] = {key: architecture[key] for key in sorted(architecture)}
        for name in _OMIT_WHEN_EMPTY:
            if not payload.get(name):
                payload.pop(name, None)
        return payload
