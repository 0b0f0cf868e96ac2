"""Placeholder expansion for ``{{ .Field }}`` templates."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import TYPE_CHECKING, Dict, Optional

from .errors import TemplateError

if TYPE_CHECKING:  # pragma: no cover
    from .artifacts import ArtifactRef
    from .context import ReleaseContext


_ACTION_RE = re.compile(r"\{\{-?\s*(.*?)\s*-?\}\}", re.DOTALL)
_FIELD_RE = re.compile(r"^\.([A-Za-z_][A-Za-z0-9_]*)(?:\.([A-Za-z_][A-Za-z0-9_]*))?$")


class TemplateRenderer:
    """Expands field lookups against a release context and, optionally, one artifact."""

    def __init__(self, ctx: "ReleaseContext", artifact: Optional["ArtifactRef"] = None) -> None:
        self.ctx = ctx
        self.artifact = artifact

    def with_artifact(self, artifact: "ArtifactRef") -> "TemplateRenderer":
        return TemplateRenderer(self.ctx, artifact)

    def fields(self) -> Dict[str, str]:
        semver = self.ctx.semver
        values = {
            "ProjectName": self.ctx.config.project_name,
            "Version": self.ctx.version,
            "RawVersion": f"{semver.major}.{semver.minor}.{semver.patch}",
            "Tag": self.ctx.tag,
            "Major": str(semver.major),
            "Minor": str(semver.minor),
            "Patch": str(semver.patch),
            "Prerelease": semver.prerelease,
        }
        if self.artifact is not None:
            values.update(
                {
                    "ArtifactName": self.artifact.name,
                    "ArtifactPath": str(self.artifact.path),
                    "ArtifactExt": _extension(self.artifact.name),
                    "Os": self.artifact.goos,
                    "Arch": self.artifact.goarch,
                    "Amd64": self.artifact.goamd64,
                }
            )
        return values

    def apply(self, text: str) -> str:
        values = self.fields()

        def _substitute(match: "re.Match[str]") -> str:
            return self._evaluate(match.group(1), values, text)

        rendered = _ACTION_RE.sub(_substitute, text)
        if "{{" in _ACTION_RE.sub("", text):
            raise TemplateError(f"template: unclosed action in {text!r}")
        return rendered

    def _evaluate(self, expression: str, values: Dict[str, str], text: str) -> str:
        match = _FIELD_RE.match(expression)
        if not match:
            raise TemplateError(f"template: unsupported expression '{expression}' in {text!r}")
        name, key = match.group(1), match.group(2)
        if name == "Env":
            if key is None:
                raise TemplateError(f"template: .Env requires a variable name in {text!r}")
            if key not in self.ctx.env:
                raise TemplateError(f"template: map has no entry for key \"{key}\" in {text!r}")
            return self.ctx.env[key]
        if key is not None or name not in values:
            raise TemplateError(f"template: can't evaluate field {expression[1:]} in {text!r}")
        return values[name]


def _extension(name: str) -> str:
    for double in (".tar.gz", ".tar.xz", ".tar.zst"):
        if name.endswith(double):
            return double
    return PurePath(name).suffix
