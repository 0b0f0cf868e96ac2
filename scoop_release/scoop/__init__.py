"""Scoop manifest generation and publishing."""

from .guard import check_skip
from .manifest import build_manifest, load_manifest, render_manifest
from .models import PublishConfig, PublishResult, RunResult
from .pipe import DEFAULT_COMMIT_MESSAGE_TEMPLATE, ScoopPipe
from .publisher import publish_manifest
from .resolver import binaries, resolve_architectures
from .selector import select_windows_archives

__all__ = [
    "DEFAULT_COMMIT_MESSAGE_TEMPLATE",
    "PublishConfig",
    "PublishResult",
    "RunResult",
    "ScoopPipe",
    "binaries",
    "build_manifest",
    "check_skip",
    "load_manifest",
    "publish_manifest",
    "render_manifest",
    "resolve_architectures",
    "select_windows_archives",
]
