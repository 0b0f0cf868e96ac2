"""Schema definitions for scoop manifests."""

from .manifest import Manifest, Resource

__all__ = [
    "Manifest",
    "Resource",
]
