from __future__ import annotations

import json

from scoop_release.schemas.manifest import Manifest, Resource
from scoop_release.scoop.manifest import build_manifest, load_manifest, render_manifest


def _manifest(**overrides) -> Manifest:
    payload = {
        "version": "1.0.0",
        "architecture": {
            "64bit": Resource(
                url="https://example.com/myapp_windows_amd64.zip",
                bin=["myapp.exe"],
                hash="abc123",
            ),
        },
        "homepage": "https://example.com",
        "license": "MIT",
    }
    payload.update(overrides)
    return Manifest(**payload)


def test_render_matches_expected_document() -> None:
    expected = """{
    "version": "1.0.0",
    "architecture": {
        "64bit": {
            "url": "https://example.com/myapp_windows_amd64.zip",
            "bin": [
                "myapp.exe"
            ],
            "hash": "abc123"
        }
    },
    "homepage": "https://example.com",
    "license": "MIT"
}"""

    assert render_manifest(_manifest()).decode("utf-8") == expected


def test_render_is_deterministic() -> None:
    first = _manifest(
        architecture={
            "64bit": Resource(url="https://example.com/64.zip", bin=["a.exe"], hash="64"),
            "32bit": Resource(url="https://example.com/32.zip", bin=["a.exe"], hash="32"),
        }
    )
    second = _manifest(
        architecture={
            "32bit": Resource(url="https://example.com/32.zip", bin=["a.exe"], hash="32"),
            "64bit": Resource(url="https://example.com/64.zip", bin=["a.exe"], hash="64"),
        }
    )

    assert render_manifest(first) == render_manifest(second)
    assert list(json.loads(render_manifest(first))["architecture"]) == ["32bit", "64bit"]


def test_render_omits_empty_optional_fields() -> None:
    manifest = _manifest(homepage="", license=None, description="", persist=[], pre_install=[], post_install=[])

    document = json.loads(render_manifest(manifest))

    assert list(document) == ["version", "architecture"]


def test_render_keeps_field_order_with_all_fields() -> None:
    manifest = _manifest(
        description="My app",
        persist=["data", "config.toml"],
        pre_install=["Write-Host 'pre'"],
        post_install=["Write-Host 'post'"],
    )

    document = json.loads(render_manifest(manifest))

    assert list(document) == [
        "version",
        "architecture",
        "homepage",
        "license",
        "description",
        "persist",
        "pre_install",
        "post_install",
    ]
    assert list(document["architecture"]["64bit"]) == ["url", "bin", "hash"]


def test_round_trip() -> None:
    manifest = _manifest(
        description="Ünïcode app \"quoted\" <tag>",
        persist=["data"],
        post_install=["echo done"],
    )

    content = render_manifest(manifest)

    assert load_manifest(content) == manifest
    assert "Ünïcode".encode("utf-8") in content


def test_build_manifest_from_config(make_context, make_config) -> None:
    config = make_config(scoop={"persist": ["data"], "pre_install": ["echo pre"]})
    ctx = make_context(config=config, tag="v2.1.0")
    resource = Resource(url="https://example.com/a.zip", bin=["a.exe"], hash="ff")

    manifest = build_manifest(ctx, ctx.config.scoop, {"64bit": resource})

    assert manifest.version == "2.1.0"
    assert manifest.architecture == {"64bit": resource}
    assert manifest.homepage == "https://example.com"
    assert manifest.license == "MIT"
    assert manifest.description == "My app"
    assert manifest.persist == ["data"]
    assert manifest.pre_install == ["echo pre"]
    assert manifest.post_install == []
