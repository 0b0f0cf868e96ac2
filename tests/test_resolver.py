from __future__ import annotations

import hashlib

import pytest

from scoop_release.errors import ChecksumError, MetadataError, TemplateError
from scoop_release.scoop.models import PublishConfig
from scoop_release.scoop.resolver import binaries, resolve_architectures


def _publish_config(ctx, **overrides) -> PublishConfig:
    config = PublishConfig.from_scoop(ctx.config.scoop)
    if "url_template" in overrides:
        config = config.with_url_template(overrides["url_template"])
    return config


def test_resolves_resource_for_amd64(make_archive, make_context, fake_client) -> None:
    archive = make_archive("myapp_windows_amd64.zip", "amd64", content=b"zip-bytes")
    ctx = make_context([archive])
    config = _publish_config(ctx, url_template="https://example.com/{{ .ArtifactName }}")

    architecture, resolved = resolve_architectures(ctx, fake_client, config, [archive])

    assert list(architecture) == ["64bit"]
    resource = architecture["64bit"]
    assert resource.url == "https://example.com/myapp_windows_amd64.zip"
    assert resource.hash == hashlib.sha256(b"zip-bytes").hexdigest()
    assert resource.bin == ["myapp.exe"]
    assert resolved.url_template == "https://example.com/{{ .ArtifactName }}"
    assert fake_client.url_template_calls == 0


def test_maps_386_and_amd64(make_archive, make_context, fake_client) -> None:
    archives = [
        make_archive("myapp_windows_amd64.zip", "amd64"),
        make_archive("myapp_windows_386.zip", "386"),
    ]
    ctx = make_context(archives)

    architecture, _ = resolve_architectures(ctx, fake_client, _publish_config(ctx), archives)

    assert sorted(architecture) == ["32bit", "64bit"]
    assert architecture["32bit"].url.endswith("/myapp_windows_386.zip")


def test_default_url_template_fetched_once(make_archive, make_context, fake_client) -> None:
    archives = [
        make_archive("myapp_windows_amd64.zip", "amd64"),
        make_archive("myapp_windows_386.zip", "386"),
        make_archive("myapp_windows_386_extra.zip", "386"),
    ]
    ctx = make_context(archives)
    config = _publish_config(ctx)
    assert config.url_template == ""

    architecture, resolved = resolve_architectures(ctx, fake_client, config, archives)

    assert fake_client.url_template_calls == 1
    assert resolved.url_template == fake_client.url_template
    assert architecture["64bit"].url == "https://dl.example.com/v1.0.0/myapp_windows_amd64.zip"
    # The caller's config and the shared scoop config stay untouched.
    assert config.url_template == ""
    assert ctx.config.scoop.url_template == ""


def test_ignores_unknown_architectures_and_other_os(make_archive, make_context, fake_client) -> None:
    archives = [
        make_archive("myapp_windows_arm64.zip", "arm64"),
        make_archive("myapp_linux_amd64.tar.gz", "amd64", goos="linux"),
        make_archive("myapp_windows_amd64.zip", "amd64"),
    ]
    ctx = make_context(archives)

    architecture, _ = resolve_architectures(ctx, fake_client, _publish_config(ctx), archives)

    assert list(architecture) == ["64bit"]
    assert architecture["64bit"].url.endswith("myapp_windows_amd64.zip")


def test_binaries_join_wrap_dir(make_archive) -> None:
    archive = make_archive(
        "myapp_windows_amd64.zip",
        "amd64",
        binaries=("myapp.exe", "helper.exe"),
        wrap_dir="myapp_1.0.0_windows_amd64",
    )

    assert binaries(archive) == [
        "myapp_1.0.0_windows_amd64/myapp.exe",
        "myapp_1.0.0_windows_amd64/helper.exe",
    ]


def test_missing_build_metadata_raises(make_archive, make_context, fake_client) -> None:
    archive = make_archive("myapp_windows_386.zip", "386", with_contents=False)
    ctx = make_context([archive])

    with pytest.raises(MetadataError) as excinfo:
        resolve_architectures(ctx, fake_client, _publish_config(ctx), [archive])
    assert "32bit" in str(excinfo.value)
    assert "myapp_windows_386.zip" in str(excinfo.value)


def test_unreadable_archive_raises_checksum_error(make_archive, make_context, fake_client) -> None:
    archive = make_archive("myapp_windows_amd64.zip", "amd64")
    archive.path.unlink()
    ctx = make_context([archive])

    with pytest.raises(ChecksumError) as excinfo:
        resolve_architectures(ctx, fake_client, _publish_config(ctx), [archive])
    assert "64bit" in str(excinfo.value)


def test_bad_url_template_raises(make_archive, make_context, fake_client) -> None:
    archive = make_archive("myapp_windows_amd64.zip", "amd64")
    ctx = make_context([archive])
    config = _publish_config(ctx, url_template="https://example.com/{{ .Nope }}")

    with pytest.raises(TemplateError) as excinfo:
        resolve_architectures(ctx, fake_client, config, [archive])
    assert "64bit" in str(excinfo.value)
