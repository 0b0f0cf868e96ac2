"""Command-line entry point for scoop manifest generation and publishing."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from .artifacts import load_artifacts
from .client import Client, new_client
from .config import load_config
from .context import ReleaseContext
from .errors import ScoopReleaseError
from .scoop import PublishResult, RunResult, ScoopPipe


logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None, *, client: Optional[Client] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    workspace = _resolve_workspace(args.workspace_root)
    load_dotenv(workspace / ".env")

    try:
        return _dispatch(args, workspace, client)
    except ScoopReleaseError as exc:
        logger.error("%s", exc)
        _print_json({"status": "failed", "error": str(exc), "error_type": type(exc).__name__})
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scoop-release", description="Scoop manifest generation and publishing.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Generate the scoop manifest into the dist directory.")
    _add_common_arguments(run)
    run.add_argument("--artifacts", help="artifacts.json listing (defaults to <dist>/artifacts.json).")

    publish = subparsers.add_parser("publish", help="Commit a generated manifest to the bucket.")
    _add_common_arguments(publish)
    publish.add_argument("--manifest", help="Manifest path (defaults to <dist>/<name>.json).")

    release = subparsers.add_parser("release", help="Run and publish in one go.")
    _add_common_arguments(release)
    release.add_argument("--artifacts", help="artifacts.json listing (defaults to <dist>/artifacts.json).")

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=".goreleaser.yaml")
    parser.add_argument("--tag", required=True)
    parser.add_argument("--dist", help="Override the configured dist directory.")
    parser.add_argument("--workspace-root")


def _dispatch(args: argparse.Namespace, workspace: Path, client: Optional[Client]) -> int:
    config = load_config(_resolve_path(args.config, workspace))
    if args.dist:
        config.dist = args.dist
    ctx = ReleaseContext.from_tag(config, args.tag, workspace_root=workspace)

    pipe = ScoopPipe()
    pipe.default(ctx)
    if pipe.skip(ctx):
        _print_json({"status": "skipped", "reason": "scoop.bucket.name is not set"})
        return 0

    cl = client or new_client(ctx)

    if args.command == "publish":
        manifest_path = _resolve_path(args.manifest, workspace) if args.manifest else None
        run = pipe.load_run(ctx, manifest_path)
        _print_json(_publish_payload(pipe.publish(ctx, cl, run)))
        return 0

    artifacts_path = _resolve_path(args.artifacts, workspace) if args.artifacts else ctx.dist / "artifacts.json"
    ctx.artifacts = load_artifacts(artifacts_path, base_dir=workspace)
    run = pipe.run(ctx, cl)

    if args.command == "run":
        _print_json(_run_payload(run))
        return 0

    payload = _run_payload(run)
    payload["publish"] = _publish_payload(pipe.publish(ctx, cl, run))
    _print_json(payload)
    return 0


def _run_payload(run: RunResult) -> dict[str, object]:
    return {
        "status": "ok",
        "manifest_path": str(run.manifest_path),
        "manifest": run.manifest.to_document(),
        "url_template": run.publish_config.url_template,
    }


def _publish_payload(result: PublishResult) -> dict[str, object]:
    return {
        "status": result.status,
        "reason": result.reason,
        "repo": result.repo,
        "path": result.path,
        "commit_message": result.commit_message,
        "logs": result.logs,
    }


def _resolve_workspace(value: Optional[str]) -> Path:
    return Path(value).resolve() if value else Path.cwd()


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
