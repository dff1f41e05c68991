from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .binder import bind_ref_context
from .config import ConfigValidationError, Settings, load_settings
from .models import NotFound
from .ref_extractor import extract_ref
from .repository import GitRepository, Repository, RepositoryError, SnapshotRepository

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _load_settings(config_path: str | None) -> Settings:
    if not config_path:
        return Settings()
    try:
        return load_settings(config_path)
    except ConfigValidationError as e:
        raise ValueError(f"Invalid config file: {e}") from e


def _open_repository(args: argparse.Namespace) -> Optional[Repository]:
    if args.repo:
        return GitRepository(args.repo)
    if args.snapshot:
        return SnapshotRepository.from_file(args.snapshot)
    return None


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def _write_output(payload: Dict[str, Any], *, out_path: str | None) -> None:
    text = json.dumps(payload, indent=2)
    if out_path:
        Path(out_path).write_text(text, encoding="utf-8")
    else:
        print(text)


def _sha_length(args: argparse.Namespace, settings: Settings) -> int:
    return args.sha_length if args.sha_length is not None else settings.sha_length


def cmd_extract(args: argparse.Namespace) -> int:
    settings = _load_settings(args.config)
    repo = _open_repository(args)

    candidates: List[str] = list(args.ref or [])
    if repo is not None:
        candidates = repo.ref_names() + candidates

    pair = extract_ref(
        args.id,
        candidates,
        repo is not None or bool(args.ref),
        sha_length=_sha_length(args, settings),
    )
    _write_output({"ref": pair.ref, "path": pair.path}, out_path=args.out)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    settings = _load_settings(args.config)
    repo = _open_repository(args)

    result = bind_ref_context(args.id, repo, sha_length=_sha_length(args, settings))
    _write_output(result.to_dict(), out_path=args.out)
    return 2 if isinstance(result, NotFound) else 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("id", help="Tree-ish identifier, e.g. `issues/1234/app/models/project.rb`.")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--repo", default=None, help="Path to a git work tree.")
    src.add_argument("--snapshot", default=None, help="Path to a YAML/JSON repository snapshot.")
    p.add_argument("--config", default=None, help="Path to a settings YAML/JSON file (optional).")
    p.add_argument("--sha-length", type=_positive_int, default=None, help="Length of a full commit id (default from settings: 40).")
    p.add_argument("--out", default=None, help="Write output to a file instead of stdout.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treeish", description="Split `ref/path` identifiers into a git ref and a path.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level for diagnostics written to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    e = sub.add_parser("extract", help="Split an identifier into ref and path.")
    _add_common(e)
    e.add_argument("--ref", action="append", default=None, help="Extra known ref name (repeatable).")
    e.set_defaults(func=cmd_extract)

    s = sub.add_parser("show", help="Resolve an identifier to its commit and tree.")
    _add_common(s)
    s.set_defaults(func=cmd_show)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        return int(args.func(args))
    except (RepositoryError, ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
