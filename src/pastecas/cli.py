"""Command-line interface for a file-backed pastecas store."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, TextIO

from pastecas.blobs import ShortIdPolicy, put_file
from pastecas.config import StoreSettings, open_store, parse_log_level
from pastecas.errors import AmbiguousShortIdError, BlobNotFoundError, InvalidIdError, StorageFaultError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pastecas.blobs import BlobStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_AMBIGUOUS = 3
EXIT_STORAGE_FAULT = 4


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pastecas", description="Content-addressed text storage.")
    parser.add_argument("--root", type=Path, default=None, help="Blob directory (default: $PASTECAS_ROOT or ./pastes).")
    parser.add_argument("--strict", action="store_true", help="Fail on ambiguous short ids instead of picking one.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $PASTECAS_LOG_LEVEL or WARNING).")
    commands = parser.add_subparsers(dest="command", required=True)

    put = commands.add_parser("put", help="Store a file or stdin and print its ids.")
    put.add_argument("path", nargs="?", type=Path, default=None, help="File to store (default: stdin).")

    get = commands.add_parser("get", help="Print the blob stored under a full id.")
    get.add_argument("full_id")

    raw = commands.add_parser("raw", help="Write the exact stored bytes for a full id.")
    raw.add_argument("full_id")

    short = commands.add_parser("short", help="Resolve a short id to its full id.")
    short.add_argument("short_id")
    short.add_argument("--content", action="store_true", help="Print the blob instead of its full id.")
    return parser


def _settings_from_args(args: argparse.Namespace) -> StoreSettings:
    settings = StoreSettings.from_env()
    overrides: dict[str, object] = {}
    if args.root is not None:
        overrides["root"] = args.root
    if args.strict:
        overrides["short_id_policy"] = ShortIdPolicy.STRICT
    if args.log_level is not None:
        overrides["log_level"] = parse_log_level(args.log_level)
    return dataclasses.replace(settings, **overrides)


def _run(args: argparse.Namespace, store: BlobStore, stdin: BinaryIO, stdout: BinaryIO, out: TextIO) -> int:
    if args.command == "put":
        if args.path is None:
            addr = store.put_address(stdin.read())
        else:
            addr = put_file(store, args.path)
        out.write(f"{addr.full_id}\n{addr.short_id}\n")
        return EXIT_OK

    if args.command in ("get", "raw"):
        stdout.write(store.require(args.full_id))
        return EXIT_OK

    full_id = store.resolve_short_id(args.short_id)
    if full_id is None:
        raise BlobNotFoundError(args.short_id)
    if args.content:
        stdout.write(store.require(full_id))
    else:
        out.write(f"{full_id}\n")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        store = open_store(settings)
        return _run(args, store, sys.stdin.buffer, sys.stdout.buffer, sys.stdout)
    except InvalidIdError as exc:
        sys.stderr.write(f"{exc}\n")
        return EXIT_INVALID
    except BlobNotFoundError as exc:
        sys.stderr.write(f"{exc}\n")
        return EXIT_NOT_FOUND
    except AmbiguousShortIdError as exc:
        sys.stderr.write(f"{exc}\n")
        for match in exc.matches:
            sys.stderr.write(f"  {match}\n")
        return EXIT_AMBIGUOUS
    except StorageFaultError as exc:
        logger.error("%s", exc, exc_info=exc.__cause__)
        return EXIT_STORAGE_FAULT
    except OSError as exc:
        sys.stderr.write(f"Cannot read input: {exc}\n")
        return EXIT_INVALID
    finally:
        sys.stdout.flush()


if __name__ == "__main__":
    raise SystemExit(main())
