from __future__ import annotations

import argparse
import logging
import sys

from feedio.core.errors import SchemaError, VersionMismatch
from feedio.io.config import FeedSettings
from feedio.io.document import dump_document
from feedio.io.errors import FeedError
from feedio.io.feed import Feed

logger = logging.getLogger(__name__)


def _parser(prog: str, description: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=f"feedio {prog}", description=description)
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="TOML settings file (default: ./feedio.toml, then [tool.feedio] in ./pyproject.toml).",
    )
    return p


def _setup(args: argparse.Namespace) -> FeedSettings:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return FeedSettings.load(args.config)


def _cmd_inspect(argv: list[str]) -> int:
    p = _parser("inspect", "Print the row count of every non-empty table.")
    p.add_argument("path", type=str, help="Feed directory or archive.")
    args = p.parse_args(argv)

    feed = Feed(args.path, settings=_setup(args))
    for name, table in feed.tables.items():
        if not len(table):
            continue
        report = feed.import_reports.get(name)
        dropped = f" (dropped {report.rows_dropped})" if report and report.rows_dropped else ""
        print(f"{name}\t{len(table)}{dropped}")
    return 0


def _cmd_convert(argv: list[str]) -> int:
    p = _parser("convert", "Load a feed and save it elsewhere (directory <-> archive).")
    p.add_argument("src", type=str, help="Source directory or archive.")
    p.add_argument("dest", type=str, help="Destination directory or archive.")
    args = p.parse_args(argv)

    feed = Feed(args.src, settings=_setup(args))
    written = feed.save(args.dest)
    print(f"[INFO] Wrote {len(written)} entries to {args.dest}")
    return 0


def _cmd_schema(argv: list[str]) -> int:
    p = _parser("schema", "Print the schema document of a feed as JSON.")
    p.add_argument("path", type=str, nargs="?", default=None, help="Feed directory or archive.")
    args = p.parse_args(argv)

    feed = Feed(args.path, settings=_setup(args))
    sys.stdout.write(dump_document(feed.schema_document()).decode("utf-8"))
    return 0


_COMMANDS = {
    "inspect": _cmd_inspect,
    "convert": _cmd_convert,
    "schema": _cmd_schema,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="feedio", description="Delimited-text feed utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("inspect", help="Row counts per table.")
    sub.add_parser("convert", help="Copy a feed between directory and archive form.")
    sub.add_parser("schema", help="Print the schema document.")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ("-h", "--help"):
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        raise SystemExit(2)
    try:
        code = handler(rest)
    except (FeedError, SchemaError, VersionMismatch) as exc:
        logger.error(f"{cmd} failed: {exc}")
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
