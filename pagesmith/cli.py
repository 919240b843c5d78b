"""
cli.py

Responsibility: CLI entrypoint for inspecting a site source tree.

Commands:
- `scan`: scan a source root and dump every item, layout and include as JSON
- `render`: render one content item (blocks, then its layout chain) to stdout

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Scanning and attributes: `scanner.py`, `attributes.py`
- Rendering: `renderizer.py`
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pagesmith.config import DEFAULT_TEXT_EXTENSIONS, SourceConfig, resolve_config
from pagesmith.errors import PagesmithError
from pagesmith.item import SNAPSHOT_RAW, Item
from pagesmith.renderizer import Renderizer
from pagesmith.scanner import ContentSourceScanner, ScanSession


class CLIError(RuntimeError):
    pass


def _build_config(args: argparse.Namespace) -> SourceConfig:
    return resolve_config(
        {
            "source_root": args.source_root,
            "text_extensions": args.text_ext or list(DEFAULT_TEXT_EXTENSIONS),
            "include": args.include,
            "exclude": args.exclude,
            "attribute_syntax": args.attribute_syntax,
            "avoid_renderizer_path": args.avoid_path,
            "avoid_renderizer_extension": args.avoid_ext,
            "theme_name": args.theme,
        }
    )


def _describe(item: Item) -> dict[str, Any]:
    return {
        "id": item.id,
        "type": item.type.value,
        "binary": item.is_binary,
        "paths": {"relative": item.get_path(), "source": item.get_path("source") or None},
        "attributes": dict(item.attributes),
    }


def _dump_session(session: ScanSession) -> dict[str, Any]:
    return {
        "items": [_describe(item) for item in session.items.values()],
        "layouts": [_describe(item) for item in session.layouts.values()],
        "includes": [_describe(item) for item in session.includes.values()],
    }


def scan_cmd(args: argparse.Namespace) -> int:
    session = ContentSourceScanner(_build_config(args)).scan()
    json.dump(_dump_session(session), sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")
    return 0


def render_cmd(args: argparse.Namespace) -> int:
    session = ContentSourceScanner(_build_config(args)).scan()
    item = session.items.get(args.item_id)
    if item is None:
        raise CLIError(f"Content item not found: {args.item_id}")
    if item.is_binary:
        raise CLIError(f"Content item is binary: {args.item_id}")

    renderizer = Renderizer(strict_undefined=bool(args.strict))
    renderizer.add_scan_result(session)

    attributes = {"site": {}, "page": dict(item.attributes)}
    content = item.get_content(SNAPSHOT_RAW)
    if not item.attributes.get("avoid_renderizer"):
        content = renderizer.render_blocks(item.id, content, attributes)

    layout = item.attributes.get("layout")
    if item.attributes.get("avoid_renderizer") and not layout:
        sys.stdout.write(content)
        return 0

    sys.stdout.write(renderizer.render_page(item.id, content, layout, attributes))
    return 0


def _add_source_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("source_root", help="Site source root (contains content/, layouts/, includes/)")
    p.add_argument("--theme", default="", help="Theme name under themes/<name>/src")
    p.add_argument(
        "--text-ext",
        action="append",
        default=None,
        help="Extension treated as text (repeatable; default: common text extensions)",
    )
    p.add_argument("--attribute-syntax", choices=["yaml", "json"], default="yaml", help="Header/sidecar syntax")
    p.add_argument("--include", action="append", default=[], help="Extra content file or directory (repeatable)")
    p.add_argument("--exclude", action="append", default=[], help="Exclude content paths containing this (repeatable)")
    p.add_argument("--avoid-path", action="append", default=[], help="Content path that is never rendered (repeatable)")
    p.add_argument("--avoid-ext", action="append", default=[], help="Extension that is never rendered (repeatable)")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pagesmith", description="Inspect and render a static site source tree")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("scan", help="Scan the source tree and print items, layouts and includes as JSON")
    _add_source_arguments(s)
    s.set_defaults(func=scan_cmd)

    r = sub.add_parser("render", help="Render one content item with its layout chain")
    _add_source_arguments(r)
    r.add_argument("item_id", help="Content item id, e.g. posts/2024-01-05-hello.md")
    r.add_argument("--strict", action="store_true", help="Fail on undefined template variables")
    r.set_defaults(func=render_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except (PagesmithError, CLIError) as e:
        parser.exit(1, f"error: {e}\n")


if __name__ == "__main__":
    raise SystemExit(main())
