"""Command-line front end: parse, search, render and export configurations."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from .exporters import (
    extract_addresses,
    extract_policies,
    get_by_path,
    rows_from_node,
    to_csv,
)
from .parser import ParseError, parse_forti

__all__ = ["filter_deep", "render_output", "main"]

ADDRESS_COLUMNS = ("name", "type", "subnet", "fqdn", "interface", "comment")
POLICY_COLUMNS = (
    "id",
    "name",
    "action",
    "srcintf",
    "dstintf",
    "srcaddr",
    "dstaddr",
    "service",
    "schedule",
    "nat",
    "logtraffic",
    "comments",
)


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def filter_deep(value: Any, query: str) -> Any:
    """Keep only the parts of ``value`` whose keys or values contain ``query``.

    Matching ignores case. Returns ``None`` when nothing matches.
    """
    needle = query.lower()

    def walk(node: Any) -> Any:
        if isinstance(node, dict):
            kept = {}
            for key, child in node.items():
                found = walk(child)
                if found is not None or needle in key.lower():
                    kept[key] = child if found is None else found
            return kept or None
        if isinstance(node, list):
            kept_items = [found for found in map(walk, node) if found is not None]
            return kept_items or None
        return node if needle in _scalar_text(node).lower() else None

    return walk(value)


def render_output(parsed: Any, query: str = "", yaml: bool = False) -> str:
    """Render the (optionally filtered) tree as pretty JSON or YAML."""
    if parsed is None:
        return ""
    shown = parsed if not query.strip() else filter_deep(parsed, query)
    if yaml:
        return _dump_yaml(shown)
    return json.dumps(shown, indent=2, sort_keys=True, ensure_ascii=False)


def _dump_yaml(value: Any) -> str:
    return yaml.safe_dump(value, sort_keys=True, allow_unicode=True, default_flow_style=False)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fgtparse",
        description="Parse a FortiGate configuration and print it as JSON or YAML, or export CSV.",
    )
    parser.add_argument("input", nargs="?", default="-", help="configuration file, '-' for stdin")
    parser.add_argument("-s", "--search", dest="search", default="", help="keep only matching parts")
    parser.add_argument("--yaml", action="store_true", help="print YAML instead of JSON")
    parser.add_argument(
        "--export",
        choices=("addresses", "policies", "generic"),
        help="write CSV instead of the tree",
    )
    parser.add_argument("--path", default="", help="dotted path used by the generic export")
    parser.add_argument("-o", "--output", help="write to this file instead of stdout")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _export(parsed: Any, kind: str, path: str) -> tuple[int, str]:
    if kind == "addresses":
        rows = extract_addresses(parsed)
        return len(rows), to_csv(rows, ADDRESS_COLUMNS)
    if kind == "policies":
        rows = extract_policies(parsed)
        return len(rows), to_csv(rows, POLICY_COLUMNS)
    rows = rows_from_node(get_by_path(parsed, path))
    return len(rows), to_csv(rows, None)


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text if not text or text.endswith("\n") else text + "\n")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        text = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    try:
        parsed = parse_forti(text)
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.export:
            count, csv_text = _export(parsed, args.export, args.path)
            _emit(csv_text, args.output)
            print(f"Exported {count}", file=sys.stderr)
        else:
            _emit(render_output(parsed, args.search, args.yaml), args.output)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())