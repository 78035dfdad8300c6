"""Turn parsed configuration trees into flat rows and CSV text."""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

__all__ = [
    "as_list",
    "extract_addresses",
    "extract_policies",
    "to_csv",
    "get_by_path",
    "rows_from_node",
    "flatten",
]

_MISSING = object()
_JOINER = " | "


def _json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else _json_text(value)


def _lookup(entry: Any, *keys: str) -> Any:
    """Return the value of the first key present in ``entry``."""
    if isinstance(entry, dict):
        for key in keys:
            if key in entry:
                return entry[key]
    return _MISSING


def _str_field(entry: Any, *keys: str) -> str:
    value = _lookup(entry, *keys)
    return value if isinstance(value, str) else ""


def _json_field(entry: Any, *keys: str) -> str:
    value = _lookup(entry, *keys)
    return "" if value is _MISSING else _json_text(value)


def _firewall_table(parsed: Any, name: str) -> dict[str, Any]:
    firewall = parsed.get("firewall") if isinstance(parsed, dict) else None
    table = firewall.get(name) if isinstance(firewall, dict) else None
    return table if isinstance(table, dict) else {}


def as_list(value: Any) -> list[str]:
    """Coerce a parsed value into a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [_text(item) for item in value]
    if isinstance(value, str):
        return [value]
    return [_json_text(value)]


def extract_addresses(parsed: Any) -> list[dict[str, str]]:
    """Rows for every entry of ``firewall address``, ordered by name."""
    rows = []
    for name, entry in sorted(_firewall_table(parsed, "address").items()):
        subnet_value = _lookup(entry, "subnet")
        if isinstance(subnet_value, list) and len(subnet_value) == 2:
            subnet = f"{_json_text(subnet_value[0])} {_json_text(subnet_value[1])}"
        elif isinstance(subnet_value, str):
            subnet = subnet_value
        else:
            subnet = ""
        rows.append(
            {
                "name": name,
                "type": _str_field(entry, "type"),
                "subnet": subnet,
                "fqdn": _str_field(entry, "fqdn"),
                "interface": _str_field(entry, "associated-interface", "interface"),
                "comment": _str_field(entry, "comment", "comments"),
            }
        )
    return rows


def extract_policies(parsed: Any) -> list[dict[str, str]]:
    """Rows for every entry of ``firewall policy``, ordered by id."""
    rows = []
    for policy_id, entry in sorted(_firewall_table(parsed, "policy").items()):

        def joined(key: str) -> str:
            value = _lookup(entry, key)
            return _JOINER.join(as_list(None if value is _MISSING else value))

        rows.append(
            {
                "id": policy_id,
                "name": _str_field(entry, "name"),
                "action": _str_field(entry, "action"),
                "srcintf": joined("srcintf"),
                "dstintf": joined("dstintf"),
                "srcaddr": joined("srcaddr"),
                "dstaddr": joined("dstaddr"),
                "service": joined("service"),
                "schedule": _str_field(entry, "schedule"),
                "nat": _json_field(entry, "nat"),
                "logtraffic": _json_field(entry, "logtraffic", "logtraffic_start"),
                "comments": _str_field(entry, "comments", "comment"),
            }
        )
    return rows


def _csv_escape(text: str) -> str:
    if any(ch in text for ch in ',\n"'):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(rows: Sequence[Mapping[str, str]], preferred: Iterable[str] | None = None) -> str:
    """Render rows as CSV; ``preferred`` columns come first, the rest sorted."""
    if not rows:
        return ""
    keys = sorted({key for row in rows for key in row})
    if preferred is not None:
        ordered = list(preferred)
        ordered.extend(key for key in keys if key not in ordered)
        keys = ordered
    lines = [",".join(keys)]
    lines.extend(",".join(_csv_escape(row.get(key, "")) for key in keys) for row in rows)
    return "\n".join(lines) + "\n"


def get_by_path(root: Any, path: str) -> Any:
    """Follow a dotted path of keys; ``None`` where the path leads nowhere."""
    if not path.strip():
        return None
    node = root
    for part in filter(None, path.split(".")):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return copy.deepcopy(node)


def rows_from_node(node: Any) -> list[dict[str, str]]:
    """Flatten a node into rows: one per child table, or one for the node."""
    if node is None:
        return []
    if isinstance(node, dict):
        if all(isinstance(child, dict) for child in node.values()):
            rows = []
            for name, child in sorted(node.items()):
                row = flatten(child)
                row["name"] = name
                rows.append(row)
            return rows
        return [flatten(node)]
    return [{"value": _json_text(node)}]


def flatten(value: Any) -> dict[str, str]:
    """Flatten nested dicts into dotted keys with string values."""
    out: dict[str, str] = {}

    def walk(prefix: str, item: Any) -> None:
        if item is None:
            out[prefix] = ""
        elif isinstance(item, bool):
            out[prefix] = "true" if item else "false"
        elif isinstance(item, str):
            out[prefix] = item
        elif isinstance(item, list):
            out[prefix] = _JOINER.join(_text(x) for x in item)
        elif isinstance(item, dict):
            for key, child in sorted(item.items()):
                walk(f"{prefix}.{key}" if prefix else key, child)
        else:
            out[prefix] = _json_text(item)

    walk("", value)
    return out