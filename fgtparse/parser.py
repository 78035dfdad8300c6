"""Parser for FortiGate configuration text into nested dictionaries."""

from __future__ import annotations

from typing import Any

__all__ = ["ParseError", "tokenize", "parse_forti"]


class ParseError(ValueError):
    """Raised when configuration text cannot be placed into the tree."""


_QUOTES = "\"'"


def tokenize(line: str) -> list[str]:
    """Split one configuration line into words.

    Single and double quotes group words, a backslash escapes the next
    character, and an unquoted ``#`` ends the line.
    """
    tokens: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    escaped = False
    for ch in line:
        if quote is None and ch == "#":
            break
        if escaped:
            buf.append(ch)
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if quote is not None:
            if ch == quote:
                quote = None
            else:
                buf.append(ch)
            continue
        if ch in _QUOTES:
            quote = ch
            continue
        if ch.isspace():
            if buf:
                tokens.append("".join(buf))
                buf = []
            continue
        buf.append(ch)
    if escaped:
        buf.insert(0, "\\")
    if buf:
        tokens.append("".join(buf))
    return tokens


def _ensure_path(root: dict[str, Any], parts: list[str]) -> None:
    node: Any = root
    for part in parts:
        if not isinstance(node, dict):
            raise ParseError(f"cannot open section {' '.join(parts)!r}: {part!r} lies under a value")
        node = node.setdefault(part, {})


def _table(root: dict[str, Any], parts: list[str]) -> dict[str, Any]:
    node: Any = root
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            raise ParseError(f"section {' '.join(parts)!r} does not exist")
        node = node[part]
    if not isinstance(node, dict):
        raise ParseError(f"section {' '.join(parts)!r} is not a table")
    return node


def parse_forti(text: str) -> dict[str, Any]:
    """Parse FortiGate configuration text into a tree of dicts, lists and strings."""
    root: dict[str, Any] = {}
    stack: list[str] = []
    current: str | None = None

    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        tokens = tokenize(line)
        if not tokens:
            continue
        command = tokens[0].lower()

        if command == "config":
            path = tokens[1:]
            _ensure_path(root, path)
            stack = path
            current = None
        elif command == "edit":
            if not stack:
                continue
            name = tokens[1] if len(tokens) > 1 else ""
            _table(root, stack).setdefault(name, {})
            current = name
        elif command == "next":
            current = None
        elif command == "end":
            if stack:
                stack.pop()
            current = None
        elif command in ("set", "append", "unset"):
            if len(tokens) < 2:
                raise ParseError(f"{command!r} needs a key: {line!r}")
            key, values = tokens[1], tokens[2:]
            target: Any = _table(root, stack)
            if current is not None:
                target = target.get(current)
                if not isinstance(target, dict):
                    raise ParseError(f"entry {current!r} is not a table")
            if command == "unset":
                target[key] = None
            elif command == "set":
                target[key] = values[0] if len(values) == 1 else list(values)
            else:
                existing = target.get(key)
                if isinstance(existing, list):
                    existing.extend(values)
                elif isinstance(existing, str):
                    target[key] = [existing, *values]
                else:
                    target[key] = list(values)
    return root