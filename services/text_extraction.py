"""Best-effort recovery of structured data from free-form model output."""
import json
import re
from typing import Any

_CLOSERS = {"{": "}", "[": "]"}
_NUMBER_PREFIX = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


def _balanced_end(text: str, start: int) -> int | None:
    """Index of the bracket closing ``text[start]``, or None if it never closes."""
    stack = []
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in "}]":
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return index
    return None


def extract_json(text: str, openers: str = "{[") -> Any | None:
    """Return the first balanced JSON object/array in ``text`` that parses.

    Only candidates starting with one of ``openers`` are considered, so
    ``openers="["`` restricts the search to arrays.
    """
    if not text:
        return None
    for start, char in enumerate(text):
        if char not in openers:
            continue
        end = _balanced_end(text, start)
        if end is None:
            continue
        try:
            return json.loads(text[start:end + 1])
        except ValueError:
            continue
    return None


def parse_numbered_lines(text: str, limit: int | None = None) -> list[str]:
    lines = [_NUMBER_PREFIX.sub("", line).strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    return lines[:limit] if limit is not None else lines


def parse_pipe_pairs(text: str, limit: int | None = None) -> list[tuple[str, str]]:
    pairs = []
    for line in text.splitlines():
        if "|" not in line:
            continue
        left, right = (part.strip() for part in line.split("|", 2)[:2])
        left = _NUMBER_PREFIX.sub("", left).strip()
        if left and right:
            pairs.append((left, right))
    return pairs[:limit] if limit is not None else pairs
