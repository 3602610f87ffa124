from __future__ import annotations

import json
import re
from typing import Any, Iterator

from bs4 import BeautifulSoup

from .errors import NotFoundError, ParseError

MARKER = "ytInitialData"

# Matches only the assignment prefix; the object body is cut out by
# _scan_object() so nested braces and "};" inside strings are handled.
#   var ytInitialData = {...};
#   ytInitialData = {...};
#   window["ytInitialData"] = {...};
_ASSIGNMENT_RE = re.compile(
    r"""(?:var\s+|window\[["']|)ytInitialData(?:["']\])?\s*=\s*(?=\{)"""
)


def iter_script_bodies(html: str) -> Iterator[str]:
    """Yield the text of every inline <script> element in document order."""
    soup = BeautifulSoup(html or "", "html.parser")
    for script in soup.find_all("script"):
        body = script.string
        if body is None:
            body = script.get_text()
        if body:
            yield str(body)


def find_marker_script(html: str) -> tuple[int, str]:
    """
    Return (index, body) of the first inline script that mentions ytInitialData.

    Raises NotFoundError when no script body contains the marker.
    """
    for index, body in enumerate(iter_script_bodies(html)):
        if MARKER in body:
            return index, body
    raise NotFoundError(f"Could not find a script containing {MARKER}")


def _scan_object(text: str, start: int) -> str | None:
    """Return the balanced {...} literal starting at text[start], or None."""
    if start >= len(text) or text[start] != "{":
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    return None


def parse_initial_data(script_body: str) -> dict[str, Any]:
    """
    Decode the object literal assigned to ytInitialData inside one script body.

    Raises ParseError when there is no assignment, when the literal is
    unbalanced, or when it is not valid JSON (including nesting too deep to decode).
    """
    match = _ASSIGNMENT_RE.search(script_body or "")
    if match is None:
        raise ParseError(f"Could not find the {MARKER} assignment")

    literal = _scan_object(script_body, match.end())
    if literal is None:
        raise ParseError(f"Unterminated {MARKER} object literal")

    try:
        return json.loads(literal)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"Invalid JSON in {MARKER}: {e}") from e


def locate_initial_data(html: str) -> dict[str, Any]:
    """Find and decode the ytInitialData blob embedded in channel page HTML."""
    _, body = find_marker_script(html)
    return parse_initial_data(body)
