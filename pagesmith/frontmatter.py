"""
frontmatter.py

Responsibility: parse structured attribute data, either from a header block at
the top of a text file or from the whole body of a sidecar `.meta` file.

Rules:
- A header starts at offset 0 with a `---` line and ends at the next `---` line.
- A missing or unterminated header is not an error: the text is all body.
- Empty documents parse to an empty mapping.
- Anything that is not a mapping at the top level is rejected.
"""

from __future__ import annotations

import json
import re
from typing import Any

import yaml

from pagesmith.errors import AttributeParseError

SYNTAX_YAML = "yaml"
SYNTAX_JSON = "json"
SYNTAXES = (SYNTAX_YAML, SYNTAX_JSON)

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<header>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class AttributeParser:
    def __init__(self, syntax: str = SYNTAX_YAML) -> None:
        if syntax not in SYNTAXES:
            raise ValueError(f"Unsupported attribute syntax: {syntax!r}")
        self.syntax = syntax

    def _load(self, text: str, item_id: str) -> Any:
        if not text.strip():
            return {}
        try:
            if self.syntax == SYNTAX_JSON:
                return json.loads(text)
            return yaml.safe_load(text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise AttributeParseError(f"Invalid {self.syntax} attributes: {e}", None, item_id) from e

    def parse_string(self, text: str, item_id: str = "") -> dict[str, Any]:
        """Parse a whole document (a sidecar body) into an attribute mapping."""
        data = self._load(text, item_id)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise AttributeParseError(
                f"Attributes must be a mapping/object at the top level, got {type(data).__name__}.",
                None,
                item_id,
            )
        return data

    def split_frontmatter(self, text: str, item_id: str = "") -> tuple[dict[str, Any], str]:
        """
        Split `text` into (attributes, body).

        Returns ({}, text) when the text does not open with a closed header block.
        """
        match = _FRONTMATTER_RE.match(text)
        if match is None:
            return {}, text
        attributes = self.parse_string(match.group("header"), item_id)
        return attributes, text[match.end() :]
