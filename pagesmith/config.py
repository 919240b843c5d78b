"""
config.py

Responsibility: validate the parameters the scanner consumes and freeze them
into a typed `SourceConfig`.

Loading these values from a site configuration file is the caller's job; this
module only checks what it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pagesmith.errors import AttributeValueError, MissingAttributeError
from pagesmith.frontmatter import SYNTAX_YAML, SYNTAXES

DEFAULT_TEXT_EXTENSIONS: tuple[str, ...] = (
    "htm",
    "html",
    "twig",
    "j2",
    "jinja",
    "js",
    "less",
    "markdown",
    "md",
    "mkd",
    "mkdn",
    "coffee",
    "css",
    "erb",
    "haml",
    "handlebars",
    "hb",
    "ms",
    "mustache",
    "rss",
    "sass",
    "scss",
    "slim",
    "txt",
    "xhtml",
    "xml",
)

_LIST_KEYS = ("include", "exclude", "text_extensions", "avoid_renderizer_path", "avoid_renderizer_extension")
_STRING_KEYS = ("attribute_syntax", "theme_name")
_REQUIRED_KEYS = ("source_root", "text_extensions")


@dataclass(frozen=True)
class SourceConfig:
    source_root: Path
    text_extensions: tuple[str, ...]
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    attribute_syntax: str = SYNTAX_YAML
    avoid_renderizer_path: tuple[str, ...] = ()
    avoid_renderizer_extension: tuple[str, ...] = ()
    theme_name: str = ""

    def sub_path(self, name: str) -> Path:
        return self.source_root / name

    def theme_sub_path(self, name: str) -> Path | None:
        if not self.theme_name:
            return None
        return self.source_root / "themes" / self.theme_name / "src" / name


def _as_str_tuple(key: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise AttributeValueError("Invalid value. Expected a list.", key)
    out = []
    for v in value:
        if not isinstance(v, str):
            raise AttributeValueError("Invalid value. Expected a list of strings.", key)
        out.append(v)
    return tuple(out)


def resolve_config(params: Mapping[str, Any]) -> SourceConfig:
    """
    Validate raw parameters and build a `SourceConfig`.

    Required keys:
    - source_root: str | Path
    - text_extensions: list[str]

    Optional keys:
    - include, exclude, avoid_renderizer_path, avoid_renderizer_extension: list[str]
    - attribute_syntax: "yaml" (default) or "json"
    - theme_name: str (default "")
    """
    unknown = sorted(set(params) - {"source_root", *_LIST_KEYS, *_STRING_KEYS})
    if unknown:
        raise AttributeValueError(f"Unknown configuration keys: {', '.join(unknown)}.", unknown[0])

    for key in _REQUIRED_KEYS:
        if params.get(key) is None:
            raise MissingAttributeError(key)

    source_root = params["source_root"]
    if not isinstance(source_root, (str, Path)) or not str(source_root):
        raise AttributeValueError("Invalid value. Expected a non-empty path.", "source_root")

    lists = {key: _as_str_tuple(key, params.get(key)) for key in _LIST_KEYS}

    strings: dict[str, str] = {}
    for key in _STRING_KEYS:
        value = params.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise AttributeValueError("Invalid value. Expected string.", key)
        strings[key] = value

    syntax = strings.get("attribute_syntax", SYNTAX_YAML)
    if syntax not in SYNTAXES:
        raise AttributeValueError(f"Invalid value. Expected one of: {', '.join(SYNTAXES)}.", "attribute_syntax")

    return SourceConfig(
        source_root=Path(source_root),
        text_extensions=lists["text_extensions"],
        include=lists["include"],
        exclude=lists["exclude"],
        attribute_syntax=syntax,
        avoid_renderizer_path=tuple(p.strip("/") for p in lists["avoid_renderizer_path"]),
        avoid_renderizer_extension=lists["avoid_renderizer_extension"],
        theme_name=strings.get("theme_name", ""),
    )
