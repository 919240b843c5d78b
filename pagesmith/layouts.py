"""
layouts.py

Responsibility: layout identity and layout inheritance.

- `LayoutIdentityResolver` gives every discovered layout file a stable id.
  Authors refer to `post` rather than `post.html`; when two files would shorten
  to the same id the later one keeps its full relative path.
- `LayoutChainBuilder` turns each layout's `layout` attribute into an
  `{% extends %}` directive on its parent, after checking that every parent
  exists and that no chain loops back on itself.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pagesmith.errors import AttributeValueError, CyclicLayoutError, LayoutNotFoundError
from pagesmith.fileinfo import classify
from pagesmith.namespace import TemplateId

logger = logging.getLogger(__name__)


class LayoutIdentityResolver:
    def __init__(self, text_extensions: Iterable[str]) -> None:
        self._text_extensions = tuple(text_extensions)
        self._ids: dict[str, str] = {}

    def short_id(self, relative_path: str) -> str:
        info = classify(relative_path, self._text_extensions)
        name = info.basename if info.is_binary else info.filename
        return f"{info.path_prefix}/{name}".lstrip("/")

    def resolve(self, relative_path: str) -> str:
        relative_path = relative_path.replace("\\", "/")
        if relative_path in self._ids:
            return self._ids[relative_path]

        short = self.short_id(relative_path)
        layout_id = short if short not in self._ids.values() else relative_path
        self._ids[relative_path] = layout_id
        logger.debug("Layout %s -> id %r", relative_path, layout_id)
        return layout_id

    @property
    def assigned(self) -> dict[str, str]:
        return dict(self._ids)


def parent_layout(attributes: Mapping[str, Any], layout_id: str) -> str | None:
    """Return the declared parent layout id, validating the attribute value."""
    if "layout" not in attributes:
        return None
    value = attributes["layout"]
    if not isinstance(value, str):
        raise AttributeValueError("Invalid value. Expected string.", "layout", layout_id)
    if not value:
        raise AttributeValueError("Invalid value. Expected a non-empty string.", "layout", layout_id)
    return value


def check_inheritance(parents: Mapping[str, str | None]) -> None:
    """
    Walk every chain of the layout -> parent graph.

    Raises LayoutNotFoundError for a dangling parent and CyclicLayoutError when
    a chain revisits a layout.
    """
    resolved: set[str] = set()
    for start in sorted(parents):
        chain: list[str] = []
        visited: set[str] = set()
        current: str | None = start
        while current is not None and current not in resolved:
            if current in visited:
                cycle_start = chain.index(current)
                raise CyclicLayoutError([*chain[cycle_start:], current], chain[-1])
            visited.add(current)
            chain.append(current)
            parent = parents[current]
            if parent is not None and parent not in parents:
                raise LayoutNotFoundError(f'Layout "{parent}" not found.', "layout", current)
            current = parent
        resolved.update(chain)


class LayoutChainBuilder:
    def build(self, layouts: Mapping[str, tuple[str, Mapping[str, Any]]]) -> dict[TemplateId, str]:
        """
        Compose layout sources.

        `layouts` maps layout id -> (content, attributes). Returns the template
        source to register for each layout.
        """
        parents = {layout_id: parent_layout(attributes, layout_id) for layout_id, (_c, attributes) in layouts.items()}
        check_inheritance(parents)

        compiled: dict[TemplateId, str] = {}
        for layout_id, (content, _attributes) in layouts.items():
            parent = parents[layout_id]
            if parent is not None:
                content = TemplateId.layout(parent).extends_directive() + content
            compiled[TemplateId.layout(layout_id)] = content

        logger.info("Compiled %d layouts", len(compiled))
        return compiled
