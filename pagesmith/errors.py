"""
errors.py

Responsibility: the exception taxonomy shared by scanning and rendering.

Errors are raised where they are detected and propagate unchanged to the caller
of `ContentSourceScanner.scan` or the `Renderizer` render methods. Nothing here
is retried.
"""

from __future__ import annotations


class PagesmithError(Exception):
    pass


class AttributeValueError(PagesmithError, ValueError):
    """A declared attribute (or configuration value) failed validation."""

    def __init__(self, message: str, attribute: str | None = None, item_id: str | None = None) -> None:
        self.message = message
        self.attribute = attribute
        self.item_id = item_id
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.attribute:
            parts.append(f'attribute "{self.attribute}"')
        if self.item_id:
            parts.append(f'item "{self.item_id}"')
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class AttributeParseError(AttributeValueError):
    """Malformed structured data in a header block or sidecar file."""


class LayoutNotFoundError(AttributeValueError):
    pass


class CyclicLayoutError(AttributeValueError):
    def __init__(self, chain: list[str], item_id: str) -> None:
        self.chain = list(chain)
        super().__init__(f"Cyclic layout inheritance: {' -> '.join(chain)}", "layout", item_id)


class MissingAttributeError(PagesmithError, KeyError):
    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(attribute)

    def __str__(self) -> str:
        return f'Missing required attribute "{self.attribute}"'


class RenderError(PagesmithError, RuntimeError):
    """A template failed to compile or render for a given item."""

    def __init__(self, message: str, item_id: str, cause: BaseException | None = None) -> None:
        self.message = message
        self.item_id = item_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f'{message} (item "{item_id}"){detail}')
