"""
pagesmith package

This package turns a site source tree into in-memory content items and renders
them through nested Jinja2 layouts.

Key responsibilities are split across modules:
- `fileinfo.py`: text/binary classification and filename decomposition
- `frontmatter.py`: YAML/JSON header blocks and sidecar `.meta` files
- `attributes.py`: attribute resolution and filename/path conventions
- `layouts.py`: layout ids and layout inheritance chains
- `scanner.py`: walking content/, layouts/, includes/ and an optional theme
- `renderizer.py`: the live template namespace, block and page rendering
- `cli.py`: CLI entrypoint (scan / render)
"""

from __future__ import annotations

from pagesmith.config import SourceConfig, resolve_config
from pagesmith.errors import (
    AttributeParseError,
    AttributeValueError,
    CyclicLayoutError,
    LayoutNotFoundError,
    MissingAttributeError,
    PagesmithError,
    RenderError,
)
from pagesmith.item import Item, ItemType
from pagesmith.renderizer import Renderizer, RenderizerState
from pagesmith.scanner import ContentSourceScanner, ScanSession

__all__ = [
    "AttributeParseError",
    "AttributeValueError",
    "ContentSourceScanner",
    "CyclicLayoutError",
    "Item",
    "ItemType",
    "LayoutNotFoundError",
    "MissingAttributeError",
    "PagesmithError",
    "RenderError",
    "Renderizer",
    "RenderizerState",
    "ScanSession",
    "SourceConfig",
    "__version__",
    "resolve_config",
]

__version__ = "0.1.0"
