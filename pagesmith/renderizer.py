"""
renderizer.py

Responsibility: own the live Jinja2 template namespace and render content
blocks and full pages against it.

States:
- EMPTY: layouts are buffered by `add_layout`, nothing is chained yet.
- LAYOUTS_COMPILED: the first `render_page` composed every buffered layout
  into the namespace. Later `add_layout` calls are buffered but not chained
  until `clear()` brings the renderizer back to EMPTY.

This module does NOT know about the filesystem; callers pass content in.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError, Undefined
from jinja2.ext import Extension

from pagesmith.errors import AttributeValueError, LayoutNotFoundError, RenderError
from pagesmith.layouts import LayoutChainBuilder
from pagesmith.namespace import TemplateId, TemplateKind, TemplateNamespace

if TYPE_CHECKING:
    from pagesmith.scanner import ScanSession

logger = logging.getLogger(__name__)


class RenderizerState(enum.Enum):
    EMPTY = "empty"
    LAYOUTS_COMPILED = "layouts_compiled"


class Renderizer:
    def __init__(self, *, strict_undefined: bool = False, chain_builder: LayoutChainBuilder | None = None) -> None:
        self.namespace = TemplateNamespace()
        self.env = Environment(
            loader=self.namespace,
            autoescape=False,
            undefined=StrictUndefined if strict_undefined else Undefined,
            keep_trailing_newline=True,
        )
        self.chain_builder = chain_builder or LayoutChainBuilder()
        self._layouts: dict[str, tuple[str, dict[str, Any]]] = {}
        self.state = RenderizerState.EMPTY

    def add_layout(self, layout_id: str, content: str, attributes: Mapping[str, Any] | None = None) -> None:
        """Buffer a layout. The `layout` attribute names its parent."""
        self._layouts[layout_id] = (content, dict(attributes or {}))

    def add_include(self, include_id: str, content: str) -> None:
        template_id = TemplateId.include(include_id)
        if TemplateId.parse(template_id.template_name) != template_id:
            raise AttributeValueError("Include id uses a reserved template prefix.", None, include_id)
        self.namespace.set_template(template_id, content)

    def add_scan_result(self, session: ScanSession) -> None:
        for layout in session.layouts.values():
            self.add_layout(layout.id, layout.content, layout.attributes)
        for include in session.includes.values():
            self.add_include(include.id, include.content)

    def clear(self) -> None:
        self._layouts = {}
        self.namespace.remove_kind(TemplateKind.LAYOUT)
        self.state = RenderizerState.EMPTY

    def compile_layouts(self) -> None:
        for template_id, source in self.chain_builder.build(self._layouts).items():
            self.namespace.set_template(template_id, source)
        self.state = RenderizerState.LAYOUTS_COMPILED

    def render_blocks(self, item_id: str, content: str, attributes: Mapping[str, Any]) -> str:
        """
        Render `content` on its own (no layout).

        Raises RenderError when the template cannot be parsed or rendered.
        """
        scratch = TemplateId.scratch()
        self.namespace.set_template(scratch, content)
        try:
            template = self.env.get_template(scratch.template_name)
            return template.render(**attributes)
        except TemplateSyntaxError as e:
            raise RenderError("Error during lexing or parsing a template.", item_id, e) from e
        except TemplateError as e:
            raise RenderError("Error during rendering a template.", item_id, e) from e

    def render_page(
        self,
        item_id: str,
        content: str,
        layout_name: str | None,
        site_attributes: Mapping[str, Any],
    ) -> str:
        """
        Render a full page. With a layout, `content` is exposed as `page.content`
        and the layout chain renders around it.
        """
        if self.state is RenderizerState.EMPTY:
            self.compile_layouts()

        attributes = dict(site_attributes)
        if layout_name:
            layout = TemplateId.layout(layout_name)
            if layout not in self.namespace:
                raise LayoutNotFoundError(f'Layout "{layout_name}" not found.', "layout", item_id)

            page = attributes.get("page") or {}
            if not isinstance(page, Mapping):
                raise AttributeValueError("Invalid value. Expected a mapping.", "page", item_id)
            page = dict(page)
            page["content"] = content
            attributes["page"] = page
            content = layout.extends_directive()

        return self.render_blocks(item_id, content, attributes)

    def add_filter(self, name: str, func: Callable[..., Any]) -> None:
        self.env.filters[name] = func

    def add_function(self, name: str, func: Callable[..., Any]) -> None:
        self.env.globals[name] = func

    def add_test(self, name: str, func: Callable[..., bool]) -> None:
        self.env.tests[name] = func

    def add_extension(self, extension: str | type[Extension]) -> None:
        self.env.add_extension(extension)
