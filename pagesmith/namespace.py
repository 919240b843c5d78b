"""
namespace.py

Responsibility: the live template namespace the Jinja2 environment loads from.

Layouts, includes and the scratch "dynamic content" template are stored in
separate per-kind tables keyed by a tagged `TemplateId`, so a layout can never
shadow an include or the scratch template.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

from jinja2 import BaseLoader, Environment, TemplateNotFound


class TemplateKind(enum.Enum):
    LAYOUT = "layout"
    INCLUDE = "include"
    SCRATCH = "dynamic"


_TAGGED_KINDS = (TemplateKind.LAYOUT, TemplateKind.SCRATCH)


@dataclass(frozen=True)
class TemplateId:
    kind: TemplateKind
    name: str

    @classmethod
    def layout(cls, name: str) -> TemplateId:
        return cls(TemplateKind.LAYOUT, name)

    @classmethod
    def include(cls, name: str) -> TemplateId:
        return cls(TemplateKind.INCLUDE, name)

    @classmethod
    def scratch(cls, name: str = "content") -> TemplateId:
        return cls(TemplateKind.SCRATCH, name)

    @property
    def template_name(self) -> str:
        """The name Jinja2 sees, e.g. in `{% extends %}` or `{% include %}`."""
        if self.kind is TemplateKind.INCLUDE:
            return self.name
        return f"@{self.kind.value}/{self.name}"

    @classmethod
    def parse(cls, template_name: str) -> TemplateId:
        for kind in _TAGGED_KINDS:
            prefix = f"@{kind.value}/"
            if template_name.startswith(prefix):
                return cls(kind, template_name[len(prefix) :])
        return cls(TemplateKind.INCLUDE, template_name)

    def extends_directive(self) -> str:
        return '{%% extends "%s" %%}' % self.template_name


class TemplateNamespace(BaseLoader):
    def __init__(self) -> None:
        self._tables: dict[TemplateKind, dict[str, str]] = {kind: {} for kind in TemplateKind}

    def set_template(self, template_id: TemplateId, source: str) -> None:
        self._tables[template_id.kind][template_id.name] = source

    def remove_kind(self, kind: TemplateKind) -> None:
        self._tables[kind].clear()

    def __contains__(self, template_id: object) -> bool:
        if not isinstance(template_id, TemplateId):
            return False
        return template_id.name in self._tables[template_id.kind]

    def names(self, kind: TemplateKind) -> list[str]:
        return sorted(self._tables[kind])

    def get_source(self, environment: Environment, template: str) -> tuple[str, str | None, Callable[[], bool]]:
        template_id = TemplateId.parse(template)
        table = self._tables[template_id.kind]
        if template_id.name not in table:
            raise TemplateNotFound(template)
        source = table[template_id.name]
        return source, None, lambda: table.get(template_id.name) == source

    def list_templates(self) -> list[str]:
        out = []
        for kind, table in self._tables.items():
            out.extend(TemplateId(kind, name).template_name for name in table)
        return sorted(out)
