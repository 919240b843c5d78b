"""
item.py

Responsibility: the in-memory unit of content handed from the scanner to the
renderer and any downstream collaborator.

Rules:
- `type` and `is_binary` are fixed at construction.
- Content is a list of named stages. A stage is appended, never overwritten, so
  earlier stages stay inspectable.
- Binary items never hold textual content; only path snapshots are populated.
- Attributes are validated against a closed set of value types.
"""

from __future__ import annotations

import datetime as dt
import enum
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Union

from pagesmith.errors import AttributeValueError

AttributeValue = Union[str, int, float, bool, None, list["AttributeValue"], dict[str, "AttributeValue"]]

SNAPSHOT_RAW = "raw"
SNAPSHOT_AFTER_CONVERT = "after_convert"
SNAPSHOT_AFTER_RENDER_BLOCKS = "after_render_blocks"
SNAPSHOT_AFTER_RENDER_PAGE = "after_render_page"

SNAPSHOT_PATH_RELATIVE = "relative"
SNAPSHOT_PATH_SOURCE = "source"
SNAPSHOT_PATH_RELATIVE_AFTER_CONVERT = "relative_after_convert"
SNAPSHOT_PATH_PERMALINK = "permalink"


class ItemType(str, enum.Enum):
    ITEM = "item"
    LAYOUT = "layout"
    INCLUDE = "include"


def normalize_attribute_value(name: str, value: Any, item_id: str) -> AttributeValue:
    """
    Coerce `value` into the closed attribute variant.

    YAML dates and timestamps become ISO-8601 strings. Tuples become lists.
    Any other type is rejected.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [normalize_attribute_value(name, v, item_id) for v in value]
    if isinstance(value, Mapping):
        out: dict[str, AttributeValue] = {}
        for key, v in value.items():
            out[str(key)] = normalize_attribute_value(name, v, item_id)
        return out
    raise AttributeValueError(f"Unsupported value of type {type(value).__name__}.", name, item_id)


class Item:
    def __init__(self, item_id: str, item_type: ItemType = ItemType.ITEM, is_binary: bool = False) -> None:
        self._id = item_id
        self._type = ItemType(item_type)
        self._is_binary = bool(is_binary)
        self._contents: dict[str, str] = {}
        self._paths: dict[str, str] = {}
        self._attributes: dict[str, AttributeValue] = {}

    def __repr__(self) -> str:
        return f"Item(id={self._id!r}, type={self._type.value!r}, is_binary={self._is_binary})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> ItemType:
        return self._type

    @property
    def is_binary(self) -> bool:
        return self._is_binary

    def add_content(self, content: str, snapshot: str = SNAPSHOT_RAW) -> None:
        if self._is_binary:
            raise ValueError(f"Binary item {self._id!r} cannot hold textual content.")
        if snapshot in self._contents:
            raise ValueError(f"Content snapshot {snapshot!r} already exists for item {self._id!r}.")
        self._contents[snapshot] = content

    @property
    def content(self) -> str:
        """The most recent content stage, or an empty string when there is none."""
        if not self._contents:
            return ""
        return next(reversed(self._contents.values()))

    def get_content(self, snapshot: str = SNAPSHOT_RAW) -> str:
        return self._contents.get(snapshot, "")

    @property
    def content_snapshots(self) -> tuple[str, ...]:
        return tuple(self._contents)

    def set_path(self, path: str, snapshot: str = SNAPSHOT_PATH_RELATIVE) -> None:
        self._paths[snapshot] = path.replace("\\", "/")

    def get_path(self, snapshot: str = SNAPSHOT_PATH_RELATIVE) -> str:
        return self._paths.get(snapshot, "")

    @property
    def attributes(self) -> Mapping[str, AttributeValue]:
        return MappingProxyType(self._attributes)

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        validated: dict[str, AttributeValue] = {}
        for name, value in attributes.items():
            validated[str(name)] = normalize_attribute_value(str(name), value, self._id)
        self._attributes = validated


@dataclass(frozen=True)
class FileDescriptor:
    """Metadata of a discovered file. Holds no content."""

    path: Path
    relative_path: str
    is_binary: bool
    size: int
    modified_time: float

    @classmethod
    def from_path(cls, path: Path, relative_path: str, *, is_binary: bool) -> FileDescriptor:
        st = path.stat()
        return cls(
            path=path,
            relative_path=relative_path.replace("\\", "/"),
            is_binary=is_binary,
            size=st.st_size,
            modified_time=st.st_mtime,
        )

    @property
    def relative_dir(self) -> str:
        head, _sep, _tail = self.relative_path.rpartition("/")
        return head


class ContentReader:
    """Lazily reads a text file. Constructed per file, only called for text items."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self._path = path
        self._encoding = encoding
        self._cache: str | None = None

    def read(self) -> str:
        if self._cache is None:
            with open(self._path, encoding=self._encoding, newline="") as fh:
                self._cache = fh.read()
        return self._cache
