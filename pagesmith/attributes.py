"""
attributes.py

Responsibility: resolve the attribute set of a discovered content item or
layout.

Resolution order (first match wins):
1) a sidecar `<file>.meta` next to the source file (whole body is attributes,
   the main file is used verbatim as content)
2) a header block at the top of a text file
3) nothing (binary files without a sidecar)

Then, unconditionally: `mtime`, `filename`, `extension`, the avoid-render flag
(content items only), the date/title filename convention and the `posts/`
category convention (content items only).
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any

from pagesmith.config import SourceConfig
from pagesmith.errors import AttributeParseError
from pagesmith.fileinfo import FileInfo, classify
from pagesmith.frontmatter import AttributeParser
from pagesmith.item import SNAPSHOT_RAW, ContentReader, FileDescriptor, Item, ItemType
from pagesmith.layouts import parent_layout

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"
POSTS_DIR = "posts"

_DATE_FILENAME_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})-(.+?)$")


def sidecar_path(path: Path) -> Path:
    return path.with_name(path.name + META_SUFFIX)


def read_text(reader: ContentReader, item_id: str) -> str:
    try:
        return reader.read()
    except UnicodeDecodeError as e:
        raise AttributeParseError(f"File is not valid UTF-8 text: {e}", None, item_id) from e


def format_mtime(timestamp: float) -> str:
    return dt.datetime.fromtimestamp(timestamp).astimezone().isoformat(timespec="seconds")


def match_date_filename(filename: str) -> tuple[str, str, str, str] | None:
    m = _DATE_FILENAME_RE.search(filename)
    if m is None:
        return None
    return m.group(1), m.group(2), m.group(3), m.group(4)


def categories_from_dir(relative_dir: str) -> list[str] | None:
    """
    Categories for a content item living in `relative_dir`.

    Returns None outside `posts/`. `posts` itself yields an empty list.
    """
    if relative_dir == POSTS_DIR:
        return []
    prefix = POSTS_DIR + "/"
    if not relative_dir.startswith(prefix):
        return None
    return [segment for segment in relative_dir[len(prefix) :].split("/") if segment]


class AttributeExtractor:
    def __init__(self, config: SourceConfig) -> None:
        self.config = config
        self.parser = AttributeParser(config.attribute_syntax)

    def avoid_renderizer(self, info: FileInfo, descriptor: FileDescriptor) -> bool:
        relative_dir = descriptor.relative_dir
        for path in self.config.avoid_renderizer_path:
            if relative_dir == path or descriptor.relative_path == path:
                return True
            if relative_dir.startswith(path + "/"):
                return True
        return info.extension in self.config.avoid_renderizer_extension

    def _declared_attributes(self, item: Item, descriptor: FileDescriptor, reader: ContentReader) -> dict[str, Any]:
        meta = sidecar_path(descriptor.path)
        if meta.is_file():
            logger.debug("Using sidecar attributes for %s", item.id)
            attributes = self.parser.parse_string(read_text(ContentReader(meta), item.id), item.id)
            if not item.is_binary:
                item.add_content(read_text(reader, item.id), SNAPSHOT_RAW)
            return attributes

        if item.is_binary:
            return {}

        attributes, body = self.parser.split_frontmatter(read_text(reader, item.id), item.id)
        item.add_content(body, SNAPSHOT_RAW)
        return attributes

    def resolve(self, item: Item, descriptor: FileDescriptor, reader: ContentReader) -> dict[str, Any]:
        """
        Resolve, validate and store the attributes of `item`.

        Also stores the `raw` content snapshot for text items.
        """
        attributes = self._declared_attributes(item, descriptor, reader)
        parent_layout(attributes, item.id)  # validates `layout`

        info = classify(descriptor.relative_path, self.config.text_extensions)
        is_content = item.type is ItemType.ITEM

        if is_content and "avoid_renderizer" not in attributes and self.avoid_renderizer(info, descriptor):
            attributes["avoid_renderizer"] = True

        attributes["mtime"] = format_mtime(descriptor.modified_time)
        attributes["filename"] = info.filename
        attributes["extension"] = info.extension

        date_parts = match_date_filename(info.filename)
        if date_parts is not None:
            year, month, day, title_path = date_parts
            attributes["title_path"] = title_path
            if "title" not in attributes:
                attributes["title"] = title_path.replace("-", " ")
            if "date" not in attributes:
                attributes["date"] = f"{year}-{month}-{day}"

        if is_content and "categories" not in attributes:
            categories = categories_from_dir(descriptor.relative_dir)
            if categories is not None:
                attributes["categories"] = categories

        item.set_attributes(attributes)
        return dict(item.attributes)
