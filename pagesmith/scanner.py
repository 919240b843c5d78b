"""
scanner.py

Responsibility: walk a site's source tree (optionally overlaid by a theme) and
produce the three id -> Item collections: content items, layouts, includes.

Source-root structure:

    source_root/
    |- content/            content items (posts/, assets/, pages, ...)
    |- layouts/            wrapping templates
    |- includes/           reusable fragments
    |- themes/<name>/src/{content/assets,layouts,includes}

Rules:
- Walk files in sorted order so ids and collections are deterministic.
- Theme layouts/includes are visited before the site's, so the site copy wins.
- Sidecar `.meta` files never become items of their own.
- Ids always use `/` as separator.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pagesmith.attributes import META_SUFFIX, AttributeExtractor, read_text
from pagesmith.config import SourceConfig
from pagesmith.fileinfo import classify
from pagesmith.item import SNAPSHOT_PATH_RELATIVE, SNAPSHOT_PATH_SOURCE, SNAPSHOT_RAW, ContentReader, FileDescriptor, Item, ItemType
from pagesmith.layouts import LayoutIdentityResolver

logger = logging.getLogger(__name__)

_VCS_DIRS = frozenset({".git", ".svn", ".hg", "_darcs", ".bzr", "CVS", ".arch-params", ".monotone"})


@dataclass(frozen=True)
class SourceFile:
    path: Path
    relative_path: str


@dataclass
class ScanSession:
    """State owned by one scan. Downstream stages may append to items, never replace them."""

    layout_resolver: LayoutIdentityResolver
    items: dict[str, Item] = field(default_factory=dict)
    layouts: dict[str, Item] = field(default_factory=dict)
    includes: dict[str, Item] = field(default_factory=dict)

    def collection(self, item_type: ItemType) -> dict[str, Item]:
        if item_type is ItemType.LAYOUT:
            return self.layouts
        if item_type is ItemType.INCLUDE:
            return self.includes
        return self.items


def _iter_files(directory: Path, *, skip_meta: bool) -> list[SourceFile]:
    """
    Return all files under `directory`, in deterministic lexicographic order
    (relative path ordering). Dotfiles are kept, VCS directories are not.
    """
    files: list[SourceFile] = []
    for root, dirs, filenames in os.walk(directory):
        dirs[:] = sorted(d for d in dirs if d not in _VCS_DIRS)
        root_path = Path(root)
        for name in filenames:
            if skip_meta and name.endswith(META_SUFFIX):
                continue
            path = root_path / name
            rel = path.relative_to(directory).as_posix()
            files.append(SourceFile(path=path, relative_path=rel))
    files.sort(key=lambda f: f.relative_path)
    return files


def _is_excluded(relative_path: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern and pattern in relative_path for pattern in patterns)


class ContentSourceScanner:
    def __init__(self, config: SourceConfig) -> None:
        self.config = config
        self.extractor = AttributeExtractor(config)

    def _resolve_include(self, entry: str) -> Path:
        path = Path(entry)
        if not path.is_absolute():
            path = self.config.source_root / path
        return path

    def _content_files(self) -> Iterator[SourceFile]:
        theme_assets = self.config.theme_sub_path("content/assets")
        if theme_assets is not None and theme_assets.is_dir():
            for f in _iter_files(theme_assets, skip_meta=True):
                yield SourceFile(path=f.path, relative_path=f"assets/{f.relative_path}")

        content_files: list[SourceFile] = []
        content_dir = self.config.sub_path("content")
        if content_dir.is_dir():
            content_files.extend(_iter_files(content_dir, skip_meta=True))

        included_files: list[SourceFile] = []
        for entry in self.config.include:
            path = self._resolve_include(entry)
            if path.is_dir():
                content_files.extend(_iter_files(path, skip_meta=True))
            elif path.is_file():
                included_files.append(SourceFile(path=path, relative_path=path.name))
            else:
                logger.warning("Include path does not exist: %s", path)

        for f in content_files:
            if _is_excluded(f.relative_path, self.config.exclude):
                logger.debug("Excluded %s", f.relative_path)
                continue
            yield f

        # Explicitly included files bypass the exclude patterns.
        yield from included_files

    def _area_files(self, area: str, *, skip_meta: bool) -> Iterator[SourceFile]:
        roots = [self.config.theme_sub_path(area), self.config.sub_path(area)]
        for root in roots:
            if root is None or not root.is_dir():
                continue
            yield from _iter_files(root, skip_meta=skip_meta)

    def _process(self, session: ScanSession, source: SourceFile, item_type: ItemType) -> Item:
        info = classify(source.relative_path, self.config.text_extensions)
        if item_type is ItemType.LAYOUT:
            item_id = session.layout_resolver.resolve(source.relative_path)
        else:
            item_id = source.relative_path

        item = Item(item_id, item_type, info.is_binary)
        item.set_path(source.relative_path, SNAPSHOT_PATH_RELATIVE)
        if info.is_binary:
            item.set_path(source.path.resolve().as_posix(), SNAPSHOT_PATH_SOURCE)

        reader = ContentReader(source.path)
        if item_type is ItemType.INCLUDE:
            if not info.is_binary:
                item.add_content(read_text(reader, item_id), SNAPSHOT_RAW)
        else:
            descriptor = FileDescriptor.from_path(source.path, source.relative_path, is_binary=info.is_binary)
            self.extractor.resolve(item, descriptor, reader)

        collection = session.collection(item_type)
        if item_id in collection:
            logger.debug("%s %r overridden by %s", item_type.value, item_id, source.path)
        collection[item_id] = item
        return item

    def new_session(self) -> ScanSession:
        return ScanSession(layout_resolver=LayoutIdentityResolver(self.config.text_extensions))

    def scan(self) -> ScanSession:
        """
        Scan content, layouts and includes, in that order.

        Any error aborts the scan and propagates to the caller.
        """
        session = self.new_session()
        for source in self._content_files():
            self._process(session, source, ItemType.ITEM)
        for source in self._area_files("layouts", skip_meta=True):
            self._process(session, source, ItemType.LAYOUT)
        for source in self._area_files("includes", skip_meta=False):
            self._process(session, source, ItemType.INCLUDE)

        logger.info(
            "Scanned %s: %d items, %d layouts, %d includes",
            self.config.source_root,
            len(session.items),
            len(session.layouts),
            len(session.includes),
        )
        return session
