"""
fileinfo.py

Responsibility: decide whether a path is text or binary and split it into
filename / extension / directory parts. Pure string parsing, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class FileInfo:
    is_binary: bool
    filename: str
    extension: str
    path_prefix: str

    @property
    def basename(self) -> str:
        if not self.extension:
            return self.filename
        return f"{self.filename}.{self.extension}"


def classify(path: str, text_extensions: Iterable[str]) -> FileInfo:
    """
    Classify `path` against the configured text extensions.

    The extension is whatever follows the final `.` of the basename. Names
    without a dot, or whose only dot is the leading one (`.htaccess`), have no
    extension and are therefore binary.
    """
    normalized = path.replace("\\", "/")
    path_prefix, _sep, basename = normalized.rpartition("/")

    stem, dot, extension = basename.rpartition(".")
    if not dot or not stem:
        filename, extension = basename, ""
    else:
        filename = stem

    is_binary = not extension or extension not in set(text_extensions)
    return FileInfo(is_binary=is_binary, filename=filename, extension=extension, path_prefix=path_prefix)
