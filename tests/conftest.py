from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from pagesmith.config import SourceConfig, resolve_config

TEXT_EXTENSIONS = ["html", "md", "twig", "xml", "txt", "css"]


@pytest.fixture
def write(tmp_path: Path) -> Callable[[str, str | bytes], Path]:
    def _write(relative: str, content: str | bytes = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SourceConfig]:
    def _make(**overrides: object) -> SourceConfig:
        params: dict[str, object] = {"source_root": str(tmp_path), "text_extensions": TEXT_EXTENSIONS}
        params.update(overrides)
        return resolve_config(params)

    return _make
