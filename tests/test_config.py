from pathlib import Path

import pytest

from pagesmith.config import resolve_config
from pagesmith.errors import AttributeValueError, MissingAttributeError


def test_defaults() -> None:
    config = resolve_config({"source_root": "/site", "text_extensions": ["html"]})
    assert config.source_root == Path("/site")
    assert config.attribute_syntax == "yaml"
    assert config.include == ()
    assert config.theme_name == ""
    assert config.theme_sub_path("layouts") is None


def test_theme_sub_path() -> None:
    config = resolve_config({"source_root": "/site", "text_extensions": ["html"], "theme_name": "vendor/theme"})
    assert config.theme_sub_path("layouts") == Path("/site/themes/vendor/theme/src/layouts")


@pytest.mark.parametrize("missing", ["source_root", "text_extensions"])
def test_missing_required(missing: str) -> None:
    params = {"source_root": "/site", "text_extensions": ["html"]}
    del params[missing]
    with pytest.raises(MissingAttributeError) as exc:
        resolve_config(params)
    assert exc.value.attribute == missing


def test_invalid_syntax() -> None:
    with pytest.raises(AttributeValueError) as exc:
        resolve_config({"source_root": "/site", "text_extensions": ["html"], "attribute_syntax": "toml"})
    assert exc.value.attribute == "attribute_syntax"


def test_list_values_must_be_lists_of_strings() -> None:
    with pytest.raises(AttributeValueError):
        resolve_config({"source_root": "/site", "text_extensions": "html"})
    with pytest.raises(AttributeValueError):
        resolve_config({"source_root": "/site", "text_extensions": ["html"], "exclude": [1]})


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(AttributeValueError):
        resolve_config({"source_root": "/site", "text_extensions": ["html"], "themes": "x"})


def test_avoid_paths_are_stripped_of_slashes() -> None:
    config = resolve_config({"source_root": "/s", "text_extensions": ["html"], "avoid_renderizer_path": ["/vendor/"]})
    assert config.avoid_renderizer_path == ("vendor",)
