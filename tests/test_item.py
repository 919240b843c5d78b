import datetime as dt

import pytest

from pagesmith.errors import AttributeValueError
from pagesmith.item import SNAPSHOT_AFTER_CONVERT, SNAPSHOT_RAW, Item, ItemType


def test_content_snapshots_are_appended() -> None:
    item = Item("index.md")
    item.add_content("# Hi", SNAPSHOT_RAW)
    item.add_content("<h1>Hi</h1>", SNAPSHOT_AFTER_CONVERT)
    assert item.content == "<h1>Hi</h1>"
    assert item.get_content(SNAPSHOT_RAW) == "# Hi"
    assert item.content_snapshots == (SNAPSHOT_RAW, SNAPSHOT_AFTER_CONVERT)


def test_snapshot_cannot_be_overwritten() -> None:
    item = Item("index.md")
    item.add_content("a")
    with pytest.raises(ValueError):
        item.add_content("b")


def test_binary_item_refuses_content() -> None:
    item = Item("logo.png", ItemType.ITEM, is_binary=True)
    with pytest.raises(ValueError):
        item.add_content("x")
    assert item.content == ""


def test_attributes_are_read_only_view() -> None:
    item = Item("a.md")
    item.set_attributes({"title": "A"})
    with pytest.raises(TypeError):
        item.attributes["title"] = "B"  # type: ignore[index]


def test_dates_are_normalized_to_iso_strings() -> None:
    item = Item("a.md")
    item.set_attributes({"date": dt.date(2024, 1, 5), "nested": {"when": dt.datetime(2024, 1, 5, 10, 30)}})
    assert item.attributes["date"] == "2024-01-05"
    assert item.attributes["nested"] == {"when": "2024-01-05T10:30:00"}


def test_unsupported_attribute_value() -> None:
    item = Item("a.md")
    with pytest.raises(AttributeValueError) as exc:
        item.set_attributes({"blob": b"\x00"})
    assert exc.value.attribute == "blob"
    assert exc.value.item_id == "a.md"


def test_paths_use_forward_slashes() -> None:
    item = Item("a/b.md", ItemType.LAYOUT)
    item.set_path("a\\b.md")
    assert item.get_path() == "a/b.md"
    assert item.type is ItemType.LAYOUT
