from __future__ import annotations

import json

import pytest

from pagesmith.cli import main


def _site(write) -> None:
    write("content/posts/2024-01-05-hello.md", "---\nlayout: post\n---\nHi {{ page.title }}")
    write("content/raw.txt", "---\nlayout: default\navoid_renderizer: true\n---\n{{ untouched }}")
    write("layouts/default.html", "<html>{% block body %}{{ page.content }}{% endblock %}</html>")
    write("layouts/post.html", "---\nlayout: default\n---\n{% block body %}<article>{{ page.content }}</article>{% endblock %}")
    write("includes/nav.html", "<nav/>")


def test_scan_prints_json(write, tmp_path, capsys) -> None:
    _site(write)
    assert main(["scan", str(tmp_path)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [i["id"] for i in data["items"]] == ["posts/2024-01-05-hello.md", "raw.txt"]
    assert [i["id"] for i in data["layouts"]] == ["default", "post"]
    assert data["includes"][0]["id"] == "nav.html"
    assert data["items"][0]["attributes"]["date"] == "2024-01-05"
    assert data["items"][0]["attributes"]["categories"] == []


def test_render_prints_page(write, tmp_path, capsys) -> None:
    _site(write)
    assert main(["render", str(tmp_path), "posts/2024-01-05-hello.md"]) == 0
    assert capsys.readouterr().out == "<html><article>Hi hello</article></html>"


def test_render_honours_avoid_renderizer(write, tmp_path, capsys) -> None:
    _site(write)
    assert main(["render", str(tmp_path), "raw.txt"]) == 0
    assert capsys.readouterr().out == "<html>{{ untouched }}</html>"


def test_unknown_item_exits_with_error(write, tmp_path, capsys) -> None:
    _site(write)
    with pytest.raises(SystemExit) as exc:
        main(["render", str(tmp_path), "nope.md"])
    assert exc.value.code == 1
    assert "Content item not found" in capsys.readouterr().err


def test_library_errors_exit_with_error(write, tmp_path, capsys) -> None:
    write("content/bad.md", "---\nlayout: ''\n---\n")
    with pytest.raises(SystemExit) as exc:
        main(["scan", str(tmp_path)])
    assert exc.value.code == 1
    assert "layout" in capsys.readouterr().err


def test_render_without_layout_leaves_avoided_content_untouched(write, tmp_path, capsys) -> None:
    write("content/raw.txt", "---\navoid_renderizer: true\n---\n{{ untouched }}")
    assert main(["render", str(tmp_path), "raw.txt"]) == 0
    assert capsys.readouterr().out == "{{ untouched }}"


def test_non_utf8_file_exits_with_error(write, tmp_path, capsys) -> None:
    write("content/legacy.md", b"caf\xe9 au lait")
    with pytest.raises(SystemExit) as exc:
        main(["scan", str(tmp_path)])
    assert exc.value.code == 1
    assert "legacy.md" in capsys.readouterr().err
