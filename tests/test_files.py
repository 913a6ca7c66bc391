"""Tests for promptgen.files module."""

import os
import tempfile

import pytest

from promptgen.files import clear_cache, drain, has_line_break, read_template, write_prompts


@pytest.fixture
def template_file():
    """Create a temporary template file with a trailing newline."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", encoding="utf-8", delete=False) as f:
        f.write("a {red|blue} {café|bar}\n")
        path = f.name
    yield path
    os.unlink(path)
    clear_cache()


class TestReadTemplate:
    """Tests for read_template."""

    def test_strips_trailing_newline(self, template_file):
        assert read_template(template_file) == "a {red|blue} {café|bar}"

    def test_caching(self, template_file):
        first = read_template(template_file)
        with open(template_file, "w", encoding="utf-8") as f:
            f.write("changed")
        assert read_template(template_file) is first

    def test_clear_cache(self, template_file):
        read_template(template_file)
        with open(template_file, "w", encoding="utf-8") as f:
            f.write("changed\r\n\r\n")
        clear_cache()
        assert read_template(template_file) == "changed"

    def test_keeps_inner_newlines(self, tmp_path):
        path = tmp_path / "multi.txt"
        path.write_text("line one\n{a|b}\n", encoding="utf-8")
        assert read_template(str(path)) == "line one\n{a|b}"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_template(str(tmp_path / "missing.txt"))


class TestWritePrompts:
    """Tests for write_prompts and drain."""

    def test_one_per_line(self, tmp_path):
        path = tmp_path / "out.txt"
        n = write_prompts(str(path), ["a", "b é", "c"])
        assert n == 3
        assert path.read_text(encoding="utf-8") == "a\nb é\nc\n"

    def test_empty(self, tmp_path):
        path = tmp_path / "out.txt"
        assert write_prompts(str(path), []) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_consumes_generator(self, tmp_path):
        path = tmp_path / "out.txt"
        assert write_prompts(str(path), (str(i) for i in range(4))) == 4
        assert path.read_text(encoding="utf-8").splitlines() == ["0", "1", "2", "3"]

    @pytest.mark.parametrize("bad", ["two\nlines", "carriage\rreturn", "crlf\r\n"])
    def test_rejects_line_breaks(self, tmp_path, bad):
        path = tmp_path / "out.txt"
        with pytest.raises(ValueError, match="prompt 2"):
            write_prompts(str(path), ["ok", bad])
        assert path.read_text(encoding="utf-8") == "ok\n"

    def test_has_line_break(self):
        assert has_line_break("a\nb")
        assert has_line_break("a\r")
        assert not has_line_break("a b")

    def test_drain(self):
        assert drain(iter(["x", "y"])) == 2
