"""Tests for scanner module."""

import pytest

from scanner.discovery import list_entries
from scanner.errors import NotFoundError
from scanner.parser import (
    extract_header,
    parse_directives,
    extract_directives,
    split_directive,
)
from scanner.resolver import (
    PathResolver,
    dirname,
    extension,
    is_explicit,
    join,
    normalize,
    same_file,
)


class TestPathHelpers:
    """Tests for the static path helpers."""

    def test_is_explicit(self):
        """Test rooted, drive and scheme references."""
        assert is_explicit("/var/assets/app.js")
        assert is_explicit("C:\\assets\\app.js")
        assert is_explicit("vfs://assets/app.js")
        assert not is_explicit("assets/app.js")
        assert not is_explicit("../app.js")

    def test_extension(self):
        """Test extension extraction from the final segment."""
        assert extension("x.coffee") == "coffee"
        assert extension("song/1.2.3.coffee") == "coffee"
        assert extension("noext") == ""
        assert extension("dir.d/noext") == ""

    def test_join(self):
        """Test joining segments."""
        assert join("a", "b", "c.js") == "a/b/c.js"
        assert join("", "c.js") == "c.js"
        assert join("/root", "c.js") == "/root/c.js"

    def test_dirname(self):
        """Test the directory part of identities."""
        assert dirname("b.js") == "."
        assert dirname("song/loveAndMarriage.js") == "song"
        assert dirname("/b.js") == "/"

    def test_normalize_collapses_segments(self):
        """Test removal of '.', empty and '..' segments."""
        assert normalize("a/./b/../c.js") == "a/c.js"
        assert normalize("./y.js") == "y.js"
        assert normalize("a//b/") == "a/b"
        assert normalize("first/../sybling/sybling.js") == "sybling/sybling.js"

    def test_normalize_keeps_leading_parent_segments(self):
        """Test that '..' with nothing to remove is kept."""
        assert normalize("../a.js") == "../a.js"
        assert normalize("a/../../b.js") == "../b.js"
        assert normalize("../../a.js") == "../../a.js"

    def test_normalize_explicit_paths(self):
        """Test that explicit paths keep their root marker."""
        assert normalize("/x/y/../z.js") == "/x/z.js"
        assert normalize("/..") == "/.."
        assert normalize("C:/x/../y.js") == "C:/y.js"
        assert normalize("C:\\x\\y.js") == "C:/x/y.js"

    def test_same_file(self, tmp_path):
        """Test canonical comparison of paths."""
        target = tmp_path / "a.js"
        target.write_text("")
        (tmp_path / "b.js").write_text("")

        assert same_file(str(target), f"{tmp_path}/./a.js")
        assert not same_file(str(target), str(tmp_path / "b.js"))


class TestPathResolver:
    """Tests for load path and extension management and probing."""

    def test_append_relocates_existing_path(self):
        """Test that re-adding a path moves it instead of duplicating it."""
        resolver = PathResolver()
        resolver.append_path("a")
        resolver.append_path("b")
        resolver.append_path("a")

        assert resolver.load_paths == ["b", "a"]

    def test_prepend_relocates_existing_path(self):
        """Test prepending an existing path."""
        resolver = PathResolver(load_paths=["a", "b"])
        resolver.prepend_path("b")

        assert resolver.load_paths == ["b", "a"]

    def test_paths_are_normalized(self):
        """Test that load paths are normalized before insertion."""
        resolver = PathResolver()
        resolver.append_path("assets/./js/")
        resolver.append_path("assets/js")

        assert resolver.load_paths == ["assets/js"]

    def test_most_recent_extension_first(self):
        """Test extension registration order."""
        resolver = PathResolver()
        resolver.add_extension("js")
        resolver.add_extension("coffee")
        resolver.add_extension("js")

        assert resolver.extensions == ["js", "coffee"]

    def test_probe_explicit_load_path(self, tmp_path):
        """Test probing through an absolute load path."""
        (tmp_path / "b.js").write_text("")
        resolver = PathResolver(load_paths=[str(tmp_path)])

        assert resolver.probe("b.js") == f"{tmp_path}/b.js"
        assert resolver.probe("missing.js") is None

    def test_probe_relative_load_path(self, tmp_path, monkeypatch):
        """Test that relative load paths are taken from the working directory."""
        assets = tmp_path / "assets"
        assets.mkdir()
        (assets / "b.js").write_text("")
        monkeypatch.chdir(tmp_path)

        resolver = PathResolver(load_paths=["assets"])

        assert same_file(resolver.resolve("b.js"), str(assets / "b.js"))

    def test_earlier_load_path_wins(self, tmp_path):
        """Test load path precedence."""
        for name in ("vendor", "app"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "lib.js").write_text(name)

        resolver = PathResolver(load_paths=[str(tmp_path / "vendor")])
        resolver.prepend_path(str(tmp_path / "app"))

        assert resolver.resolve("lib.js") == f"{tmp_path}/app/lib.js"

    def test_explicit_reference(self, tmp_path):
        """Test that an existing explicit reference is returned unchanged."""
        target = tmp_path / "b.js"
        target.write_text("")
        resolver = PathResolver()

        assert resolver.resolve(str(target)) == str(target)
        with pytest.raises(NotFoundError):
            resolver.resolve(str(tmp_path / "missing.js"))

    def test_resolve_missing_raises(self, tmp_path):
        """Test that an unresolvable reference raises NotFoundError."""
        resolver = PathResolver(load_paths=[str(tmp_path)])

        with pytest.raises(NotFoundError) as excinfo:
            resolver.resolve("nothing.js")
        assert excinfo.value.reference == "nothing.js"

    def test_resolve_with_extensions_order(self, tmp_path):
        """Test that the most recently registered extension is tried first."""
        (tmp_path / "b.js").write_text("")
        (tmp_path / "b.coffee").write_text("")
        resolver = PathResolver(extensions=["js", "coffee"], load_paths=[str(tmp_path)])

        assert resolver.resolve_with_extensions("b") == f"{tmp_path}/b.coffee"

    def test_resolve_with_extensions_falls_back(self, tmp_path):
        """Test the fallback to the reference itself."""
        (tmp_path / "b.js").write_text("")
        resolver = PathResolver(extensions=["js", "coffee"], load_paths=[str(tmp_path)])

        assert resolver.resolve_with_extensions("b.js") == f"{tmp_path}/b.js"
        assert resolver.probe_with_extensions("c") is None
        with pytest.raises(NotFoundError):
            resolver.resolve_with_extensions("c")

    def test_strip_known_extension(self):
        """Test that only registered extensions are stripped."""
        resolver = PathResolver(extensions=["js", "coffee"])

        assert resolver.strip_known_extension("a/b.coffee") == "a/b"
        assert resolver.strip_known_extension("1.2.3.js") == "1.2.3"
        assert resolver.strip_known_extension("notes.txt") == "notes.txt"
        assert resolver.strip_known_extension("plain") == "plain"


class TestDiscovery:
    """Tests for directory listing."""

    def test_list_entries_sorted(self, tmp_path):
        """Test lexical ordering of entries."""
        for name in ("b.js", "a.coffee", "c"):
            (tmp_path / name).write_text("")

        assert list_entries(str(tmp_path)) == ["a.coffee", "b.js", "c"]

    def test_list_entries_with_dots(self, tmp_path):
        """Test listing the dot entries."""
        (tmp_path / "a.js").write_text("")

        assert list_entries(str(tmp_path), skip_dots=False) == [".", "..", "a.js"]


class TestHeaderExtraction:
    """Tests for the leading comment block."""

    def test_line_comments(self):
        """Test that the header stops at the first code line."""
        content = "//= require a\n// plain\n//= require b\nvar x = 1;\n//= require c\n"

        assert extract_header(content) == "//= require a\n// plain\n//= require b"

    def test_hash_comments_and_blank_lines(self):
        """Test '#' comments with blank lines in between."""
        content = "#= require a\n\n#= require b\n\nx = 1\n"

        assert parse_directives(extract_header(content)) == ["require a", "require b"]

    def test_no_header(self):
        """Test content that does not start with a comment."""
        assert extract_header('"""\nDouble rainbow\n"""') == ""
        assert extract_directives("var a;\n//= require b\n") == []

    def test_block_comment(self):
        """Test a multi-line C-style block comment."""
        content = "/*\n *= require foo\n *= require_tree bar\n */\nbody();\n"

        assert extract_directives(content) == ["require foo", "require_tree bar"]

    def test_single_line_block_comment(self):
        """Test a block comment opened and closed on one line."""
        content = "/*= require foo */\n//= require bar\nbody();\n"

        assert extract_directives(content) == ["require foo", "require bar"]

    def test_coffee_block_comment(self):
        """Test CoffeeScript '###' comments."""
        content = "### Library ###\n###\n= require foo\n###\nx = 1\n#= require ignored\n"

        assert extract_directives(content) == ["require foo"]

    def test_quadruple_hash_is_line_comment(self):
        """Test that '####' does not open a block."""
        content = "#### Section\nx = 1\n#= require ignored\n"

        assert extract_header(content) == "#### Section"

    def test_carriage_returns(self):
        """Test Windows line endings and trailing whitespace."""
        content = "//= require a  \r\n//= require b\t\r\nvar x;\r\n"

        assert extract_directives(content) == ["require a", "require b"]

    def test_plain_comments_are_not_directives(self):
        """Test that comments without '=' are skipped."""
        header = "// This file requires nothing\n// a == b"

        assert parse_directives(header) == []

    def test_byte_order_mark(self):
        """Test that a leading BOM does not end the header."""
        content = "\ufeff//= require a\nvar x;\n"

        assert extract_directives(content) == ["require a"]


class TestSplitDirective:
    """Tests for directive tokenizing."""

    def test_command_and_arguments(self):
        """Test splitting on whitespace."""
        directive = split_directive("require b  x")

        assert directive.command == "require"
        assert directive.arguments == ["b", "x"]

    def test_quotes_are_removed(self):
        """Test that quote characters are stripped."""
        assert split_directive("require 'a' \"b/c\"") == ("require", ["a", "b/c"])

    def test_empty(self):
        """Test empty directive text."""
        assert split_directive("") == ("", [])
