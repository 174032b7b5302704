"""Tests for Addition path matching and content access."""

import pytest

from commitguard.core.exceptions import ContentReadError
from commitguard.git.addition import Addition, FileMode, path_matches


class TestPathMatching:
    """Glob semantics shared by additions, ignores and scopes."""

    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("config/app.yml", "config/app.yml"),
            ("config/app.yml", "config/*.yml"),
            ("keys/server.pem", "*.pem"),
            ("server.pem", "*.pem"),
            ("bin/tool.exe", "bin/**"),
            ("bin/x/y/tool.exe", "bin/**"),
            ("deep/nested/yarn.lock", "**/yarn.lock"),
            ("yarn.lock", "**/yarn.lock"),
            ("a/b", "a/**/b"),
            ("a/x/y/b", "a/**/b"),
            ("node_modules/lib/index.js", "node_modules/"),
            ("docs/a1.md", "docs/a?.md"),
            ("docs/ab.md", "docs/a[ab].md"),
            ("docs/ac.md", "docs/a[!ab].md"),
            ("requirements-dev.txt", "requirements*.txt"),
        ],
    )
    def test_matches(self, path, pattern):
        assert path_matches(path, pattern), f"{pattern!r} should match {path!r}"

    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("config/app.yml", "*.yml/"),
            ("config/sub/app.yml", "config/*.yml"),
            ("src/bin/tool.exe", "bin/**"),
            ("binary/tool.exe", "bin/**"),
            ("docs/ab.md", "docs/a[!ab].md"),
            ("a/b/c", "a/?"),
            ("anything", ""),
        ],
    )
    def test_does_not_match(self, path, pattern):
        assert not path_matches(path, pattern), f"{pattern!r} should not match {path!r}"

    def test_addition_matches_delegates(self, make_addition):
        addition = make_addition("bin/tool.exe")
        assert addition.matches("bin/**")
        assert addition.matches("*.exe")
        assert not addition.matches("lib/**")

    def test_root_anchored_patterns(self):
        assert path_matches("bin/tool.exe", "/bin/")
        assert path_matches("bin/tool.exe", "/bin/**")
        assert not path_matches("src/bin/tool.exe", "/bin/")
        assert not path_matches("anything", "/")

    def test_bracket_edge_cases(self):
        assert path_matches("a[]b", "a[]b")
        assert path_matches("a]b", "a[]x]b")
        assert path_matches("a^b", "a[^]b")
        assert not path_matches("axb", "a[^]b")

    def test_malformed_class_is_literal(self, caplog):
        assert not path_matches("ab", "a[z-a]b")
        assert path_matches("a[z-a]b", "a[z-a]b")
        assert "malformed glob" in caplog.text

    def test_malformed_scope_pattern_does_not_crash_filtering(self, make_addition):
        from commitguard.ignore.scopes import filter_by_scope

        additions = [make_addition("a[]b"), make_addition("src/main.py")]
        kept = filter_by_scope(additions, ["a[]b", "x[z-a]"])
        assert [a.path for a in kept] == ["src/main.py"]


class TestContent:
    """Content is loaded lazily and at most once."""

    def test_eager_content(self):
        addition = Addition.from_bytes("a.txt", b"hello")
        assert addition.content() == b"hello"
        assert addition.name == "a.txt"

    def test_lazy_loader_called_once(self):
        calls = []

        def loader():
            calls.append(1)
            return b"lazy"

        addition = Addition(path="dir/b.txt", loader=loader)
        assert addition.content() == b"lazy"
        assert addition.content() == b"lazy"
        assert len(calls) == 1
        assert addition.name == "b.txt"

    def test_loader_failure_raises_content_read_error(self):
        def loader():
            raise OSError("object missing")

        addition = Addition(path="gone.txt", loader=loader)
        with pytest.raises(ContentReadError) as exc:
            addition.content()
        assert "gone.txt" in str(exc.value)

    def test_no_content_source(self):
        with pytest.raises(ContentReadError):
            Addition(path="empty.txt").content()

    def test_checksum_is_sha256_of_content(self):
        addition = Addition.from_bytes("a.txt", b"abc")
        assert addition.checksum() == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_addition_is_immutable(self):
        addition = Addition.from_bytes("a.txt", b"abc")
        with pytest.raises(AttributeError):
            addition.path = "b.txt"


class TestFileMode:
    def test_parse_known_modes(self):
        assert FileMode.parse("100644") is FileMode.REGULAR
        assert FileMode.parse("100755") is FileMode.EXECUTABLE
        assert FileMode.parse("120000") is FileMode.SYMLINK
        assert FileMode.parse("160000") is FileMode.GITLINK

    def test_parse_legacy_group_writable(self):
        assert FileMode.parse("100664") is FileMode.REGULAR

    def test_only_regular_files_are_blobs(self):
        assert Addition("a", FileMode.REGULAR).is_blob
        assert Addition("a", FileMode.EXECUTABLE).is_blob
        assert not Addition("a", FileMode.SYMLINK).is_blob
        assert not Addition("a", FileMode.GITLINK).is_blob
