"""Tests for checksums and the .commitguardrc suggestion utility."""

import hashlib

import yaml

from commitguard.checksum.calculator import ChecksumCalculator, ChecksumRecord, content_checksum
from commitguard.git.addition import Addition


def test_content_checksum_depends_only_on_content():
    assert content_checksum(b"same") == content_checksum(b"same")
    assert content_checksum(b"same") != content_checksum(b"other")
    assert content_checksum(b"same") == hashlib.sha256(b"same").hexdigest()


class TestChecksumCalculator:
    def test_records_for_matching_files_sorted_by_path(self, make_addition):
        additions = [
            make_addition("z/secret.pem", b"z"),
            make_addition("a/secret.pem", b"a"),
            make_addition("README.md", b"docs"),
        ]
        records = ChecksumCalculator(["*.pem"], additions).records()
        assert records == [
            ChecksumRecord("a/secret.pem", content_checksum(b"a")),
            ChecksumRecord("z/secret.pem", content_checksum(b"z")),
        ]

    def test_file_matching_several_patterns_listed_once(self, make_addition):
        additions = [make_addition("keys/id.pem", b"k")]
        records = ChecksumCalculator(["*.pem", "keys/**"], additions).records()
        assert len(records) == 1

    def test_unreadable_files_are_skipped(self, make_addition):
        def broken():
            raise OSError("missing object")

        additions = [Addition(path="bad.pem", loader=broken), make_addition("good.pem", b"g")]
        records = ChecksumCalculator(["*.pem"], additions).records()
        assert [r.filename for r in records] == ["good.pem"]

    def test_suggest_rc_is_valid_config(self, make_addition):
        additions = [make_addition("certs/server.pem", b"cert")]
        suggestion = ChecksumCalculator(["certs/**"], additions).suggest_rc()
        body = suggestion.split("---\n", 1)[1]
        doc = yaml.safe_load(body)
        assert doc == {
            "fileignoreconfig": [
                {"filename": "certs/server.pem", "checksum": content_checksum(b"cert")}
            ]
        }

    def test_suggest_rc_empty_when_nothing_matches(self, make_addition):
        calc = ChecksumCalculator(["*.pem"], [make_addition("main.py", b"print()")])
        assert calc.suggest_rc() == ""
