"""Unit tests for the high-entropy string detector."""

from commitguard.checksum.entropy import EntropyThresholds
from commitguard.core.findings import Severity
from commitguard.detectors.entropy import EntropyDetector
from commitguard.git.addition import FileMode


class TestEntropyDetector:
    def test_flags_random_token(self, make_addition, empty_config, random_b64):
        addition = make_addition("settings.py", f"DEBUG = True\nSIGNING_KEY = '{random_b64}'\n")
        finding = EntropyDetector().test(addition, empty_config)

        assert finding is not None
        assert finding.severity is Severity.FAIL
        assert finding.detector == "entropy"
        assert finding.lines == (2,)
        assert "1 high entropy" in finding.message

    def test_token_is_redacted_in_hints(self, make_addition, empty_config, random_b64):
        finding = EntropyDetector().test(make_addition("a.txt", random_b64), empty_config)
        assert random_b64 not in finding.message
        assert len(finding.hints) == 1
        hint = finding.hints[0]
        assert random_b64 not in hint
        assert random_b64[:6] + "****" + random_b64[-4:] in hint
        assert "base64" in hint

    def test_plain_text_passes(self, make_addition, empty_config):
        text = "The quick brown fox jumps over the lazy dog.\n" * 5
        assert EntropyDetector().test(make_addition("story.txt", text), empty_config) is None

    def test_binary_content_is_skipped(self, make_addition, empty_config, random_b64):
        content = b"\x00\x01" + random_b64.encode()
        assert EntropyDetector().test(make_addition("image.bin", content), empty_config) is None

    def test_symlink_is_skipped(self, make_addition, empty_config, random_b64):
        addition = make_addition("link", random_b64, mode=FileMode.SYMLINK)
        assert EntropyDetector().test(addition, empty_config) is None

    def test_allowed_patterns(self, make_addition, rc_config, random_b64):
        config = rc_config("allowed_patterns:\n  - 'EXAMPLEKEY'\n")
        assert EntropyDetector().test(make_addition("a.txt", random_b64), config) is None

    def test_thresholds_from_constructor_and_rc(self, make_addition, rc_config, empty_config, random_hex):
        addition = make_addition("lock.txt", f"hash {random_hex(64)}\n")
        lenient = EntropyDetector(EntropyThresholds(hex=4.05))
        assert lenient.test(addition, empty_config) is None

        config = rc_config("detectors:\n  entropy:\n    hex_threshold: 3.0\n")
        assert lenient.test(addition, config) is not None
