"""Unit tests for the credential pattern detector."""

from commitguard.core.findings import Severity
from commitguard.detectors.pattern import PatternDetector
from commitguard.git.addition import FileMode


class TestPatternDetector:
    def test_aws_access_key(self, make_addition, empty_config, aws_key):
        addition = make_addition("config/app.yml", f"aws:\n  access_key_id: {aws_key}\n")
        finding = PatternDetector().test(addition, empty_config)

        assert finding is not None, "Expected a finding for an AWS access key"
        assert finding.severity is Severity.FAIL
        assert finding.detector == "pattern"
        assert finding.path == "config/app.yml"
        assert finding.lines == (2,)
        assert "AWS Access Key" in finding.message

    def test_secret_is_not_reproduced(self, make_addition, empty_config, aws_key):
        finding = PatternDetector().test(make_addition("a.env", f"KEY={aws_key}"), empty_config)
        assert aws_key not in finding.message
        assert all(aws_key not in hint for hint in finding.hints)

    def test_private_key_header(self, make_addition, empty_config):
        header = "-----BEGIN " + "RSA PRIVATE KEY-----"
        finding = PatternDetector().test(make_addition("deploy/key.txt", header + "\nabc\n"), empty_config)
        assert finding is not None
        assert "Private Key" in finding.message

    def test_github_token(self, make_addition, empty_config):
        token = "ghp_" + "1234567890abcdefghij1234567890abcdef"
        finding = PatternDetector().test(make_addition("ci.sh", f"export GH={token}\n"), empty_config)
        assert finding is not None
        assert "GitHub Token" in finding.message

    def test_multiple_matches_aggregate_into_one_finding(self, make_addition, empty_config, aws_key):
        content = f"one={aws_key}\ntwo\nthree={aws_key}\npassword = 'hunter2hunter2'\n"
        finding = PatternDetector().test(make_addition("multi.txt", content), empty_config)
        assert finding.lines == (1, 3, 4)
        assert len(finding.hints) == 3
        assert "AWS Access Key" in finding.message
        assert "Password Assignment" in finding.message

    def test_clean_content(self, make_addition, empty_config):
        assert PatternDetector().test(make_addition("main.py", "print('hello')\n"), empty_config) is None

    def test_custom_and_allowed_patterns(self, make_addition, rc_config, aws_key):
        config = rc_config(
            'custom_patterns:\n  - "corp-[0-9]{6}"\nallowed_patterns:\n  - "%s"\n' % aws_key
        )
        content = f"id = corp-123456\nkey = {aws_key}\n"
        finding = PatternDetector().test(make_addition("x.txt", content), config)
        assert finding.lines == (1,)
        assert "Custom Pattern" in finding.message

    def test_explicit_rules(self, make_addition, empty_config):
        detector = PatternDetector([{"name": "Magic", "pattern": r"magic-\d+"}, {"name": "no pattern"}])
        finding = detector.test(make_addition("f.txt", "magic-42"), empty_config)
        assert finding.message.endswith("Magic")

    def test_skips_binary_and_symlinks(self, make_addition, empty_config, aws_key):
        detector = PatternDetector()
        assert detector.test(make_addition("blob.bin", b"\x00" + aws_key.encode()), empty_config) is None
        assert detector.test(make_addition("link", aws_key, mode=FileMode.SYMLINK), empty_config) is None
