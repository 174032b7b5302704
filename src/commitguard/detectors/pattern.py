from __future__ import annotations
import re
from typing import Any, Dict, List, Optional

from .base import Detector
from ..checksum.entropy import looks_binary
from ..core.findings import Finding
from ..core.redaction import redact_secret
from ..git.addition import Addition


DEFAULT_PATTERN_RULES = [
    {
        "name": "Private Key",
        "pattern": r"-----BEGIN (?:RSA |EC |DSA |OPENSSH |PGP |ENCRYPTED )?PRIVATE KEY(?: BLOCK)?-----",
    },
    {
        "name": "AWS Access Key",
        "pattern": r"\b(?:AKIA|ASIA)[0-9A-Z]{16}\b",
    },
    {
        "name": "AWS Secret Key",
        "pattern": r"(?i)aws.{0,20}(?:secret|sk|access).{0,20}?[:=]\s*['\"]?[0-9a-zA-Z/+]{40}\b",
    },
    {
        "name": "GitHub Token",
        # Classic GH tokens start with ghp_, gho_, github_pat_ etc.
        "pattern": r"\b(?:(?:ghp|gho|ghu|ghs|ghr)_[0-9a-zA-Z]{36,255}|github_pat_[0-9a-zA-Z_]{82,255})\b",
    },
    {
        "name": "Slack Token",
        "pattern": r"\bxox[abposr]-[0-9A-Za-z-]{10,}\b",
    },
    {
        "name": "Slack Webhook",
        "pattern": r"https://hooks\.slack\.com/services/T[0-9A-Z]+/B[0-9A-Z]+/[0-9A-Za-z]+",
    },
    {
        "name": "Generic API Key",
        "pattern": r"(?i)\b(?:api_?key|access_?token|auth_?token|secret_?key|client_?secret)\b\s*[:=]\s*['\"]?([A-Za-z0-9_\-]{16,})",
    },
    {
        "name": "Password Assignment",
        "pattern": r"(?i)\b(?:password|passwd|pwd|passphrase)\b\s*[:=]\s*['\"]([^'\"\s]{8,})['\"]",
    },
]


class PatternDetector(Detector):
    """Regex catalogue of credential shapes.

    rules: List[dict] with keys:
      - name: str (human label)
      - pattern: str (compiled)

    Repository-specific ``custom_patterns`` from the rc file are appended to
    the catalogue at test time; matches covered by ``allowed_patterns`` are
    dropped.
    """

    name = "pattern"

    def __init__(self, rules: Optional[List[Dict[str, Any]]] = None) -> None:
        compiled = []
        for r in DEFAULT_PATTERN_RULES if rules is None else rules:
            pat = r.get("pattern")
            if pat is None:
                continue
            compiled.append((r.get("name", "unnamed-rule"), re.compile(pat)))
        self._rules = compiled

    def rules(self, ignore_config) -> list:
        custom = [("Custom Pattern", p) for p in ignore_config.custom_patterns]
        return self._rules + custom

    def test(self, addition: Addition, ignore_config) -> Optional[Finding]:
        if not addition.is_blob:
            return None
        data = addition.content()
        if looks_binary(data):
            return None
        text = data.decode("utf-8", errors="ignore")
        if not text:
            return None

        lines, hints, kinds = [], [], []
        for rule_name, regex in self.rules(ignore_config):
            for m in regex.finditer(text):
                raw = m.group(0)
                if ignore_config.is_allowed(raw):
                    continue
                lines.append(text.count("\n", 0, m.start()) + 1)
                hints.append(f"{rule_name}: {redact_secret(raw)}")
                if rule_name not in kinds:
                    kinds.append(rule_name)

        if not hints:
            return None
        return self.finding(
            addition,
            f"Potential secret pattern detected: {', '.join(kinds)}",
            lines=lines,
            hints=hints,
        )
