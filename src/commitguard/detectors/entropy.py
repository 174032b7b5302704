import logging
from typing import Optional

from .base import Detector
from ..checksum.entropy import EntropyThresholds, looks_binary, suspicious_tokens
from ..core.findings import Finding
from ..core.redaction import redact_secret
from ..git.addition import Addition

log = logging.getLogger(__name__)


class EntropyDetector(Detector):
    """Flags high-entropy base64/hex tokens that look like keys or secrets.

    Reported hints carry the line number, the alphabet, the score and a
    redacted token (first 6 and last 4 characters); the token itself is never
    reproduced.
    """

    name = "entropy"

    def __init__(self, thresholds: Optional[EntropyThresholds] = None) -> None:
        self.thresholds = thresholds

    def thresholds_for(self, ignore_config) -> EntropyThresholds:
        return EntropyThresholds.from_settings(ignore_config.settings_for(self.name), self.thresholds)

    def test(self, addition: Addition, ignore_config) -> Optional[Finding]:
        if not addition.is_blob:
            return None
        data = addition.content()
        if looks_binary(data):
            log.debug("Skipping binary content of %s", addition.path)
            return None
        text = data.decode("utf-8", errors="ignore")

        tokens = [
            t for t in suspicious_tokens(text, self.thresholds_for(ignore_config))
            if not ignore_config.is_allowed(t.token)
        ]
        if not tokens:
            return None
        return self.finding(
            addition,
            f"Found {len(tokens)} high entropy string(s) that may be secrets",
            lines=[t.line for t in tokens],
            hints=[
                f"line {t.line}: {t.charset} {redact_secret(t.token)} (entropy {t.entropy:.2f})"
                for t in tokens
            ],
        )
