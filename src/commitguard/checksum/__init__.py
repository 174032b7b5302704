"""Content checksums and entropy scoring."""

from .calculator import ChecksumCalculator, ChecksumRecord, content_checksum
from .entropy import EntropyThresholds, SuspiciousToken, shannon_entropy, suspicious_tokens

__all__ = [
    "ChecksumCalculator",
    "ChecksumRecord",
    "content_checksum",
    "EntropyThresholds",
    "SuspiciousToken",
    "shannon_entropy",
    "suspicious_tokens",
]
