# SPDX-License-Identifier: MIT
"""
Shannon entropy scoring of candidate tokens.

Secrets such as API keys and private key material are drawn from a uniform
alphabet, so their character distribution is close to flat. Tokens are
scored per alphabet: a hex token can carry at most 4 bits per character and
a base64 token at most 6, so each alphabet has its own threshold.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
HEX_CHARS = "0123456789abcdefABCDEF"

DEFAULT_BASE64_THRESHOLD = 4.5
DEFAULT_HEX_THRESHOLD = 3.0
DEFAULT_MIN_LENGTH = 20

# Binary content sniffing window, same heuristic git uses.
BINARY_SNIFF_BYTES = 8000

_WORD_SPLIT = re.compile(r"[\s\"'`,;:=<>()\[\]{}]+")
_BASE64_RUN = re.compile(r"[A-Za-z0-9+/]+")
_HEX_RUN = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class EntropyThresholds:
    base64: float = DEFAULT_BASE64_THRESHOLD
    hex: float = DEFAULT_HEX_THRESHOLD
    min_length: int = DEFAULT_MIN_LENGTH

    @classmethod
    def from_settings(
        cls, settings: Optional[Dict[str, Any]], base: Optional["EntropyThresholds"] = None
    ) -> "EntropyThresholds":
        """Build thresholds from the rc ``detectors.entropy`` section, falling back to *base*."""
        settings = settings or {}
        base = base or cls()
        return cls(
            base64=float(settings.get("base64_threshold", base.base64)),
            hex=float(settings.get("hex_threshold", base.hex)),
            min_length=int(settings.get("min_length", base.min_length)),
        )


@dataclass(frozen=True)
class SuspiciousToken:
    line: int  # 1-based
    token: str
    entropy: float
    charset: str  # 'base64' or 'hex'


def shannon_entropy(token: str) -> float:
    """Shannon entropy in bits per character of *token*."""
    if not token:
        return 0.0
    length = len(token)
    entropy = 0.0
    for count in Counter(token).values():
        probability = count / length
        entropy -= probability * math.log2(probability)
    return entropy


def looks_binary(data: bytes) -> bool:
    return b"\x00" in data[:BINARY_SNIFF_BYTES]


def candidate_tokens(line: str, min_length: int) -> List[tuple]:
    """Return ``(token, charset)`` candidates of at least *min_length* chars."""
    candidates = []
    for word in _WORD_SPLIT.split(line):
        if len(word) < min_length:
            continue
        for run in _BASE64_RUN.findall(word):
            if len(run) >= min_length:
                candidates.append((run, "base64"))
        for run in _HEX_RUN.findall(word):
            if len(run) >= min_length:
                candidates.append((run, "hex"))
    return candidates


def suspicious_tokens(text: str, thresholds: EntropyThresholds = EntropyThresholds()) -> List[SuspiciousToken]:
    """Find tokens in *text* whose entropy exceeds the threshold for their alphabet."""
    found = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        seen = set()
        for token, charset in candidate_tokens(line, thresholds.min_length):
            if token in seen:
                continue
            limit = thresholds.hex if charset == "hex" else thresholds.base64
            score = shannon_entropy(token)
            if score > limit:
                seen.add(token)
                found.append(SuspiciousToken(line=line_no, token=token, entropy=score, charset=charset))
    return found
