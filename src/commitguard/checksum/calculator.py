"""
Content checksums and the ignore-entry suggestion utility.

A checksum is a pure function of file content, so an ignore entry keyed by
checksum stays valid exactly as long as the file is unchanged.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List

import yaml

from ..core.exceptions import ContentReadError

if TYPE_CHECKING:
    from ..git.addition import Addition

log = logging.getLogger(__name__)


def content_checksum(data: bytes) -> str:
    """SHA-256 hex digest of raw file bytes."""
    return hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class ChecksumRecord:
    """An ignore entry keyed by content rather than by path."""

    filename: str
    checksum: str

    def to_rc_entry(self) -> Dict[str, str]:
        return {"filename": self.filename, "checksum": self.checksum}


class ChecksumCalculator:
    """Compute checksum records for every file matching the given patterns."""

    def __init__(self, patterns: Iterable[str], additions: Iterable["Addition"]):
        self.patterns = [p for p in patterns if p]
        self.additions = list(additions)

    def records(self) -> List[ChecksumRecord]:
        seen = {}
        for addition in self.additions:
            if addition.path in seen:
                continue
            if not any(addition.matches(p) for p in self.patterns):
                continue
            try:
                seen[addition.path] = ChecksumRecord(addition.path, addition.checksum())
            except ContentReadError as e:
                log.warning("Skipping %s: %s", addition.path, e)
        return [seen[path] for path in sorted(seen)]

    def suggest_rc(self) -> str:
        """
        Render a ``fileignoreconfig`` snippet for the matched files.

        Returns an empty string when no file matched.
        """
        records = self.records()
        if not records:
            return ""
        body = yaml.safe_dump(
            {"fileignoreconfig": [r.to_rc_entry() for r in records]},
            default_flow_style=False,
            sort_keys=False,
        )
        return (
            "\n.commitguardrc format for given file names / patterns\n"
            "------------------------------------------------------\n"
            + body
        )
