"""Finding data structures for commitguard."""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Tuple


class Severity(Enum):
    """Severity tier of a finding. Only FAIL affects the exit status."""

    IGNORE = "ignore"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class Finding:
    """One detector's verdict on one addition."""

    detector: str  # detector name (e.g. 'pattern', 'entropy')
    path: str  # repo-relative file path
    message: str  # human readable, never contains a full secret
    severity: Severity
    lines: Tuple[int, ...] = ()  # 1-based line numbers, when applicable
    hints: Tuple[str, ...] = ()  # redacted snippets that triggered detection

    @classmethod
    def from_matches(
        cls,
        detector: str,
        path: str,
        message: str,
        severity: Severity,
        lines: Iterable[int] = (),
        hints: Iterable[str] = (),
    ) -> "Finding":
        """Create a Finding, normalising line numbers and hints to tuples."""
        return cls(
            detector=detector,
            path=path,
            message=message,
            severity=severity,
            lines=tuple(sorted(set(lines))),
            hints=tuple(hints),
        )

    def suppressed(self) -> "Finding":
        """Return a copy of this finding downgraded to IGNORE."""
        return replace(self, severity=Severity.IGNORE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Finding to dictionary format."""
        result = {
            "detector": self.detector,
            "path": self.path,
            "severity": self.severity.value,
            "message": self.message,
        }

        if self.lines:
            result["lines"] = list(self.lines)

        if self.hints:
            result["hints"] = list(self.hints)

        return result
