from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..core.findings import Finding, Severity
from ..git.addition import Addition

if TYPE_CHECKING:
    from ..ignore.config import IgnoreConfig


class Detector(ABC):
    """Base class for all detectors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique detector name (e.g., 'pattern', 'entropy')."""

    @abstractmethod
    def test(self, addition: Addition, ignore_config: "IgnoreConfig") -> Optional[Finding]:
        """Inspect *addition* and return at most one finding.

        Detectors must not mutate the addition or the ignore configuration,
        and must not depend on other detectors' results. Severity is the
        detector's own verdict; ignore rules are applied by the chain.
        """

    def finding(self, addition: Addition, message: str, severity: Severity = Severity.FAIL, lines=(), hints=()) -> Finding:
        return Finding.from_matches(
            detector=self.name,
            path=addition.location,
            message=message,
            severity=severity,
            lines=lines,
            hints=hints,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
