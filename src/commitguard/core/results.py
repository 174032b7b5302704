"""Aggregated detection results for one run."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from .findings import Finding, Severity


class DetectionResults:
    """
    Findings grouped by addition path.

    Paths keep the order in which they were first recorded and findings keep
    their insertion order per path. Each (path, detector) pair contributes at
    most one finding. Results are append-only until :meth:`freeze` is called.
    """

    def __init__(self) -> None:
        self._by_path: "OrderedDict[str, List[Finding]]" = OrderedDict()
        self._lock = threading.Lock()
        self._frozen = False

    # -- mutation -----------------------------------------------------
    def add(self, finding: Finding) -> None:
        """Record *finding*.

        Raises:
            RuntimeError: if the results have been frozen
            ValueError: if the detector already reported on this path
        """
        with self._lock:
            if self._frozen:
                raise RuntimeError("DetectionResults are frozen")
            bucket = self._by_path.setdefault(finding.path, [])
            if any(f.detector == finding.detector for f in bucket):
                raise ValueError(
                    f"Duplicate finding for detector '{finding.detector}' on {finding.path}"
                )
            bucket.append(finding)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- queries ------------------------------------------------------
    def _has(self, severity: Severity) -> bool:
        return any(f.severity is severity for f in self.findings())

    def has_failures(self) -> bool:
        return self._has(Severity.FAIL)

    def has_warnings(self) -> bool:
        return self._has(Severity.WARN)

    def has_ignores(self) -> bool:
        return self._has(Severity.IGNORE)

    def paths(self) -> List[str]:
        return list(self._by_path)

    def findings(self, path: Optional[str] = None, severity: Optional[Severity] = None) -> List[Finding]:
        """Return findings, optionally restricted to one path and/or severity."""
        if path is not None:
            selected = list(self._by_path.get(path, []))
        else:
            selected = [f for bucket in self._by_path.values() for f in bucket]
        if severity is not None:
            selected = [f for f in selected if f.severity is severity]
        return selected

    def summary(self) -> Dict[str, int]:
        """Count findings per severity."""
        counts = {s.value: 0 for s in Severity}
        for finding in self.findings():
            counts[finding.severity.value] += 1
        counts["files"] = len(self._by_path)
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Stable grouped-by-path, severity-labelled view used by reports."""
        return {
            "summary": self.summary(),
            "results": [
                {
                    "path": path,
                    "findings": [f.to_dict() for f in bucket],
                }
                for path, bucket in self._by_path.items()
            ],
        }

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._by_path.values())
