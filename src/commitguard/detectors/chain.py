"""
Detector chain: runs every detector over every addition.

Detectors may run on a bounded thread pool, but findings are always stored
by the calling thread in addition order, then detector registration order,
so reports are identical from run to run.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

from .base import Detector
from ..core.exceptions import ContentReadError, DetectorFailure
from ..core.findings import Finding, Severity
from ..core.results import DetectionResults
from ..git.addition import Addition
from ..ignore.config import IgnoreConfig

log = logging.getLogger(__name__)


class DetectorChain:
    """Ordered, closed set of detectors."""

    def __init__(self, detectors: Iterable[Detector] = (), max_workers: int = 1) -> None:
        self._detectors: List[Detector] = []
        for detector in detectors:
            self.register(detector)
        self.max_workers = max(1, int(max_workers))

    def register(self, detector: Detector) -> "DetectorChain":
        """Append *detector*; duplicate names fail fast."""
        if any(d.name == detector.name for d in self._detectors):
            raise ValueError(f"Duplicate detector: {detector.name}")
        self._detectors.append(detector)
        return self

    def detectors(self) -> List[Detector]:
        return list(self._detectors)

    # -- running ------------------------------------------------------
    def test(self, additions: Iterable[Addition], ignore_config: IgnoreConfig, results: DetectionResults) -> DetectionResults:
        """Run all detectors and record their findings into *results*, then freeze it."""
        additions = list(additions)
        if self.max_workers == 1 or len(additions) * len(self._detectors) <= 1:
            for addition in additions:
                for detector in self._detectors:
                    self._record(self._run_one(detector, addition, ignore_config), results)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="commitguard") as pool:
                futures: Dict[Tuple[int, int], Future] = {
                    (i, j): pool.submit(self._run_one, detector, addition, ignore_config)
                    for i, addition in enumerate(additions)
                    for j, detector in enumerate(self._detectors)
                }
                for i in range(len(additions)):
                    for j in range(len(self._detectors)):
                        self._record(futures[(i, j)].result(), results)
        results.freeze()
        return results

    @staticmethod
    def _record(finding: Optional[Finding], results: DetectionResults) -> None:
        if finding is not None:
            results.add(finding)

    def _run_one(self, detector: Detector, addition: Addition, ignore_config: IgnoreConfig) -> Optional[Finding]:
        """Run one detector on one addition and resolve ignore rules. Never raises."""
        try:
            finding = detector.test(addition, ignore_config)
        except ContentReadError as e:
            log.warning("%s skipped %s: %s", detector.name, addition.path, e)
            return None
        except Exception as e:
            failure = DetectorFailure(detector.name, addition.location, e)
            log.exception("%s", failure)
            finding = Finding.from_matches(
                detector=detector.name,
                path=addition.location,
                message=str(failure),
                severity=Severity.WARN,
            )
        if finding is None:
            return None
        if finding.severity is not Severity.IGNORE and self._is_ignored(addition, detector.name, ignore_config):
            return finding.suppressed()
        return finding

    @staticmethod
    def _is_ignored(addition: Addition, detector_name: str, ignore_config: IgnoreConfig) -> bool:
        try:
            return ignore_config.is_ignored(addition, detector_name)
        except Exception:
            log.exception("Ignore rule evaluation failed for %s", addition.path)
            return False
