"""Detector catalogue for commitguard.

The catalogue is closed and ordered; the order below is the order findings
appear in for each file.
"""

from __future__ import annotations
from typing import List

from .base import Detector
from .binary import BinaryFileDetector
from .chain import DetectorChain
from .entropy import EntropyDetector
from .filename import FileNameDetector
from .filesize import FileSizeDetector
from .pattern import PatternDetector

DEFAULT_DETECTORS = (
    FileNameDetector,
    BinaryFileDetector,
    FileSizeDetector,
    PatternDetector,
    EntropyDetector,
)


def default_detectors() -> List[Detector]:
    return [cls() for cls in DEFAULT_DETECTORS]


def default_chain(max_workers: int = 1) -> DetectorChain:
    """Build a chain holding the full catalogue in its fixed order."""
    return DetectorChain(default_detectors(), max_workers=max_workers)


__all__ = [
    "Detector",
    "DetectorChain",
    "BinaryFileDetector",
    "EntropyDetector",
    "FileNameDetector",
    "FileSizeDetector",
    "PatternDetector",
    "DEFAULT_DETECTORS",
    "default_detectors",
    "default_chain",
]
