from typing import Optional

from .base import Detector
from ..core.findings import Finding, Severity
from ..git.addition import Addition

DEFAULT_WARN_SIZE = 512 * 1024
DEFAULT_FAIL_SIZE = 1024 * 1024


class FileSizeDetector(Detector):
    """Warns on large files and fails on very large ones.

    Limits come from the constructor and can be overridden per repository:

        detectors:
          filesize:
            warn_size: 262144
            fail_size: 2097152
    """

    name = "filesize"

    def __init__(self, warn_size: int = DEFAULT_WARN_SIZE, fail_size: int = DEFAULT_FAIL_SIZE) -> None:
        self.warn_size = warn_size
        self.fail_size = fail_size

    def limits(self, ignore_config) -> tuple:
        settings = ignore_config.settings_for(self.name)
        warn_size = int(settings.get("warn_size", self.warn_size))
        fail_size = int(settings.get("fail_size", self.fail_size))
        return min(warn_size, fail_size), fail_size

    def test(self, addition: Addition, ignore_config) -> Optional[Finding]:
        if not addition.is_blob:
            return None
        warn_size, fail_size = self.limits(ignore_config)
        size = len(addition.content())
        if size > fail_size:
            return self.finding(
                addition,
                f"File size {size} bytes exceeds the maximum of {fail_size} bytes",
            )
        if size > warn_size:
            return self.finding(
                addition,
                f"File size {size} bytes exceeds the recommended {warn_size} bytes",
                severity=Severity.WARN,
            )
        return None
