import posixpath
from typing import Optional

from .base import Detector
from ..checksum.entropy import looks_binary
from ..core.findings import Finding
from ..git.addition import Addition

BINARY_EXTS = {
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".bin",
    ".o",
    ".a",
    ".lib",
    ".obj",
    ".class",
    ".jar",
    ".war",
    ".pyc",
    ".pyo",
    ".zip",
    ".gz",
    ".tar",
    ".tgz",
    ".bz2",
    ".xz",
    ".7z",
    ".rar",
    ".dmg",
    ".iso",
    ".msi",
    ".deb",
    ".rpm",
    ".apk",
}


class BinaryFileDetector(Detector):
    """Flags disallowed binary file types, by extension or by content."""

    name = "binary"

    def __init__(self, extensions=None):
        self.extensions = {e.lower() for e in (extensions or BINARY_EXTS)}

    def test(self, addition: Addition, ignore_config) -> Optional[Finding]:
        ext = posixpath.splitext(addition.name)[1].lower()
        if ext in self.extensions:
            return self.finding(addition, f"Binary file type '{ext}' is not allowed")
        if addition.is_blob and looks_binary(addition.content()):
            return self.finding(addition, "File content is binary")
        return None
