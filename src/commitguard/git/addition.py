"""Addition: one file changed by the git operation under inspection."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property, lru_cache
from typing import Callable, Optional, Pattern

from ..checksum.calculator import content_checksum
from ..core.exceptions import ContentReadError

log = logging.getLogger(__name__)


class FileMode(Enum):
    """Git object modes as reported by ``git ls-files -s`` / ``git diff --raw``."""

    REGULAR = "100644"
    EXECUTABLE = "100755"
    SYMLINK = "120000"
    GITLINK = "160000"

    @classmethod
    def parse(cls, raw: str) -> "FileMode":
        try:
            return cls(raw)
        except ValueError:
            # Older repositories may carry group-writable modes (100664).
            return cls.EXECUTABLE if raw.endswith("755") else cls.REGULAR


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Translate a path glob into a regular expression.

    ``*`` and ``?`` never cross a ``/``; ``**`` spans any number of path
    segments; ``[...]`` is a character class (``[!...]`` negates).
    """
    i, n = 0, len(pattern)
    out = []
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    # "**/" matches zero or more leading directories
                    i += 1
                    out.append("(?:.*/)?")
                elif out and out[-1] == "/":
                    # "dir/**" also matches "dir" itself
                    out[-1] = "(?:/.*)?"
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            start = i + 1
            negate = pattern.startswith("!", start)
            if negate:
                start += 1
            # a "]" right after the opening bracket is a literal member
            j = pattern.find("]", start + 1 if pattern.startswith("]", start) else start)
            if j == -1:
                out.append(re.escape(c))
            else:
                body = pattern[start:j].replace("\\", "\\\\")
                if negate:
                    body = "^" + body
                elif body.startswith("^"):
                    body = "\\" + body
                out.append("[" + body + "]")
                i = j + 1
                continue
        elif c == "/":
            out.append("/")
        else:
            out.append(re.escape(c))
        i += 1
    try:
        return re.compile("".join(out) + r"\Z")
    except re.error as e:
        log.warning("Treating malformed glob %r literally: %s", pattern, e)
        return re.compile(re.escape(pattern) + r"\Z")


def path_matches(path: str, pattern: str) -> bool:
    """Glob match shared by additions, ignore rules and scopes."""
    pattern = pattern.lstrip("/")
    if not pattern:
        return False
    if pattern.endswith("/"):
        return path.startswith(pattern)
    regex = compile_pattern(pattern)
    if regex.match(path):
        return True
    if "/" not in pattern:
        return bool(regex.match(posixpath.basename(path)))
    return False


@dataclass(frozen=True)
class Addition:
    """
    Immutable description of one changed file.

    Content comes either from ``data`` (eager) or from ``loader`` (lazy, called
    at most once per successful load).

    ``revision`` is set only for content taken from an older commit during a
    history scan; findings are then reported against ``location``.
    """

    path: str
    mode: FileMode = FileMode.REGULAR
    data: Optional[bytes] = field(default=None, repr=False, compare=False)
    loader: Optional[Callable[[], bytes]] = field(default=None, repr=False, compare=False)
    revision: Optional[str] = None

    @classmethod
    def from_bytes(cls, path: str, data: bytes, mode: FileMode = FileMode.REGULAR) -> "Addition":
        return cls(path=path, mode=mode, data=data)

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def location(self) -> str:
        """Where findings are reported: the path, qualified by commit for historical content."""
        if self.revision:
            return f"{self.path} (commit {self.revision[:12]})"
        return self.path

    @property
    def is_blob(self) -> bool:
        """False for symlinks and submodule pointers, which have no file content."""
        return self.mode in (FileMode.REGULAR, FileMode.EXECUTABLE)

    def matches(self, pattern: str) -> bool:
        return path_matches(self.path, pattern)

    def content(self) -> bytes:
        """Return the full content, raising ContentReadError if unavailable."""
        if self.data is not None:
            return self.data
        return self._loaded

    def checksum(self) -> str:
        return self._checksum

    @cached_property
    def _loaded(self) -> bytes:
        if self.loader is None:
            raise ContentReadError("no content source for addition", path=self.path)
        try:
            return self.loader()
        except ContentReadError:
            raise
        except Exception as e:
            raise ContentReadError(f"unable to read content: {e}", path=self.path) from e

    @cached_property
    def _checksum(self) -> str:
        return content_checksum(self.content())
