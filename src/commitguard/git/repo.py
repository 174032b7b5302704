"""
Git plumbing collaborator: enumerates additions and reads repository files.
"""
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from .addition import Addition, FileMode
from ..core.exceptions import GitCommandError

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
ZERO_SHA = "0" * 40


class GitRepo:
    """A git working copy located at *root*."""

    def __init__(self, root: str = ".") -> None:
        self.root = Path(root).resolve()

    @classmethod
    def located_at(cls, path: str) -> "GitRepo":
        """Return the repository containing *path* (its top-level directory)."""
        top = cls(path)._git("rev-parse", "--show-toplevel").decode().strip()
        return cls(top)

    def _git(self, *args: str) -> bytes:
        cmd = ["git", *args]
        try:
            proc = subprocess.run(cmd, cwd=self.root, capture_output=True, check=True)
        except FileNotFoundError as e:
            raise GitCommandError(f"git executable not found: {e}", command=cmd)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise GitCommandError(f"git exited with {e.returncode}: {stderr}", command=cmd)
        return proc.stdout

    def _blob_loader(self, obj: str):
        def load() -> bytes:
            return self._git("cat-file", "blob", obj)
        return load

    # -- additions ----------------------------------------------------
    def _additions_from_raw_diff(self, raw: bytes, revision: Optional[str]) -> List[Addition]:
        """Parse ``git diff --raw -z`` output into additions of the new side."""
        additions = []
        fields = raw.split(b"\0")
        i = 0
        while i < len(fields) - 1:
            meta = fields[i].decode()
            if not meta.startswith(":"):
                i += 1
                continue
            _, new_mode, _, new_sha, status = meta[1:].split(" ")
            if status[0] in "RC":
                path = fields[i + 2].decode()
                i += 3
            else:
                path = fields[i + 1].decode()
                i += 2
            if status[0] == "D":
                continue
            obj = f"{revision}:{path}" if revision else new_sha
            if not revision and new_sha == ZERO_SHA:
                obj = f":{path}"
            additions.append(Addition(path=path, mode=FileMode.parse(new_mode), loader=self._blob_loader(obj)))
        return additions

    def staged_additions(self) -> List[Addition]:
        """Files added or modified in the index (pre-commit)."""
        base = "HEAD" if self._has_head() else EMPTY_TREE
        raw = self._git("diff", "--cached", "--raw", "--no-abbrev", "-z", "--no-renames", "--diff-filter=ACMRT", base)
        return self._additions_from_raw_diff(raw, None)

    def additions_between(self, old: str, new: str) -> List[Addition]:
        """Files added or modified between two commits (pre-push)."""
        if not old or old == ZERO_SHA:
            old = EMPTY_TREE
        raw = self._git("diff", "--raw", "--no-abbrev", "-z", "--no-renames", "--diff-filter=ACMRT", old, new)
        return self._additions_from_raw_diff(raw, new)

    def tracked_additions(self, revision: str = "HEAD") -> List[Addition]:
        """Every file in *revision*'s tree (checksum mode)."""
        return [addition for _, addition in self._tree_entries(revision)]

    def history_additions(self) -> List[Addition]:
        """
        Every distinct file version reachable from any ref (scan mode).

        The HEAD tree comes first and keeps plain paths. Older versions follow,
        newest commit first, each tagged with the first commit it was found in.
        A (path, blob) pair is returned once however many commits carry it.
        """
        seen = set()
        additions = []
        if self._has_head():
            for sha, addition in self._tree_entries("HEAD"):
                seen.add((addition.path, sha))
                additions.append(addition)
        commits = self._git("rev-list", "--all").decode().split()
        for commit in commits:
            for sha, addition in self._tree_entries(commit, label=commit):
                if (addition.path, sha) in seen:
                    continue
                seen.add((addition.path, sha))
                additions.append(addition)
        return additions

    def _tree_entries(self, revision: str, label: Optional[str] = None) -> List[Tuple[str, Addition]]:
        raw = self._git("ls-tree", "-r", "-z", "--full-tree", revision)
        entries = []
        for entry in raw.split(b"\0"):
            if not entry:
                continue
            meta, path = entry.decode().split("\t", 1)
            mode, _, sha = meta.split(" ")
            addition = Addition(
                path=path,
                mode=FileMode.parse(mode),
                loader=self._blob_loader(sha),
                revision=label,
            )
            entries.append((sha, addition))
        return entries

    def _has_head(self) -> bool:
        try:
            self._git("rev-parse", "--verify", "--quiet", "HEAD")
            return True
        except GitCommandError:
            return False

    # -- files --------------------------------------------------------
    def read_repo_file_or_nothing(self, path: str) -> bytes:
        """Read a working-tree file; empty bytes when it does not exist."""
        full = self.root / path
        if not full.is_file():
            return b""
        return full.read_bytes()

    def __repr__(self) -> str:
        return f"GitRepo({os.fspath(self.root)!r})"
