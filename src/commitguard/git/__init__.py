"""Git-facing types: additions and the repository collaborator."""

from .addition import Addition, FileMode

__all__ = ["Addition", "FileMode"]
