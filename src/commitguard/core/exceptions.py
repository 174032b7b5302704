"""commitguard custom exceptions."""

from __future__ import annotations


class ConfigParseError(Exception):
    """Raised when the ignore or scope configuration is malformed."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg


class ContentReadError(Exception):
    """Raised when the content of an addition cannot be retrieved."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.path:
            msg += f" (path: {self.path})"
        return msg


class DetectorFailure(Exception):
    """A detector raised while inspecting one addition."""

    def __init__(self, detector: str, path: str, cause: BaseException):
        self.detector = detector
        self.path = path
        self.cause = cause
        super().__init__(f"detector '{detector}' failed on {path}: {type(cause).__name__}: {cause}")


class GitCommandError(Exception):
    """Raised when a git plumbing command fails."""

    def __init__(self, message: str, command: list = None):
        self.command = command
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.command:
            msg += f" (command: {' '.join(self.command)})"
        return msg
