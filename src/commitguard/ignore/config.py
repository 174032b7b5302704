# SPDX-License-Identifier: MIT
"""
.commitguardrc loading and ignore-rule evaluation.

The ignore configuration is best effort: a missing file yields the default
(empty) configuration, and a malformed one is logged and never blocks the git
operation being guarded.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

import yaml

from ..core.exceptions import ConfigParseError, ContentReadError
from ..git.addition import Addition, path_matches

log = logging.getLogger(__name__)

DEFAULT_RC_FILENAME = ".commitguardrc"

RepoReader = Callable[[str], bytes]


@dataclass(frozen=True)
class FileIgnoreConfig:
    """One ``fileignoreconfig`` entry."""

    filename: str
    checksum: str = ""
    ignore_detectors: Tuple[str, ...] = ()

    def applies_to(self, detector_name: Optional[str]) -> bool:
        if not self.ignore_detectors or detector_name is None:
            return True
        return detector_name in self.ignore_detectors


@dataclass(frozen=True)
class IgnoreConfig:
    """Parsed rule set of a repository's .commitguardrc."""

    file_ignores: Tuple[FileIgnoreConfig, ...] = ()
    scope_names: Tuple[str, ...] = ()
    custom_patterns: Tuple[Pattern[str], ...] = ()
    allowed_patterns: Tuple[Pattern[str], ...] = ()
    detector_settings: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def is_addition_ignored(self, addition: Addition, detector_name: str) -> bool:
        """Path ignores: entries without a checksum, blanket or detector-qualified."""
        for entry in self.file_ignores:
            if entry.checksum:
                continue
            if addition.matches(entry.filename) and entry.applies_to(detector_name):
                return True
        return False

    def is_checksum_ignored(self, checksum: str, path: str, detector_name: Optional[str] = None) -> bool:
        """Checksum ignores: the entry's pattern must match *path* and its checksum *checksum*."""
        for entry in self.file_ignores:
            if not entry.checksum or entry.checksum != checksum:
                continue
            if path_matches(path, entry.filename) and entry.applies_to(detector_name):
                return True
        return False

    def has_checksum_entry_for(self, path: str) -> bool:
        return any(e.checksum and path_matches(path, e.filename) for e in self.file_ignores)

    def is_ignored(self, addition: Addition, detector_name: str) -> bool:
        """Would a finding of *detector_name* on *addition* be suppressed?"""
        if self.is_addition_ignored(addition, detector_name):
            return True
        if not self.has_checksum_entry_for(addition.path):
            return False
        try:
            checksum = addition.checksum()
        except ContentReadError as e:
            log.warning("Cannot checksum %s, checksum ignores not applied: %s", addition.path, e)
            return False
        return self.is_checksum_ignored(checksum, addition.path, detector_name)

    def is_allowed(self, text: str) -> bool:
        """True if *text* matches one of the ``allowed_patterns``."""
        return any(p.search(text) for p in self.allowed_patterns)

    def settings_for(self, detector_name: str) -> Dict[str, Any]:
        return dict(self.detector_settings.get(detector_name) or {})


def read_config_from_rc_file(reader: RepoReader, filename: str = DEFAULT_RC_FILENAME) -> IgnoreConfig:
    """
    Read and parse the rc file through *reader*.

    Args:
        reader: callable returning the raw bytes of a repository file, or
            empty bytes when the file does not exist
        filename: name of the rc file at the repository root

    Returns:
        The parsed IgnoreConfig; the default configuration if the file is
        absent or cannot be parsed at all.
    """
    try:
        raw = reader(filename)
    except OSError as e:
        log.warning("Unable to read %s: %s", filename, e)
        return IgnoreConfig()
    if not raw:
        return IgnoreConfig()
    try:
        return parse_config(raw, filename)
    except ConfigParseError as e:
        log.warning("Ignoring %s: %s", filename, e)
        return IgnoreConfig()


def parse_config(raw: bytes, filename: str = DEFAULT_RC_FILENAME) -> IgnoreConfig:
    """
    Parse rc file content.

    Raises:
        ConfigParseError: if the document is not valid YAML or not a mapping.
            Malformed individual entries are logged and skipped instead.
    """
    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse config file: {e}", config_path=filename)

    if doc is None:
        return IgnoreConfig()
    if not isinstance(doc, dict):
        raise ConfigParseError("Config must be a dictionary", config_path=filename)

    return IgnoreConfig(
        file_ignores=tuple(_parse_file_ignores(doc.get("fileignoreconfig"), filename)),
        scope_names=tuple(_parse_scopes(doc.get("scopeconfig"), filename)),
        custom_patterns=tuple(_parse_patterns(doc.get("custom_patterns"), filename, "custom_patterns")),
        allowed_patterns=tuple(_parse_patterns(doc.get("allowed_patterns"), filename, "allowed_patterns")),
        detector_settings=_parse_detector_settings(doc.get("detectors"), filename),
    )


def _section_list(value: Any, filename: str, section: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        log.warning("%s", ConfigParseError(f"{section} must be a list", config_path=filename, section=section))
        return []
    return value


def _parse_file_ignores(value: Any, filename: str) -> List[FileIgnoreConfig]:
    entries = []
    for item in _section_list(value, filename, "fileignoreconfig"):
        if not isinstance(item, dict) or not isinstance(item.get("filename"), str) or not item["filename"]:
            log.warning(
                "%s",
                ConfigParseError(f"Skipping entry without filename: {item!r}", config_path=filename, section="fileignoreconfig"),
            )
            continue
        detectors = item.get("ignore_detectors") or []
        if isinstance(detectors, str):
            detectors = [detectors]
        entries.append(
            FileIgnoreConfig(
                filename=item["filename"],
                checksum=str(item.get("checksum") or ""),
                ignore_detectors=tuple(str(d) for d in detectors),
            )
        )
    return entries


def _parse_scopes(value: Any, filename: str) -> List[str]:
    names = []
    for item in _section_list(value, filename, "scopeconfig"):
        name = item.get("scope") if isinstance(item, dict) else item
        if not isinstance(name, str) or not name:
            log.warning("%s", ConfigParseError(f"Skipping scope entry: {item!r}", config_path=filename, section="scopeconfig"))
            continue
        if name not in names:
            names.append(name)
    return names


def _parse_patterns(value: Any, filename: str, section: str) -> List[Pattern[str]]:
    compiled = []
    for item in _section_list(value, filename, section):
        if isinstance(item, dict):
            item = item.get("pattern")
        if not isinstance(item, str) or not item:
            log.warning("%s", ConfigParseError(f"Skipping pattern: {item!r}", config_path=filename, section=section))
            continue
        try:
            compiled.append(re.compile(item))
        except re.error as e:
            log.warning("%s", ConfigParseError(f"Invalid regex {item!r}: {e}", config_path=filename, section=section))
    return compiled


def _parse_detector_settings(value: Any, filename: str) -> Dict[str, Dict[str, Any]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        log.warning("%s", ConfigParseError("detectors must be a dictionary", config_path=filename, section="detectors"))
        return {}
    return {str(k): dict(v) for k, v in value.items() if isinstance(v, dict)}
