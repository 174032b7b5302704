# SPDX-License-Identifier: MIT
"""
Scopes: named groups of path patterns excluded from scanning entirely.

The scope map is loaded once at the start of a run and passed down; nothing
here holds module-level state.
"""
from __future__ import annotations

import logging
from importlib import resources
from typing import Dict, Iterable, List, Optional

import yaml

from ..core.exceptions import ConfigParseError
from ..git.addition import Addition

log = logging.getLogger(__name__)

ScopeMap = Dict[str, List[str]]


def default_scope_text() -> str:
    return resources.files("commitguard").joinpath("data/scopes.yaml").read_text(encoding="utf-8")


def load_scope_config(text: Optional[str] = None) -> ScopeMap:
    """
    Parse a scope map (scope name -> list of path patterns).

    Args:
        text: YAML document; the packaged defaults when omitted

    Returns:
        The scope map; an empty map if the document cannot be parsed.
    """
    if text is None:
        text = default_scope_text()
    try:
        doc = yaml.safe_load(text)
        if doc is None:
            return {}
        if not isinstance(doc, dict):
            raise ConfigParseError("Scope config must be a dictionary", config_path="scopes.yaml")
    except (yaml.YAMLError, ConfigParseError) as e:
        log.warning("Unable to parse scope config: %s", e)
        return {}

    scopes: ScopeMap = {}
    for name, patterns in doc.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list):
            log.warning("Scope %r has no pattern list, skipping", name)
            continue
        scopes[str(name)] = [str(p) for p in patterns if p]
    return scopes


def resolve_scope_patterns(scope_names: Iterable[str], scope_map: ScopeMap) -> List[str]:
    """Flatten the patterns of the named scopes. Unknown scopes contribute nothing."""
    patterns: List[str] = []
    for name in scope_names:
        scope_patterns = scope_map.get(name)
        if not scope_patterns:
            log.info("Scope %r is not defined, ignoring", name)
            continue
        patterns.extend(scope_patterns)
    return patterns


def filter_by_scope(additions: Iterable[Addition], patterns: Iterable[str]) -> List[Addition]:
    """Keep the additions that match none of *patterns*, preserving order."""
    patterns = list(patterns)
    return [a for a in additions if not any(a.matches(p) for p in patterns)]
