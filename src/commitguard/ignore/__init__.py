"""Ignore rules (.commitguardrc) and scope filtering."""

from .config import FileIgnoreConfig, IgnoreConfig, read_config_from_rc_file
from .scopes import filter_by_scope, load_scope_config, resolve_scope_patterns

__all__ = [
    "FileIgnoreConfig",
    "IgnoreConfig",
    "read_config_from_rc_file",
    "filter_by_scope",
    "load_scope_config",
    "resolve_scope_patterns",
]
