"""
Runner: one validation run over a set of additions.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .checksum.calculator import ChecksumCalculator
from .core.results import DetectionResults
from .detectors import DetectorChain, default_chain
from .git.addition import Addition
from .ignore.config import DEFAULT_RC_FILENAME, RepoReader, read_config_from_rc_file
from .ignore.scopes import ScopeMap, filter_by_scope, load_scope_config, resolve_scope_patterns
from .report.render import render_report, render_warnings, write_report

log = logging.getLogger(__name__)

COMPLETED_SUCCESSFULLY = 0
COMPLETED_WITH_ERRORS = 1


def _read_nothing(path: str) -> bytes:
    return b""


class Runner:
    """Validates a set of additions and reports on them."""

    def __init__(
        self,
        additions: Iterable[Addition],
        reader: Optional[RepoReader] = None,
        scope_map: Optional[ScopeMap] = None,
        chain: Optional[DetectorChain] = None,
        rc_filename: str = DEFAULT_RC_FILENAME,
    ) -> None:
        self.additions: List[Addition] = list(additions)
        self.reader = reader or _read_nothing
        self.scope_map = scope_map
        self.chain = chain or default_chain()
        self.rc_filename = rc_filename
        self.results = DetectionResults()

    def run_without_errors(self) -> int:
        """Validate, print the report and return the exit status."""
        self.do_run()
        self.print_report()
        return self.exit_status()

    def scan(self, report_directory: str) -> int:
        """Validate and write a report file under *report_directory*."""
        self.do_run()
        reports_path = write_report(self.results, report_directory)
        print(f"\nPlease check '{reports_path}' folder for the commitguard scan report\n")
        return self.exit_status()

    def run_checksum_calculator(self, patterns: Iterable[str]) -> int:
        """Print a .commitguardrc suggestion; 0 only if there was something to print."""
        suggestion = ChecksumCalculator(patterns, self.additions).suggest_rc()
        if suggestion:
            print(suggestion, end="")
            return COMPLETED_SUCCESSFULLY
        return COMPLETED_WITH_ERRORS

    def additions_to_scan(self, ignore_config) -> List[Addition]:
        """Additions left after dropping the rc file itself and any excluded scopes."""
        additions = [a for a in self.additions if a.path != self.rc_filename]
        if not ignore_config.scope_names:
            return additions
        scope_map = self.scope_map if self.scope_map is not None else load_scope_config()
        patterns = resolve_scope_patterns(ignore_config.scope_names, scope_map)
        return filter_by_scope(additions, patterns)

    def do_run(self) -> DetectionResults:
        ignore_config = read_config_from_rc_file(self.reader, self.rc_filename)
        additions = self.additions_to_scan(ignore_config)
        log.info("Scanning %d of %d additions", len(additions), len(self.additions))
        return self.chain.test(additions, ignore_config, self.results)

    def print_report(self) -> None:
        if self.results.has_warnings():
            print(render_warnings(self.results))
        if self.results.has_ignores() or self.results.has_failures():
            print(render_report(self.results))

    def exit_status(self) -> int:
        if self.results.has_failures():
            return COMPLETED_WITH_ERRORS
        return COMPLETED_SUCCESSFULLY
