"""
Human readable and file based reports over DetectionResults.

All snippets in findings are already redacted by the detectors.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .. import __version__
from ..core.findings import Finding, Severity
from ..core.results import DetectionResults

REPORT_DIRNAME = "commitguard_report"


def _table(findings: List[Finding]) -> List[str]:
    lines = []
    current = None
    for finding in findings:
        if finding.path != current:
            current = finding.path
            lines.append(f"\n  {current}")
        lines.append(f"    [{finding.severity.value.upper()}] {finding.detector}: {finding.message}")
        for hint in finding.hints[:5]:
            lines.append(f"        - {hint}")
        if len(finding.hints) > 5:
            lines.append(f"        ... and {len(finding.hints) - 5} more")
    return lines


def render_report(results: DetectionResults) -> str:
    """Failures followed by ignored findings, grouped by file."""
    out = ["\n🔍 commitguard Results", "=" * 50]
    failures = results.findings(severity=Severity.FAIL)
    ignores = results.findings(severity=Severity.IGNORE)

    if failures:
        out.append(f"\n❌ Failures ({len(failures)}):")
        out.extend(_table(failures))
    if ignores:
        out.append(f"\nIgnored by .commitguardrc ({len(ignores)}):")
        out.extend(_table(ignores))
    if failures:
        out.append(
            "\nIf you are absolutely sure that you want to ignore the above files,"
            " add them to .commitguardrc (see `commitguard checksum`)."
        )
    return "\n".join(out)


def render_warnings(results: DetectionResults) -> str:
    warnings = results.findings(severity=Severity.WARN)
    out = [f"\n⚠️  Warnings ({len(warnings)}):"]
    out.extend(_table(warnings))
    return "\n".join(out)


def write_report(results: DetectionResults, directory: str) -> str:
    """Write ``report.json`` under ``<directory>/commitguard_report`` and return that folder."""
    report_dir = Path(directory) / REPORT_DIRNAME
    report_dir.mkdir(parents=True, exist_ok=True)
    payload = {"version": __version__, **results.to_dict()}
    (report_dir / "report.json").write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return str(report_dir)
