# SPDX-License-Identifier: MIT
"""
commitguard - Command Line Interface

This CLI provides:
- commitguard version
- commitguard run --githook {pre-commit,pre-push}
- commitguard scan --report-dir <dir>  (every file version in the history)
- commitguard checksum <pattern> [<pattern> ...]
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .core.exceptions import GitCommandError


def main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="commitguard", description="Guard git commits and pushes against leaked secrets")
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)"
    )
    p.add_argument(
        "--workers",
        type=int,
        default=1,
        help="number of detector worker threads (default: 1)"
    )
    p.add_argument(
        "--scope-config",
        dest="scope_config",
        help="path to a YAML scope map overriding the built-in scopes"
    )

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    rp = sub.add_parser("run", help="validate the additions of a git hook")
    rp.add_argument(
        "--githook",
        choices=["pre-commit", "pre-push"],
        default="pre-push",
        help="hook being guarded (default: pre-push)"
    )

    sp = sub.add_parser("scan", help="scan every file version in the repository history")
    sp.add_argument(
        "--report-dir",
        dest="report_dir",
        default=".",
        help="directory to write the report folder into"
    )

    cp = sub.add_parser("checksum", help="suggest .commitguardrc checksum entries")
    cp.add_argument("patterns", nargs="+", help="file names or glob patterns")

    args = p.parse_args(argv)

    if args.version or args.cmd == "version":
        print(__version__)
        return 0

    logging.basicConfig(level=getattr(logging, args.log_level), format="[commitguard] %(levelname)s %(message)s")

    if args.cmd in ("run", "scan", "checksum"):
        try:
            return handle_command(args)
        except GitCommandError as e:
            print(f"GIT ERROR: {e}", file=sys.stderr)
            return 1

    p.print_help()
    return 0


def handle_command(args):
    """Build a Runner for the requested mode and run it."""
    from .detectors import default_chain
    from .git.repo import GitRepo
    from .ignore.scopes import load_scope_config
    from .runner import Runner

    repo = GitRepo.located_at(".")
    scope_map = None
    if args.scope_config:
        scope_map = load_scope_config(Path(args.scope_config).read_text(encoding="utf-8"))

    if args.cmd == "run" and args.githook == "pre-commit":
        additions = repo.staged_additions()
    elif args.cmd == "run":
        additions = pre_push_additions(repo, sys.stdin)
    elif args.cmd == "scan":
        additions = repo.history_additions()
    else:
        additions = repo.tracked_additions()

    runner = Runner(
        additions,
        reader=repo.read_repo_file_or_nothing,
        scope_map=scope_map,
        chain=default_chain(max_workers=args.workers),
    )

    if args.cmd == "checksum":
        return runner.run_checksum_calculator(args.patterns)
    if args.cmd == "scan":
        return runner.scan(args.report_dir)
    return runner.run_without_errors()


def pre_push_additions(repo, stream):
    """
    Collect additions from git's pre-push stdin.

    Each line reads ``<local ref> <local sha> <remote ref> <remote sha>``.
    Deleted refs are skipped; new refs are compared with the empty tree.
    """
    from .git.repo import ZERO_SHA

    additions = []
    seen = set()
    for line in stream:
        parts = line.split()
        if len(parts) != 4:
            continue
        _, local_sha, _, remote_sha = parts
        if local_sha == ZERO_SHA:
            continue
        for addition in repo.additions_between(remote_sha, local_sha):
            if addition.path not in seen:
                seen.add(addition.path)
                additions.append(addition)
    return additions


if __name__ == "__main__":
    raise SystemExit(main())
