from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .engine import process_file
from .errors import GocmtUserError
from .files import iter_go_files
from .report import FileReport, RunReport
from .version import tool_version

logger = logging.getLogger("gocmt")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("GOCMT_DEBUG") else logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gocmt",
        description="Add missing doc comments to exported Go declarations",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("files", nargs="*", type=Path, help="Go files to process")
    p.add_argument("-d", "--dir", type=Path, help="directory to process recursively")
    p.add_argument("-i", "--in-place", action="store_true", help="rewrite files in place")
    p.add_argument(
        "-t", "--template",
        default=None,
        help="comment template appended after '// <Name> ' (default: '...')",
    )
    p.add_argument(
        "-p", "--paren-comment",
        action="store_true",
        default=None,
        help="comment every exported entry inside var (...) / const (...) groups",
    )
    output = p.add_mutually_exclusive_group()
    output.add_argument("-l", "--list", action="store_true", help="print paths of files whose comments would change")
    output.add_argument("--json", action="store_true", help="print a JSON report instead of sources")
    p.add_argument("--config", type=Path, help="YAML config file (default: .gocmt.yml in the directory)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    return p


def _collect_targets(ns: argparse.Namespace, exclude: List[str]) -> List[Path]:
    targets: List[Path] = list(ns.files)
    if ns.dir is not None:
        if not ns.dir.is_dir():
            raise GocmtUserError(f"Directory not found: {ns.dir}")
        targets.extend(iter_go_files(ns.dir, exclude))
    return targets


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    if not ns.files and ns.dir is None:
        parser.error("no input: pass Go files or -d DIR")

    _setup_logging(ns.verbose)

    try:
        cfg = load_config(ns.config, root=ns.dir)
        cfg = cfg.with_overrides(template=ns.template, paren_comment=ns.paren_comment)
        cfg.make_template()
        targets = _collect_targets(ns, cfg.exclude)
    except GocmtUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    report = RunReport(version=tool_version())
    for path in targets:
        entry = FileReport(path=str(path))
        report.files.append(entry)
        try:
            result = process_file(path, cfg, in_place=ns.in_place)
        except GocmtUserError as e:
            entry.error = str(e)
            logger.error("%s", e)
            continue
        except OSError as e:
            entry.error = f"{path}: {e.strerror or e}"
            logger.error("%s", entry.error)
            continue

        entry.modified = result.modified
        entry.actions = result.actions

        if ns.list:
            if result.modified:
                sys.stdout.write(f"{path}\n")
        elif not ns.json and not ns.in_place:
            sys.stdout.write(result.text)

    if ns.json:
        sys.stdout.write(report.model_dump_json(indent=2) + "\n")

    logger.debug("%d file(s) processed, %d modified, %d failed",
                  len(report.files), report.modified_count, report.failed_count)
    return 2 if report.failed_count else 0


if __name__ == "__main__":
    raise SystemExit(main())
