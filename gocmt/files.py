"""
Go source file discovery.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

import pathspec

logger = logging.getLogger(__name__)


def iter_go_files(root: Path, exclude: Iterable[str] = ()) -> List[Path]:
    """
    Collect *.go files under `root` in a stable order.

    Args:
        root: Directory to scan
        exclude: gitwildmatch patterns, matched against paths relative to root

    Returns:
        Sorted list of file paths
    """
    spec = pathspec.PathSpec.from_lines("gitwildmatch", list(exclude))
    result = []
    for path in sorted(root.rglob("*.go")):
        if not path.is_file():
            continue
        rel = path.relative_to(root).as_posix()
        if spec.match_file(rel):
            logger.debug("Excluded %s", rel)
            continue
        result.append(path)
    return result


__all__ = ["iter_go_files"]
