"""
Utilities for gocmt tests.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Optional

from gocmt.config import GocmtCfg
from gocmt.engine import ProcessResult, process_source
from gocmt.model import DeclKind, DeclNode, SourceTree
from gocmt.syntax import parse_source


def go(code: str) -> str:
    """Dedent inline Go source and make sure it ends with a newline."""
    return textwrap.dedent(code).lstrip("\n")


def run(code: str, **cfg) -> ProcessResult:
    """Process Go source with the given GocmtCfg fields."""
    return process_source(go(code), GocmtCfg(**cfg))


def tree_of(code: str) -> SourceTree:
    return parse_source(go(code))


def nodes_of(tree: SourceTree, kind: DeclKind) -> List[DeclNode]:
    return [n for n in tree.nodes if n.kind == kind]


def find(tree: SourceTree, kind: DeclKind, name: str) -> Optional[DeclNode]:
    for node in nodes_of(tree, kind):
        if node.name == name:
            return node
    return None


def write(p: Path, text: str) -> Path:
    """Write text to a file, creating parent directories when needed."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


__all__ = ["go", "run", "tree_of", "nodes_of", "find", "write"]
