"""
Comment synthesis engine.

annotate_tree() is the core pass over an already parsed file. process_source()
and process_file() wrap it with the parse and render collaborators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .comment_index import CommentIndex
from .config import GocmtCfg
from .detector import comment_signature, is_modified
from .errors import ParseFailure
from .model import SourceTree
from .render import render_source
from .syntax import parse_source
from .walker import DeclarationWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnotateResult:
    """Outcome of one pass: modification verdict and per-action counters."""
    modified: bool
    actions: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessResult:
    text: str
    modified: bool
    actions: Dict[str, int] = field(default_factory=dict)


def annotate_tree(tree: SourceTree, cfg: Optional[GocmtCfg] = None) -> AnnotateResult:
    """
    Ensure every exported declaration of the tree carries a doc comment.

    The tree's comment groups are rewritten in place. The template is checked
    before anything is touched, so a TemplateFormatError leaves the tree as it was.

    Args:
        tree: Parsed source file
        cfg: Template and per-entry settings

    Returns:
        AnnotateResult with the modification verdict
    """
    cfg = cfg or GocmtCfg()
    template = cfg.make_template()

    before = comment_signature(tree.comments)

    index = CommentIndex.build(tree)
    walker = DeclarationWalker(tree, index, template, paren_comment=cfg.paren_comment)
    walker.walk()
    index.project(tree)

    after = comment_signature(tree.comments)
    modified = is_modified(before, after)

    actions = {action.value: count for action, count in walker.actions.items()}
    return AnnotateResult(modified=modified, actions=actions)


def process_source(text: str, cfg: Optional[GocmtCfg] = None, *, path: Optional[Path] = None) -> ProcessResult:
    """
    Parse Go source, synthesize missing doc comments and render the result.

    Unmodified sources are returned verbatim.

    Raises:
        ParseFailure: If the source cannot be parsed
        TemplateFormatError: If the template is invalid
    """
    cfg = cfg or GocmtCfg()
    # Fail on a bad template before parsing
    cfg.make_template()

    tree = parse_source(text, path=path)
    result = annotate_tree(tree, cfg)
    if not result.modified:
        return ProcessResult(text=text, modified=False, actions=result.actions)

    return ProcessResult(text=render_source(tree), modified=True, actions=result.actions)


def process_file(path: Path, cfg: Optional[GocmtCfg] = None, *, in_place: bool = False) -> ProcessResult:
    """
    Process one Go file; write it back only when in_place and modified.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"not valid UTF-8 ({e.reason})", path=path) from e
    result = process_source(text, cfg, path=path)

    if result.modified and in_place:
        path.write_bytes(result.text.encode("utf-8"))
        logger.info("Updated %s", path)
    elif result.modified:
        logger.debug("%s needs doc comments", path)

    return result


__all__ = ["AnnotateResult", "ProcessResult", "annotate_tree", "process_source", "process_file"]
