"""
Serialization of a rewritten SourceTree back to Go source text.

Only comment text is touched: new doc comments are inserted as whole lines,
rewritten comments are replaced in place. New lines use the line ending of
the file (CRLF files stay CRLF).
"""

from __future__ import annotations

import logging
from typing import List

from .model import Comment, CommentGroup, SourceTree
from .range_edits import RangeEditor

logger = logging.getLogger(__name__)


def _lines(comments: List[Comment], indent: str, newline: str) -> str:
    return "".join(f"{indent or c.indent}{c.text.rstrip()}{newline}" for c in comments)


def _keep_cr(tree: SourceTree, start: int, end: int) -> str:
    # Line comment tokens end before "\n" but include a CRLF file's "\r"
    return "\r" if tree.text[start:end].endswith("\r") else ""


class _GroupRenderer:

    def __init__(self, tree: SourceTree, editor: RangeEditor):
        self.tree = tree
        self.editor = editor
        self.newline = "\r\n" if "\r\n" in tree.text else "\n"

    def render(self, group: CommentGroup) -> None:
        if group.replaces is not None:
            self._replace(group)
            return

        pending: List[Comment] = []
        for comment in group.comments:
            if comment.synthetic:
                pending.append(comment)
                continue
            if pending:
                self.editor.add_insertion(
                    self.tree.line_start(comment.start),
                    _lines(pending, comment.indent, self.newline),
                    "comment.prepended",
                )
                pending = []
            if comment.text != self.tree.text[comment.start:comment.end]:
                text = comment.text.rstrip() + _keep_cr(self.tree, comment.start, comment.end)
                self.editor.add_replacement(comment.start, comment.end, text, "comment.rewritten")

        if pending:
            self._insert(pending)

    def _replace(self, group: CommentGroup) -> None:
        start, end = group.replaces
        indent = self.tree.indent_at(start)
        text = (self.newline + indent).join(c.text.rstrip() for c in group.comments)
        self.editor.add_replacement(start, end, text + _keep_cr(self.tree, start, end), "comment.replaced")

    def _insert(self, pending: List[Comment]) -> None:
        tree = self.tree
        anchor = pending[0].start
        line_start = tree.line_start(anchor)

        if not tree.text[line_start:anchor].strip():
            self.editor.add_insertion(line_start, _lines(pending, tree.indent_at(anchor), self.newline), "comment.inserted")
            return

        # Code precedes the declaration on its line (`var (A = 1)`): move the
        # declaration to a line of its own so the comment stays attached to it
        gap_start = anchor
        while gap_start > line_start and tree.text[gap_start - 1] in " \t":
            gap_start -= 1
        code_indent = tree.text[line_start:]
        code_indent = code_indent[:len(code_indent) - len(code_indent.lstrip(" \t"))]
        indent = code_indent + pending[0].indent
        text = self.newline + _lines(pending, indent, self.newline) + indent
        self.editor.add_replacement(gap_start, anchor, text, "comment.inserted")


def render_source(tree: SourceTree) -> str:
    """Render the tree's current comment set into its source text."""
    editor = RangeEditor(tree.text)
    renderer = _GroupRenderer(tree, editor)
    for group in tree.comments:
        renderer.render(group)

    text, stats = editor.apply_edits()
    logger.debug("Rendered source: %s", stats)
    return text


__all__ = ["render_source"]
