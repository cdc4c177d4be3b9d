"""
Comment synthesizer: decides whether a declaration's doc comment is acceptable
and produces the corrected comment group.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .model import Comment, CommentGroup
from .template import Template


class Action(enum.Enum):
    KEPT = "kept"
    INSERTED = "inserted"
    REPLACED = "replaced"
    PREPENDED = "prepended"
    REWRITTEN = "rewritten"


@dataclass(frozen=True)
class Synthesis:
    action: Action
    doc: Optional[CommentGroup]

    @property
    def changed(self) -> bool:
        return self.action is not Action.KEPT


def has_name_prefix(doc: CommentGroup, name: str) -> bool:
    """Check that the first line of the doc starts with `name` as a whole word."""
    first = doc.comments[0].text
    content = first[2:].lstrip() if first.startswith("//") else first
    if not content.startswith(name):
        return False
    return len(content) == len(name) or content[len(name)].isspace()


def synthesize(
    doc: Optional[CommentGroup],
    name: str,
    anchor: int,
    template: Template,
    *,
    indented: bool = False,
) -> Synthesis:
    """
    Apply the doc comment policy to one declaration.

    Args:
        doc: Existing doc comment group, if any
        name: Declaration name the doc must start with
        anchor: Source offset of the declaration
        template: Comment template
        indented: Use the indented template variant (entries of parenthesized groups)

    Returns:
        Synthesis with the action taken and the resulting doc group
    """
    # Missing doc, or a doc that only repeats the name
    if doc is None or doc.text().strip() == name:
        text = template.format(name, indented=indented)
        if doc is None:
            return Synthesis(Action.INSERTED, CommentGroup([Comment.synthesized(text, anchor)]))
        replacement = CommentGroup([Comment.synthesized(text, doc.start)], replaces=(doc.start, doc.end))
        return Synthesis(Action.REPLACED, replacement)

    if doc.is_line_comment() and not has_name_prefix(doc, name):
        return _modify_comment(doc, name, template)

    return Synthesis(Action.KEPT, doc)


def _modify_comment(doc: CommentGroup, name: str, template: Template) -> Synthesis:
    first = doc.comments[0]
    prefix = template.style.line_prefix

    if not first.text.startswith(prefix):
        # Directive-like first line (//nolint:...), keep it below a new line
        comment = Comment.synthesized(template.format(name), doc.start)
        comment.indent = first.indent
        doc.comments.insert(0, comment)
        return Synthesis(Action.PREPENDED, doc)

    first.text = template.rewrite_line(name, first.text[len(prefix):])
    return Synthesis(Action.REWRITTEN, doc)


__all__ = ["Action", "Synthesis", "synthesize", "has_name_prefix"]
