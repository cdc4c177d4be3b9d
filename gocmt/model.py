"""
Source model for comment synthesis: declarations, comments and comment groups.

The model is a flat, index-addressed view of one Go file. Declaration nodes get
stable integer indices in depth-first order, so side tables never key on
object identity.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class DeclKind(enum.Enum):
    FUNCTION_DECL = "function_decl"
    LOCAL_DECL_MARKER = "local_decl_marker"
    VALUE_GROUP = "value_group"
    VALUE_ENTRY = "value_entry"
    TYPE_DECL = "type_decl"
    OTHER = "other"


# Directives like //go:generate or //nolint:errcheck are not part of the doc text
_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")


def is_directive(content: str) -> bool:
    """Check whether comment content (after '//') is a tool directive."""
    if content.startswith(_DIRECTIVE_PREFIXES):
        return True
    colon = content.find(":")
    if colon <= 0 or colon + 1 >= len(content):
        return False
    for i in range(colon + 2):
        if i == colon:
            continue
        ch = content[i]
        if not ("a" <= ch <= "z" or "0" <= ch <= "9"):
            return False
    return True


def is_exported(name: str) -> bool:
    """Go convention: identifiers starting with an uppercase letter are exported."""
    return bool(name) and name[0].isupper()


@dataclass(eq=False)
class Comment:
    """
    Single comment token.

    `start`/`end` are character offsets in the original source. Synthetic
    comments carry the offset they are anchored to and `end == start`.
    """
    text: str
    start: int
    end: int
    indent: str = ""
    synthetic: bool = False

    @classmethod
    def synthesized(cls, text: str, anchor: int) -> Comment:
        """Create a synthetic comment; leading whitespace of `text` becomes its indent."""
        body = text.lstrip(" \t")
        return cls(
            text=body.rstrip(),
            start=anchor,
            end=anchor,
            indent=text[:len(text) - len(body)],
            synthetic=True,
        )


@dataclass(eq=False)
class CommentGroup:
    """Sequence of comments with no other tokens and no blank lines between them."""
    comments: List[Comment]
    # Source span of a trivial doc this group replaced
    replaces: Optional[Tuple[int, int]] = None

    @property
    def start(self) -> int:
        return self.comments[0].start

    @property
    def end(self) -> int:
        return self.comments[-1].end

    def is_line_comment(self) -> bool:
        return self.comments[0].text.startswith("//")

    def text(self) -> str:
        """
        Text of the comment group without markers, as Go's CommentGroup.Text().

        Comment markers, the first space of a line comment, directives,
        trailing whitespace on each line and leading/trailing blank lines are
        removed; runs of blank lines collapse into one.
        """
        lines: List[str] = []
        for comment in self.comments:
            c = comment.text
            if c.startswith("//"):
                c = c[2:]
                if c.startswith(" "):
                    c = c[1:]
                elif c and is_directive(c):
                    continue
            elif c.startswith("/*"):
                c = c[2:-2]
            for line in c.split("\n"):
                lines.append(line.rstrip())

        result: List[str] = []
        for line in lines:
            if line or (result and result[-1]):
                result.append(line)
        if result and result[-1]:
            result.append("")
        return "\n".join(result)


@dataclass(eq=False)
class DeclNode:
    """Node of the declaration tree."""
    index: int
    kind: DeclKind
    names: List[str] = field(default_factory=list)
    start: int = 0
    line: int = 0
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    parenthesized: bool = False
    doc: Optional[CommentGroup] = None

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""


@dataclass
class SourceTree:
    """Parsed Go file: declaration nodes (root at index 0) and all comment groups."""
    text: str
    nodes: List[DeclNode]
    comments: List[CommentGroup]

    @property
    def root(self) -> DeclNode:
        return self.nodes[0]

    def node(self, index: int) -> DeclNode:
        return self.nodes[index]

    def line_start(self, pos: int) -> int:
        """Character offset of the first character on the line containing `pos`."""
        return self.text.rfind("\n", 0, pos) + 1

    def indent_at(self, pos: int) -> str:
        """Whitespace between the line start and `pos` ('' when code precedes it)."""
        prefix = self.text[self.line_start(pos):pos]
        return prefix if not prefix.strip() else ""


__all__ = [
    "DeclKind",
    "Comment",
    "CommentGroup",
    "DeclNode",
    "SourceTree",
    "is_directive",
    "is_exported",
]
