from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommentStyle:
    """Comment style description for a language."""

    single_line: str
    """Single-line comment marker (e.g., '//' or '#')."""

    multi_line: tuple[str, str]
    """Multi-line comment markers (e.g., ('/*', '*/'))."""

    doc_base: str
    """Format prefix of a synthesized doc line; takes the declaration name."""

    indent: str
    """Indentation used for docs of entries inside a parenthesized group."""

    @property
    def doc_indented_base(self) -> str:
        return self.indent + self.doc_base

    @property
    def line_prefix(self) -> str:
        """Single-line marker followed by the conventional space."""
        return self.single_line + " "


# Go doc comments are plain // comments placed right before the declaration
GO_STYLE_COMMENTS = CommentStyle(
    single_line="//",
    multi_line=("/*", "*/"),
    doc_base="// %s ",
    indent="\t",
)
