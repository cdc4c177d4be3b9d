"""
Doc comment templates.
"""

from __future__ import annotations

from .comment_style import CommentStyle, GO_STYLE_COMMENTS
from .errors import TemplateFormatError

DEFAULT_TEMPLATE = "..."


class Template:
    """
    Doc comment template: the style's doc prefix (which takes the declaration
    name) followed by the user-supplied suffix.

    The indented variant is used for entries of parenthesized groups and only
    differs by the indentation in front of the comment marker.
    """

    def __init__(self, template: str = DEFAULT_TEMPLATE, style: CommentStyle = GO_STYLE_COMMENTS):
        self.raw = template
        self.style = style
        self.pattern = style.doc_base + template
        self.indented_pattern = self.pattern.replace(style.doc_base, style.doc_indented_base, 1)
        self._validate()

    def _validate(self) -> None:
        try:
            self.pattern % "Name"
        except (TypeError, ValueError, KeyError) as e:
            raise TemplateFormatError(
                f"Invalid comment template {self.raw!r}: expected exactly one name placeholder ({e})"
            ) from e

    def format(self, name: str, *, indented: bool = False) -> str:
        pattern = self.indented_pattern if indented else self.pattern
        return pattern % name

    def rewrite_line(self, name: str, rest: str) -> str:
        """Put the name in front of the remaining text of an existing line."""
        return (self.style.doc_base + "%s") % (name, rest)

    def __repr__(self) -> str:
        return f"Template({self.raw!r})"


__all__ = ["Template", "DEFAULT_TEMPLATE"]
