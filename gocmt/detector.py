"""
Modification detector: compares the text of all comment groups before and
after a pass.
"""

from __future__ import annotations

from typing import Iterable

from .model import CommentGroup


def comment_signature(groups: Iterable[CommentGroup]) -> str:
    return "".join(group.text() for group in groups)


def is_modified(before: str, after: str) -> bool:
    return before != after


__all__ = ["comment_signature", "is_modified"]
