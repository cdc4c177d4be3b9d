"""
Comment index: declaration index -> comment groups for one traversal pass.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .model import Comment, CommentGroup, SourceTree

logger = logging.getLogger(__name__)

ROOT_KEY = 0
PLACEHOLDER_TEXT = "// gocmt"


class CommentIndex:
    """
    Mapping from declaration index to the comment groups associated with it.

    Doc groups are keyed by the declaration they document; every other group
    (floating, trailing, inside bodies) is kept under the root key so that
    projecting the index back yields the complete comment set.
    """

    def __init__(self):
        self._groups: Dict[int, List[CommentGroup]] = {}
        self._placeholder: Optional[CommentGroup] = None

    @classmethod
    def build(cls, tree: SourceTree) -> CommentIndex:
        index = cls()

        if not tree.comments:
            # Keep the mapping non-empty for comment-free files
            index._placeholder = CommentGroup([Comment(PLACEHOLDER_TEXT, -1, -1, synthetic=True)])
            index._add(ROOT_KEY, index._placeholder)

        owners = {id(node.doc): node.index for node in tree.nodes if node.doc is not None}
        for group in tree.comments:
            index._add(owners.get(id(group), ROOT_KEY), group)

        return index

    def _add(self, key: int, group: CommentGroup) -> None:
        groups = self._groups.setdefault(key, [])
        if not any(g is group for g in groups):
            groups.append(group)

    def get(self, key: int) -> List[CommentGroup]:
        return list(self._groups.get(key, []))

    def put_doc(self, key: int, old: Optional[CommentGroup], new: Optional[CommentGroup]) -> None:
        """
        Record the doc group of a declaration.

        The previous doc group is dropped when it was replaced by a new group,
        so a declaration never owns two doc groups.
        """
        groups = self._groups.setdefault(key, [])
        if old is not None and old is not new:
            groups[:] = [g for g in groups if g is not old]
        if new is not None and not any(g is new for g in groups):
            groups.append(new)

    def groups(self) -> List[CommentGroup]:
        """All groups without the placeholder, in source order."""
        result = [
            group
            for groups in self._groups.values()
            for group in groups
            if group is not self._placeholder
        ]
        result.sort(key=lambda g: (g.start, not g.comments[0].synthetic))
        return result

    def project(self, tree: SourceTree) -> None:
        """Write the indexed comment groups back onto the tree and clear the index."""
        tree.comments = self.groups()
        logger.debug("Projected %d comment groups", len(tree.comments))
        self._groups.clear()
        self._placeholder = None


__all__ = ["CommentIndex", "ROOT_KEY"]
