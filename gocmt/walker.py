"""
Declaration walker: finds documentable declarations and applies the comment
synthesizer to each of them.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Set

from .comment_index import CommentIndex
from .model import DeclKind, DeclNode, SourceTree, is_exported
from .synthesizer import Action, synthesize
from .template import Template

logger = logging.getLogger(__name__)


class DeclarationWalker:
    """
    Depth-first walk over the declaration tree.

    Rules per node kind:
      - FUNCTION_DECL: exported and not shadowed
      - LOCAL_DECL_MARKER: shadows the declaration it wraps
      - VALUE_GROUP: every exported entry when parenthesized and
        per-entry comments are on, otherwise the group keyed by its first entry
      - TYPE_DECL: first name exported and not shadowed
    """

    def __init__(self, tree: SourceTree, index: CommentIndex, template: Template, *, paren_comment: bool = False):
        self.tree = tree
        self.index = index
        self.template = template
        self.paren_comment = paren_comment
        self.shadowed: Set[int] = set()
        self.actions: Counter[Action] = Counter()

    def walk(self) -> None:
        stack = [self.tree.root.index]
        while stack:
            node = self.tree.node(stack.pop())
            self._dispatch(node)
            stack.extend(reversed(node.children))

    def _dispatch(self, node: DeclNode) -> None:
        kind = node.kind
        if kind == DeclKind.FUNCTION_DECL:
            self._visit_function(node)
        elif kind == DeclKind.LOCAL_DECL_MARKER:
            self.shadowed.update(node.children)
        elif kind == DeclKind.VALUE_GROUP:
            self._visit_value_group(node)
        elif kind == DeclKind.TYPE_DECL:
            self._visit_type(node)
        # VALUE_ENTRY is handled by its group; OTHER carries no docs

    def _visit_function(self, node: DeclNode) -> None:
        if node.index in self.shadowed or not is_exported(node.name):
            return
        self._apply(node, node.name)

    def _visit_value_group(self, node: DeclNode) -> None:
        if node.index in self.shadowed:
            return

        if node.parenthesized and self.paren_comment:
            for entry_index in node.children:
                entry = self.tree.node(entry_index)
                if is_exported(entry.name):
                    self._apply(entry, entry.name, indented=True)
            return

        # empty var/const block
        if not node.children:
            return

        first = self.tree.node(node.children[0])
        if not is_exported(first.name):
            return
        self._apply(node, first.name)

    def _visit_type(self, node: DeclNode) -> None:
        if not node.names or node.index in self.shadowed or not is_exported(node.name):
            return
        self._apply(node, node.name)

    def _apply(self, node: DeclNode, name: str, *, indented: bool = False) -> None:
        result = synthesize(node.doc, name, node.start, self.template, indented=indented)
        self.actions[result.action] += 1
        if not result.changed:
            return

        logger.debug("%s doc comment of %s (line %d)", result.action.value, name, node.line + 1)
        self.index.put_doc(node.index, node.doc, result.doc)
        node.doc = result.doc


__all__ = ["DeclarationWalker"]
