"""
Go parser collaborator.

Parses Go source with Tree-sitter and projects the concrete syntax tree onto
the declaration model used by the comment engine: a flat list of declaration
nodes plus all comment groups, with doc comments attached by position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from tree_sitter import Language

from .errors import ParseFailure
from .model import Comment, CommentGroup, DeclKind, DeclNode, SourceTree
from .tree_sitter_support import Node, TreeSitterDocument

logger = logging.getLogger(__name__)

FUNCTION_TYPES = {"function_declaration", "method_declaration"}
VALUE_TYPES = {"var_declaration", "const_declaration"}
VALUE_SPEC_TYPES = {"var_spec", "const_spec"}
TYPE_SPEC_TYPES = {"type_spec", "type_alias"}
# Statement terminators; Go lets a source omit them before a closing ")" or "}"
TERMINATOR_TYPES = {";", "\n", "\0", "source_file_token1"}


class GoDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_go as tsgo
        return Language(tsgo.language())

    def get_query_definitions(self) -> Dict[str, str]:
        from .queries import QUERIES
        return QUERIES

    def is_tolerated_missing(self, node: Node) -> bool:
        if node.type not in TERMINATOR_TYPES:
            return False
        rest = self._text_bytes[node.end_byte:].lstrip()
        return rest[:1] in (b")", b"}")


@dataclass
class _CommentToken:
    comment: Comment
    start_row: int
    end_row: int
    starts_line: bool


class GoTreeBuilder:
    """Builds a SourceTree from a parsed GoDocument."""

    def __init__(self, doc: GoDocument):
        self.doc = doc
        self.text = doc.text
        self.nodes: List[DeclNode] = []

    def build(self) -> SourceTree:
        root = self._new_node(DeclKind.OTHER, self.doc.root_node, parent=None)
        self._visit_children(self.doc.root_node, root.index, local=False)

        tokens = self._collect_comments()
        groups = self._group_comments(tokens)
        self._attach_docs(groups)

        return SourceTree(
            text=self.text,
            nodes=self.nodes,
            comments=[group for group, _ in groups],
        )

    # ---------------------------- declarations ---------------------------- #

    def _new_node(self, kind: DeclKind, ts_node: Node, parent: Optional[int], names: Optional[List[str]] = None) -> DeclNode:
        node = DeclNode(
            index=len(self.nodes),
            kind=kind,
            names=names or [],
            start=self.doc.byte_to_char_position(ts_node.start_byte),
            line=ts_node.start_point[0],
            parent=parent,
        )
        self.nodes.append(node)
        if parent is not None:
            self.nodes[parent].children.append(node.index)
        return node

    def _visit_children(self, ts_node: Node, parent: int, local: bool) -> None:
        for child in ts_node.children:
            self._visit(child, parent, local)

    def _visit(self, ts_node: Node, parent: int, local: bool) -> None:
        node_type = ts_node.type

        if node_type in FUNCTION_TYPES:
            name_node = ts_node.child_by_field_name("name")
            names = [self.doc.get_node_text(name_node)] if name_node else []
            func = self._new_node(DeclKind.FUNCTION_DECL, ts_node, parent, names)
            self._visit_children(ts_node, func.index, local)

        elif node_type in VALUE_TYPES or node_type == "type_declaration":
            owner = parent
            if local:
                # Declaration statement inside a function body
                owner = self._new_node(DeclKind.LOCAL_DECL_MARKER, ts_node, parent).index
            if node_type in VALUE_TYPES:
                self._visit_value_group(ts_node, owner, local)
            else:
                self._visit_type_decl(ts_node, owner, local)

        elif node_type == "block":
            self._visit_children(ts_node, parent, local=True)

        else:
            self._visit_children(ts_node, parent, local)

    def _visit_value_group(self, ts_node: Node, parent: int, local: bool) -> None:
        specs = list(self._iter_specs(ts_node, VALUE_SPEC_TYPES))
        group = self._new_node(DeclKind.VALUE_GROUP, ts_node, parent)
        group.parenthesized = self._is_parenthesized(ts_node)

        for spec in specs:
            entry = self._new_node(DeclKind.VALUE_ENTRY, spec, group.index, self._spec_names(spec))
            self._visit_children(spec, entry.index, local)

        if specs:
            group.names = list(self.nodes[group.children[0]].names)

    def _visit_type_decl(self, ts_node: Node, parent: int, local: bool) -> None:
        specs = list(self._iter_specs(ts_node, TYPE_SPEC_TYPES))
        names = [name for spec in specs for name in self._spec_names(spec)]
        decl = self._new_node(DeclKind.TYPE_DECL, ts_node, parent, names)
        decl.parenthesized = self._is_parenthesized(ts_node)
        for spec in specs:
            self._visit_children(spec, decl.index, local)

    @staticmethod
    def _iter_specs(ts_node: Node, spec_types: set[str]) -> Iterator[Node]:
        for child in ts_node.children:
            if child.type in spec_types:
                yield child
            elif child.type.endswith("_spec_list"):
                for grandchild in child.children:
                    if grandchild.type in spec_types:
                        yield grandchild

    @staticmethod
    def _is_parenthesized(ts_node: Node) -> bool:
        for child in ts_node.children:
            if child.type == "(":
                return True
            if child.type.endswith("_spec_list") and any(gc.type == "(" for gc in child.children):
                return True
        return False

    def _spec_names(self, spec: Node) -> List[str]:
        return [self.doc.get_node_text(n) for n in spec.children_by_field_name("name")]

    # ------------------------------ comments ------------------------------ #

    def _starts_line(self, pos: int) -> bool:
        line_start = self.text.rfind("\n", 0, pos) + 1
        return not self.text[line_start:pos].strip()

    def _collect_comments(self) -> List[_CommentToken]:
        tokens = []
        for node, _ in self.doc.query("comments"):
            start, end = self.doc.get_node_range(node)
            starts_line = self._starts_line(start)
            line_start = self.text.rfind("\n", 0, start) + 1
            tokens.append(_CommentToken(
                comment=Comment(
                    text=self.text[start:end],
                    start=start,
                    end=end,
                    indent=self.text[line_start:start] if starts_line else "",
                ),
                start_row=node.start_point[0],
                end_row=node.end_point[0],
                starts_line=starts_line,
            ))
        return tokens

    def _group_comments(self, tokens: List[_CommentToken]) -> List[tuple[CommentGroup, List[_CommentToken]]]:
        """
        Group consecutive comments that form a logical block.

        Comments join a group when only whitespace separates them and there is
        no blank line between. A group that starts after code on the same line
        (trailing comment) only continues on that same line.
        """
        groups: List[tuple[CommentGroup, List[_CommentToken]]] = []
        current: List[_CommentToken] = []

        for token in tokens:
            if current:
                prev = current[-1]
                between = self.text[prev.comment.end:token.comment.start]
                max_row = prev.end_row if not current[0].starts_line else prev.end_row + 1
                if between.strip() == "" and token.start_row <= max_row:
                    current.append(token)
                    continue
                groups.append((CommentGroup([t.comment for t in current]), current))
            current = [token]

        if current:
            groups.append((CommentGroup([t.comment for t in current]), current))

        return groups

    def _attach_docs(self, groups: List[tuple[CommentGroup, List[_CommentToken]]]) -> None:
        """Attach each lead comment group to the declaration starting on the next line."""
        lead_by_end_row: Dict[int, CommentGroup] = {}
        for group, tokens in groups:
            if tokens[0].starts_line:
                lead_by_end_row[tokens[-1].end_row] = group

        claimed = set()
        for node in self.nodes:
            if not self._can_have_doc(node) or not self._starts_line(node.start):
                continue
            group = lead_by_end_row.get(node.line - 1)
            if group is None or id(group) in claimed:
                continue
            node.doc = group
            claimed.add(id(group))

    def _can_have_doc(self, node: DeclNode) -> bool:
        if node.kind in (DeclKind.FUNCTION_DECL, DeclKind.VALUE_GROUP, DeclKind.TYPE_DECL):
            return True
        if node.kind == DeclKind.VALUE_ENTRY:
            return self.nodes[node.parent].parenthesized
        return False


def parse_source(text: str, *, path: Optional[Path] = None) -> SourceTree:
    """
    Parse Go source text into a SourceTree.

    Raises:
        ParseFailure: If the source contains syntax errors
    """
    doc = GoDocument(text)
    error = doc.first_error()
    if error is not None:
        line = error.start_point[0] + 1
        kind = f"missing {error.type}" if error.is_missing else "syntax error"
        raise ParseFailure(kind, path=path, line=line)

    tree = GoTreeBuilder(doc).build()
    logger.debug("Parsed %s: %d declaration nodes, %d comment groups",
                 path or "<source>", len(tree.nodes), len(tree.comments))
    return tree


__all__ = ["GoDocument", "GoTreeBuilder", "parse_source"]
