"""
Tree-sitter infrastructure for the Go parser collaborator.
Provides grammar loading, query management, and utilities for AST parsing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from tree_sitter import Tree, Node, Parser, Query, Language, QueryCursor


class TreeSitterDocument(ABC):
    """
    Wrapper for Tree-sitter parsed document with query system.
    """

    def __init__(self, text: str):
        self.text = text
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode('utf-8')
        self._ascii = len(self._text_bytes) == len(text)
        self._query_cache: Dict[str, Query] = {}
        self._parse()

    @abstractmethod
    def get_language(self) -> Language:
        """
        Get Language instance for queries.

        Returns:
            Language instance
        """
        pass

    @abstractmethod
    def get_query_definitions(self) -> Dict[str, str]:
        """
        Get named query definitions for this language.

        Returns:
            Dict mapping query names to query strings
        """
        pass

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query on the document.

        Args:
            query_name: Name of the query to execute

        Returns:
            List of (node, capture_name) tuples in document order

        Raises:
            ValueError: If query is not defined for this language
        """
        root_node = self.root_node

        query_definitions = self.get_query_definitions()
        if query_name not in query_definitions:
            raise ValueError(f"Unknown query: {query_name}")

        if query_name not in self._query_cache:
            self._query_cache[query_name] = Query(self.get_language(), query_definitions[query_name])

        cursor = QueryCursor(self._query_cache[query_name])

        results = []
        for pattern_index, captures in cursor.matches(root_node):
            for capture_name, nodes in captures.items():
                for node in nodes:
                    results.append((node, capture_name))

        results.sort(key=lambda item: item[0].start_byte)
        return results

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode('utf-8')

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def is_tolerated_missing(self, node: Node) -> bool:
        """
        Whether a MISSING node stands for a token the language lets the source omit.

        Languages override this; by default every MISSING node is an error.
        """
        return False

    def first_error(self) -> Optional[Node]:
        """First ERROR or MISSING node in document order, if any."""
        if not self.has_error():
            return None

        stack = [self.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR":
                return node
            if node.is_missing and not self.is_tolerated_missing(node):
                return node
            stack.extend(reversed(node.children))
        return None

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Correctly convert byte position to character position in Unicode text.
        Guarantees that if position points to the middle of a multi-byte character,
        returns position before that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)
        if self._ascii:
            return byte_pos

        # UTF-8 guarantees maximum 4 bytes per character
        start = max(0, byte_pos - 4)
        for end in range(byte_pos, start - 1, -1):
            try:
                return len(self._text_bytes[:end].decode('utf-8'))
            except UnicodeDecodeError:
                continue
        return 0
