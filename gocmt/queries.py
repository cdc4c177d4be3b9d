"""
Tree-sitter query definitions for Go language.
Contains S-expression queries used to build the declaration tree.
"""

from __future__ import annotations

QUERIES = {
    # Comments (line and block)
    "comments": """
    (comment) @comment
    """,
}
