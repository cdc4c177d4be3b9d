"""
Tests for building the declaration tree from Go source.
"""

import pytest

from gocmt.errors import ParseFailure
from gocmt.model import DeclKind
from gocmt.syntax import parse_source
from .utils import find, nodes_of, tree_of


class TestDeclarations:

    def test_root_and_kinds(self, sample_go):
        tree = parse_source(sample_go)

        assert tree.root.index == 0
        assert tree.root.kind == DeclKind.OTHER
        assert [n.name for n in nodes_of(tree, DeclKind.FUNCTION_DECL)] == ["Start", "Stop", "Run", "helper"]
        assert [n.name for n in nodes_of(tree, DeclKind.TYPE_DECL)] == ["Server", "Inner"]
        assert [n.index for n in tree.nodes] == list(range(len(tree.nodes)))

    def test_local_declarations_wrapped_in_marker(self, sample_go):
        tree = parse_source(sample_go)

        markers = nodes_of(tree, DeclKind.LOCAL_DECL_MARKER)
        assert len(markers) == 2
        wrapped = [tree.node(m.children[0]) for m in markers]
        assert [(n.kind, n.name) for n in wrapped] == [
            (DeclKind.VALUE_GROUP, "Local"),
            (DeclKind.TYPE_DECL, "Inner"),
        ]
        start = find(tree, DeclKind.FUNCTION_DECL, "Start")
        assert all(m.parent == start.index for m in markers)

    def test_value_groups(self, sample_go):
        tree = parse_source(sample_go)

        greeting = find(tree, DeclKind.VALUE_GROUP, "Greeting")
        assert not greeting.parenthesized
        assert [tree.node(i).name for i in greeting.children] == ["Greeting"]

        group = find(tree, DeclKind.VALUE_GROUP, "A")
        assert group.parenthesized
        assert [tree.node(i).name for i in group.children] == ["A", "b", "C"]

    def test_multiple_names(self):
        tree = tree_of("""
            package main

            var X, Y int
            """)

        entry = find(tree, DeclKind.VALUE_ENTRY, "X")
        assert entry.names == ["X", "Y"]

    def test_empty_group(self):
        tree = tree_of("""
            package main

            const ()
            """)

        group = nodes_of(tree, DeclKind.VALUE_GROUP)[0]
        assert group.parenthesized
        assert group.children == []
        assert group.names == []


class TestDocAttachment:

    def test_docs_attached(self, sample_go):
        tree = parse_source(sample_go)

        assert find(tree, DeclKind.VALUE_GROUP, "Greeting").doc.text() == "Greeting is the default greeting.\n"
        assert find(tree, DeclKind.FUNCTION_DECL, "Start").doc.text() == "Start\n"
        assert find(tree, DeclKind.FUNCTION_DECL, "Run").doc.comments[0].text == "//nolint:unused"
        assert find(tree, DeclKind.TYPE_DECL, "Server").doc is None
        assert find(tree, DeclKind.FUNCTION_DECL, "helper").doc is None

    def test_entry_docs_inside_parens(self, sample_go):
        tree = parse_source(sample_go)

        assert find(tree, DeclKind.VALUE_ENTRY, "A").doc.text() == "A doc\n"
        assert find(tree, DeclKind.VALUE_ENTRY, "C").doc is None
        assert find(tree, DeclKind.VALUE_GROUP, "A").doc is None

    def test_blank_line_detaches_comment(self):
        tree = tree_of("""
            package main

            // Run runs.

            func Run() {}
            """)

        assert find(tree, DeclKind.FUNCTION_DECL, "Run").doc is None
        assert len(tree.comments) == 1

    def test_trailing_comment_not_grouped_with_lead(self):
        tree = tree_of("""
            package main

            var x = 1 // trailing
            // Run runs.
            func Run() {}
            """)

        assert [g.text() for g in tree.comments] == ["trailing\n", "Run runs.\n"]
        assert find(tree, DeclKind.FUNCTION_DECL, "Run").doc.text() == "Run runs.\n"

    def test_consecutive_comments_form_one_group(self):
        tree = tree_of("""
            package main

            // Run runs.
            //
            // Details.
            /* more */
            func Run() {}
            """)

        assert len(tree.comments) == 1
        assert len(tree.comments[0].comments) == 4
        assert find(tree, DeclKind.FUNCTION_DECL, "Run").doc is tree.comments[0]

    def test_comment_positions_are_character_offsets(self):
        code = "package main\n\n// Greet sagt Grüße.\nfunc Greet() {}\n"
        tree = parse_source(code)

        comment = tree.comments[0].comments[0]
        assert code[comment.start:comment.end] == "// Greet sagt Grüße."
        assert find(tree, DeclKind.FUNCTION_DECL, "Greet").start == code.index("func")


class TestParseFailure:

    def test_syntax_error(self):
        with pytest.raises(ParseFailure) as exc:
            parse_source("package main\n\nfunc (\n")

        assert "syntax error" in str(exc.value) or "missing" in str(exc.value)

    def test_error_reports_path(self, tmp_path):
        path = tmp_path / "bad.go"
        with pytest.raises(ParseFailure) as exc:
            parse_source("package main\nvar = \n", path=path)

        assert str(exc.value).startswith(str(path))
        assert exc.value.path == path

    @pytest.mark.parametrize("code, names", [
        ("package main\n\nvar (A = 1)\n", ["A"]),
        ("package main\n\nconst (A = 1; B = 2)\n", ["A", "B"]),
    ])
    def test_terminator_before_closing_paren_is_optional(self, code, names):
        tree = parse_source(code)

        entries = nodes_of(tree, DeclKind.VALUE_ENTRY)
        assert [e.name for e in entries] == names
        assert tree.node(entries[0].parent).parenthesized

    def test_terminator_before_closing_brace_is_optional(self):
        tree = parse_source("package main\n\nfunc Run() { return }\n")

        assert find(tree, DeclKind.FUNCTION_DECL, "Run") is not None
