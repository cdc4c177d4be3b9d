"""
Tests for the command-line interface.
"""

import json

import pytest

from gocmt.cli import main
from .utils import go, write

UNDOCUMENTED = go("""
    package main

    func Run() {}
    """)

DOCUMENTED = go("""
    package main

    // Run runs.
    func Run() {}
    """)


def test_prints_processed_source(tmp_path, capsys):
    path = write(tmp_path / "main.go", UNDOCUMENTED)

    rc = main([str(path)])

    assert rc == 0
    assert capsys.readouterr().out == "package main\n\n// Run ...\nfunc Run() {}\n"
    assert path.read_text(encoding="utf-8") == UNDOCUMENTED


def test_in_place(tmp_path, capsys):
    path = write(tmp_path / "main.go", UNDOCUMENTED)
    other = write(tmp_path / "ok.go", DOCUMENTED)
    mtime = other.stat().st_mtime_ns

    rc = main(["-i", "-d", str(tmp_path)])

    assert rc == 0
    assert capsys.readouterr().out == ""
    assert "// Run ...\nfunc Run() {}" in path.read_text(encoding="utf-8")
    assert other.read_text(encoding="utf-8") == DOCUMENTED
    assert other.stat().st_mtime_ns == mtime


def test_list_modified(tmp_path, capsys):
    write(tmp_path / "a.go", UNDOCUMENTED)
    write(tmp_path / "b.go", DOCUMENTED)
    write(tmp_path / "vendor" / "c.go", UNDOCUMENTED)

    rc = main(["-l", "-d", str(tmp_path)])

    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [str(tmp_path / "a.go")]


def test_template_and_paren_flags(tmp_path, capsys):
    path = write(tmp_path / "v.go", go("""
        package main

        const (
        	A = 1
        	B = 2
        )
        """))

    rc = main(["-p", "-t", "is a constant.", str(path)])

    out = capsys.readouterr().out
    assert rc == 0
    assert "\t// A is a constant.\n\tA = 1\n\t// B is a constant.\n\tB = 2" in out


def test_config_file(tmp_path, capsys):
    write(tmp_path / ".gocmt.yml", "template: does it.\n")
    write(tmp_path / "main.go", UNDOCUMENTED)

    rc = main(["-d", str(tmp_path)])

    assert rc == 0
    assert "// Run does it.\n" in capsys.readouterr().out


def test_json_report(tmp_path, capsys):
    write(tmp_path / "a.go", UNDOCUMENTED)
    write(tmp_path / "b.go", DOCUMENTED)
    write(tmp_path / "broken.go", "package main\n\nfunc (\n")

    rc = main(["--json", "-d", str(tmp_path)])

    assert rc == 2
    report = json.loads(capsys.readouterr().out)
    files = {entry["path"].rsplit("/", 1)[-1]: entry for entry in report["files"]}
    assert files["a.go"]["modified"] is True
    assert files["a.go"]["actions"] == {"inserted": 1}
    assert files["b.go"]["modified"] is False
    assert files["b.go"]["error"] is None
    assert files["broken.go"]["error"]


def test_parse_failure_exit_code(tmp_path, capsys):
    path = write(tmp_path / "broken.go", "package main\n\nfunc (\n")

    rc = main([str(path)])

    assert rc == 2
    assert "broken.go" in capsys.readouterr().err


def test_invalid_template(tmp_path, capsys):
    path = write(tmp_path / "main.go", UNDOCUMENTED)

    rc = main(["-t", "%s", str(path)])

    assert rc == 2
    assert "Invalid comment template" in capsys.readouterr().err


def test_missing_directory(tmp_path, capsys):
    rc = main(["-d", str(tmp_path / "nope")])

    assert rc == 2
    assert "Directory not found" in capsys.readouterr().err


def test_list_and_json_are_exclusive(tmp_path, capsys):
    path = write(tmp_path / "main.go", UNDOCUMENTED)

    with pytest.raises(SystemExit) as exc:
        main(["-l", "--json", str(path)])

    assert exc.value.code == 2
    assert "not allowed with" in capsys.readouterr().err
