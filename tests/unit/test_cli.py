import json
from pathlib import Path

from bristol_circuits import cli

AND_TREE = """4 8
4 1 1 1 1
1 1

2 1 0 1 4 AND
2 1 2 3 5 AND
2 1 4 5 6 AND
1 1 6 7 INV
"""


def _write_circuit(path: Path, text: str) -> str:
    path.write_text(text)
    return str(path)


def test_info_prints_summary(tmp_path, capsys):
    path = _write_circuit(tmp_path / "and_tree.txt", AND_TREE)

    assert cli.main(["info", path, "--full"]) == 0
    out = capsys.readouterr().out

    assert "Gates: 4 (declared 4)" in out
    assert "Wires: 8" in out
    assert "Input ports: 4 [1, 1, 1, 1]" in out
    assert "AND: 3" in out
    assert "INV 6 -> 7" in out


def test_info_json(tmp_path, capsys):
    path = _write_circuit(tmp_path / "and_tree.txt", AND_TREE)

    assert cli.main(["info", path, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)

    assert data["format"] == "bristol"
    assert data["header"]["num_output_wires"] == [1]
    assert len(data["gates"]) == 4
    assert data["source"] == path


def test_info_reports_parse_error(tmp_path, capsys):
    path = _write_circuit(tmp_path / "bad.txt", AND_TREE.replace("INV", "FOO"))

    assert cli.main(["info", path]) == cli.EXIT_PARSE_ERROR
    err = capsys.readouterr().err
    assert "UnknownGateType" in err
    assert "line 8" in err


def test_info_missing_file(tmp_path, capsys):
    assert cli.main(["info", str(tmp_path / "missing.txt")]) == cli.EXIT_PARSE_ERROR
    assert "FileNotFoundError" in capsys.readouterr().err


def test_validate_reports_undecodable_file(tmp_path, capsys):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"4 8\n\xff\xfe\n1 1\n")

    assert cli.main(["validate", str(path)]) == cli.EXIT_PARSE_ERROR
    assert "UnicodeDecodeError" in capsys.readouterr().err


def test_validate_valid_circuit(tmp_path, capsys):
    path = _write_circuit(tmp_path / "and_tree.txt", AND_TREE)

    assert cli.main(["validate", path]) == cli.EXIT_OK
    assert "valid" in capsys.readouterr().out


def test_validate_reports_issues(tmp_path, capsys):
    path = _write_circuit(tmp_path / "and_tree.txt", AND_TREE.replace("4 8", "7 8", 1))

    assert cli.main(["validate", path]) == cli.EXIT_INVALID
    out = capsys.readouterr().out
    assert "[gate_count_mismatch]" in out


def test_index_directory(tmp_path, capsys):
    _write_circuit(tmp_path / "and_tree.txt", AND_TREE)
    _write_circuit(tmp_path / "eq.txt", "1 3\n1 1\n1 1\n1 1 0 2 EQ\n")

    assert cli.main(["index", str(tmp_path), "--json"]) == cli.EXIT_PARSE_ERROR
    entries = json.loads(capsys.readouterr().out)

    assert len(entries) == 2
    assert sorted(entry["ok"] for entry in entries) == [False, True]


def test_index_missing_directory(tmp_path, capsys):
    assert cli.main(["index", str(tmp_path / "nope")]) == cli.EXIT_PARSE_ERROR
    assert "Directory not found" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert cli.main([]) == cli.EXIT_PARSE_ERROR
    assert "usage" in capsys.readouterr().out
