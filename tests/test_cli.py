import json

import pytest

from parsek.cli import main


def test_expr_eval(capsys):
    assert main(["expr", "1 + 2 * 3", "--eval"]) == 0
    assert capsys.readouterr().out.strip() == "7"


def test_expr_tree(capsys):
    assert main(["expr", "1+2"]) == 0
    assert capsys.readouterr().out == "SUM\n  INT : 1\n  PLUS : +\n  INT : 2\n"


def test_expr_trailing_input(capsys):
    assert main(["expr", "1 +"]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "unexpected input at offset 2" in err
    assert "1 +\n  ^" in err


def test_expr_no_match(capsys):
    assert main(["expr", "*"]) == 2
    assert "no match at offset 0" in capsys.readouterr().err


def test_expr_runtime_error(capsys):
    assert main(["expr", "1 / 0", "-e"]) == 2
    assert "[ERROR] ZeroDivisionError" in capsys.readouterr().err


def test_json_eval(capsys):
    assert main(["json", '{"a": [1, 2]}', "-e"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": [1, 2]}


def test_json_file_tree(tmp_path, capsys):
    path = tmp_path / "doc.json"
    path.write_text('{"k": true}', encoding="utf-8")
    assert main(["json", str(path)]) == 0
    assert capsys.readouterr().out == 'PROPERTIES\n  PROPERTY : "k"\n    TRUE : true\n'


def test_json_bad_escape(capsys):
    assert main(["json", r'"\q"', "-e"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_debug_output(capsys):
    assert main(["json", "[1]", "-D"]) == 0
    assert "[DEBUG]" in capsys.readouterr().err


def test_command_required():
    with pytest.raises(SystemExit):
        main([])


def test_nesting_too_deep(capsys):
    assert main(["json", "[" * 5000 + "]" * 5000]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "nested too deeply" in err


def test_invalid_utf8_file(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_bytes(b'["\xe9"]')
    assert main(["json", str(path)]) == 2
    assert "[ERROR]" in capsys.readouterr().err
