import io
import sys

import pytest

from fmsys.tools.grep import grep_lines, main, match


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("abc", "xxabcxx", True),
        ("abc", "xxabxcx", False),
        ("^abc", "abcdef", True),
        ("^abc", "xabc", False),
        ("a.c", "abc", True),
        ("a.c", "ac", False),
        ("ab*c", "ac", True),
        ("ab*c", "abbbbc", True),
        ("ab*c", "abxc", False),
        ("c$", "abc", True),
        ("b$", "abc", False),
        ("^$", "", True),
        ("^$", "a", False),
        ("", "anything", True),
        (".*", "", True),
        ("^a.*z$", "abcz", True),
        ("^a.*z$", "abczy", False),
    ],
)
def test_match(pattern, text, expected):
    assert match(pattern, text) is expected


def test_match_handles_long_text():
    text = "a" * 5000 + "b"
    assert match("ab$", text) is True
    assert match("^a*c", text) is False


def test_grep_lines_keeps_newlines():
    lines = ["apple\n", "banana\n", "cherry\n"]
    assert list(grep_lines("an", lines)) == ["banana\n"]


def test_grep_lines_dollar_ignores_newline():
    lines = ["end\n", "ending\n"]
    assert list(grep_lines("end$", lines)) == ["end\n"]


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage: grep pattern [file ...]" in capsys.readouterr().err


def test_main_files(tmp_path, capsysbinary):
    first = tmp_path / "one.txt"
    first.write_bytes(b"hello world\nnothing\nhello again\n")
    second = tmp_path / "two.txt"
    second.write_bytes(b"say hello\nbye\n")
    assert main(["hello", str(first), str(second)]) == 0
    out = capsysbinary.readouterr().out
    assert out == b"hello world\nhello again\nsay hello\n"


def test_main_unterminated_last_line_is_dropped(tmp_path, capsysbinary):
    path = tmp_path / "f.txt"
    path.write_bytes(b"match\nmatch")
    assert main(["match", str(path)]) == 0
    assert capsysbinary.readouterr().out == b"match\n"


def test_main_overlong_line_stops(tmp_path, capsysbinary):
    path = tmp_path / "f.txt"
    path.write_bytes(b"x" * 2000 + b"\nmatch\n")
    assert main(["match", str(path)]) == 0
    assert capsysbinary.readouterr().out == b""


def test_main_missing_file(tmp_path, capsysbinary):
    missing = tmp_path / "absent"
    assert main(["x", str(missing)]) == 1
    assert capsysbinary.readouterr().out == f"grep: cannot open {missing}\n".encode()


def test_main_stdin(monkeypatch, capsysbinary):
    fake = io.TextIOWrapper(io.BytesIO(b"one\ntwo\nthree\n"))
    monkeypatch.setattr(sys, "stdin", fake)
    assert main(["^t"]) == 0
    assert capsysbinary.readouterr().out == b"two\nthree\n"