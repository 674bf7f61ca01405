import io
import sys

from fmsys.tools.wc import Counts, count, main


def test_count_simple():
    data = b"hello world\nsecond line here\n"
    result = count(data)
    assert result.lines == data.count(b"\n")
    assert result.chars == len(data)
    assert result.words == 5


def test_count_empty():
    assert count(b"") == Counts(0, 0, 0)


def test_count_vertical_tab_and_cr_separate_words():
    assert count(b"a\vb\rc\td").words == 4


def test_count_nul_is_not_whitespace():
    assert count(b"a\0b").words == 1


def test_chunked_equals_whole():
    data = b"the quick brown fox\njumps over\n\nthe lazy dog"
    pieces = [data[i : i + 3] for i in range(0, len(data), 3)]
    assert count(pieces) == count(data)


def test_word_spanning_chunks_counted_once():
    assert count([b"wor", b"d"]).words == 1


def test_main_files(tmp_path, capsys):
    first = tmp_path / "a.txt"
    first.write_bytes(b"one two\nthree\n")
    second = tmp_path / "b.txt"
    second.write_bytes(b"")
    assert main([str(first), str(second)]) == 0
    lines = capsys.readouterr().out.splitlines()
    expected = count(first.read_bytes())
    assert lines[0] == f"{expected.lines} {expected.words} {expected.chars} {first}"
    assert lines[1] == f"0 0 0 {second}"


def test_main_missing(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"


def test_main_stdin(monkeypatch, capsys):
    data = b"x y\nz\n"
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    assert main([]) == 0
    expected = count(data)
    assert capsys.readouterr().out == (
        f"{expected.lines} {expected.words} {expected.chars} \n"
    )