import socket
import threading

import pytest

from fmsys.client import FileClient, main
from fmsys.operations import FileOperationError
from fmsys.server import FileServer


@pytest.fixture
def server(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    srv = FileServer("127.0.0.1", 0, root, root / "log.txt")
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.close()
    thread.join(timeout=5)


def _feed(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


def test_copy_appends_to_destination(server, tmp_path):
    (server.root / "src.txt").write_text("line one\nline two\n")
    destination = tmp_path / "dest.txt"
    destination.write_text("existing\n")
    with FileClient(*server.address, timeout=5) as client:
        copied = client.copy("src.txt", destination)
    assert copied == len("line one\nline two\n")
    assert destination.read_text() == "existing\nline one\nline two\n"


def test_read_missing_file_raises(server):
    with FileClient(*server.address, timeout=5) as client:
        with pytest.raises(FileOperationError):
            client.read("nope.txt")


def test_write_then_read_round_trip(server):
    with FileClient(*server.address, timeout=5) as client:
        client.write("r.txt", "héllo wörld")
        assert client.read("r.txt") == "héllo wörld"


def test_closed_client_cannot_send(server):
    client = FileClient(*server.address, timeout=5)
    client.close()
    client.close()
    with pytest.raises(OSError):
        client.read("a.txt")


def test_main_reads_file(server, monkeypatch, capsys):
    (server.root / "a.txt").write_text("hello world\n")
    _feed(monkeypatch, ["1", "a.txt", "9"])
    host, port = server.address
    assert main(["--host", host, "--port", str(port)]) == 0
    out = capsys.readouterr().out
    assert "Connected to the server." in out
    assert "Choose an option:" in out
    assert "hello world\n" in out
    assert "EOF" in out


def test_main_rejects_invalid_option(server, monkeypatch, capsys):
    _feed(monkeypatch, ["x", "12", "9"])
    host, port = server.address
    assert main(["--host", host, "--port", str(port)]) == 0
    assert capsys.readouterr().out.count("Invalid option.") == 2


def test_main_reports_server_error(server, monkeypatch, capsys):
    _feed(monkeypatch, ["3", "missing.txt", "9"])
    host, port = server.address
    assert main(["--host", host, "--port", str(port)]) == 0
    assert "Error:" in capsys.readouterr().out


def test_main_write_creates_file(server, monkeypatch, capsys):
    _feed(monkeypatch, ["2", "out.txt", "some text", "9"])
    host, port = server.address
    assert main(["--host", host, "--port", str(port)]) == 0
    assert (server.root / "out.txt").read_text() == "some text"
    assert "File written successfully" in capsys.readouterr().out


def test_main_stops_on_end_of_input(server, monkeypatch):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    host, port = server.address
    assert main(["--host", host, "--port", str(port)]) == 0


def test_main_connection_failure(capsys):
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    assert main(["--host", "127.0.0.1", "--port", str(port), "--timeout", "1"]) == 1
    assert "Connection failed" in capsys.readouterr().err