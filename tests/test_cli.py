import io
import socket

import pytest

from tamalyon.cli import build_parser, main


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.host is False
    assert args.join is None
    assert args.port == 9999
    assert args.interval == 5.0


def test_parser_host_mode():
    args = build_parser().parse_args(["--host", "--port", "1234"])
    assert args.host is True
    assert args.port == 1234


def test_parser_join_default_url():
    args = build_parser().parse_args(["--join"])
    assert args.join == "ws://localhost:9999"


def test_host_and_join_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--host", "--join"])


def test_local_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("feed\nstatus\nquit\n"))
    assert main(["--interval", "60"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "H:100 | T:100 | A:100 | Mood:joyeux"
    assert "Non connecté" in lines
    assert lines[-1] == "H:100 | T:100 | A:100 | Mood:joyeux"


def test_unknown_command(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("dance\n"))
    assert main(["--interval", "60"]) == 0
    assert "dance" in capsys.readouterr().err


def test_join_unreachable(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["--join", f"ws://127.0.0.1:{_free_port()}"]) == 1
    assert capsys.readouterr().err.startswith("tamalyon:")


def test_host_session(monkeypatch, capsys):
    port = _free_port()
    monkeypatch.setattr("sys.stdin", io.StringIO("pet\nquit\n"))
    assert main(["--host", "--port", str(port), "--interval", "60"]) == 0
    assert f"Hébergement actif (port {port})" in capsys.readouterr().out.splitlines()