import io
import socket

import pytest

from sockdrills.logging_server import LoggingEchoServer, main


def _exchange(client, data):
    client.sendall(data)
    received = b""
    while len(received) < len(data):
        chunk = client.recv(1024)
        if not chunk:
            break
        received += chunk
    return received


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "echo.log"


def test_echoes_and_logs_up_to_limit(log_file):
    with LoggingEchoServer(0, log_file, "127.0.0.1", limit=2, output=io.StringIO()) as srv:
        with socket.create_connection(srv.address, timeout=5) as client:
            srv.accept_one()
            assert _exchange(client, b"hello") == b"hello"
            assert _exchange(client, b"world") == b"world"
            assert srv.wait_for_log(5) is True
            assert _exchange(client, b"extra") == b"extra"
    assert log_file.read_bytes() == b"helloworld"


def test_log_incomplete_until_closed(log_file):
    srv = LoggingEchoServer(0, log_file, "127.0.0.1", limit=5, output=io.StringIO())
    with socket.create_connection(srv.address, timeout=5) as client:
        srv.accept_one()
        assert _exchange(client, b"abc") == b"abc"
        assert srv.wait_for_log(0.1) is False
        srv.close()
    assert srv.wait_for_log(1) is True
    assert log_file.read_bytes() == b"abc"


def test_reports_connect_and_disconnect(log_file):
    out = io.StringIO()
    with LoggingEchoServer(0, log_file, "127.0.0.1", limit=1, output=out) as srv:
        client = socket.create_connection(srv.address, timeout=5)
        handler = srv.accept_one()
        client.close()
        handler.join(5)
        assert not handler.is_alive()
    text = out.getvalue()
    assert "new client connected...\n" in text
    assert "client disconnected...\n" in text


def test_zero_limit_writes_empty_log(log_file):
    with LoggingEchoServer(0, log_file, "127.0.0.1", limit=0, output=io.StringIO()) as srv:
        assert srv.wait_for_log(5) is True
    assert log_file.read_bytes() == b""


def test_negative_limit_rejected(log_file):
    with pytest.raises(ValueError):
        LoggingEchoServer(0, log_file, "127.0.0.1", limit=-1)


def test_main_requires_port():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_main_reports_bind_error(log_file, capsys):
    occupant = socket.create_server(("", 0))
    try:
        port = occupant.getsockname()[1]
        assert main([str(port), "--log", str(log_file)]) == 1
    finally:
        occupant.close()
    assert "bind() error" in capsys.readouterr().err