import socket

import pytest

from sockdrills import multicast
from sockdrills.multicast import open_receiver, receive_multicast, send_multicast


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    yield sock
    sock.close()


def test_send_reaches_receiver(listener):
    port = listener.getsockname()[1]
    assert send_multicast("127.0.0.1", port, "group hello") == len("group hello")
    assert listener.recv(1024) == b"group hello"


def test_send_with_custom_ttl(listener):
    port = listener.getsockname()[1]
    assert send_multicast("127.0.0.1", port, "ttl", ttl=1) == len("ttl")
    assert listener.recv(1024) == b"ttl"


@pytest.mark.parametrize("ttl", [-1, 256])
def test_ttl_out_of_range(ttl):
    with pytest.raises(ValueError):
        send_multicast("127.0.0.1", 9, "x", ttl=ttl)


def test_send_rejects_bad_group():
    with pytest.raises(ValueError):
        send_multicast("not-an-ip", 9, "x")


def test_open_receiver_rejects_bad_group():
    with pytest.raises(ValueError):
        open_receiver("300.1.1.1", 0)


def test_receive_rejects_bad_group_on_first_step():
    messages = receive_multicast("bogus", 0)
    with pytest.raises(ValueError):
        next(messages)
    assert next(messages, "done") == "done"


def test_main_send_reports_destination(listener, capsys):
    port = listener.getsockname()[1]
    assert multicast.main_send(["127.0.0.1", str(port), "hey"]) == 0
    assert listener.recv(1024) == b"hey"
    assert capsys.readouterr().out == f"Multicast message sent to 127.0.0.1:{port}\n"


def test_main_send_fails_on_bad_group(capsys):
    assert multicast.main_send(["nowhere", "9", "hey"]) == 1
    assert "sendto() error" in capsys.readouterr().err