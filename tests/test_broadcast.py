import pytest

from sockdrills import broadcast
from sockdrills.broadcast import receive_broadcasts, send_broadcast


def test_round_trip_over_loopback():
    with receive_broadcasts(0, "127.0.0.1") as rx:
        sent = send_broadcast(rx.address[1], "hello", "127.0.0.1")
        assert sent == len("hello")
        assert next(rx) == ("127.0.0.1", "hello")


def test_several_messages_arrive_in_order():
    messages = ["one", "two", "three"]
    with receive_broadcasts(0, "127.0.0.1") as rx:
        for message in messages:
            send_broadcast(rx.address[1], message, "127.0.0.1")
        received = [next(rx)[1] for _ in messages]
    assert received == messages


def test_long_datagram_is_truncated_to_buffer():
    with receive_broadcasts(0, "127.0.0.1") as rx:
        send_broadcast(rx.address[1], "x" * 2000, "127.0.0.1")
        _, text = next(rx)
    assert text == "x" * (broadcast.BUF_SIZE - 1)


def test_closed_receiver_stops_iteration():
    rx = receive_broadcasts(0, "127.0.0.1")
    rx.close()
    assert next(rx, "done") == "done"


def test_bad_address_raises():
    with pytest.raises(OSError):
        send_broadcast(9, "hi", "no.such.host.invalid")


def test_main_send_reports_message(capsys):
    with receive_broadcasts(0, "127.0.0.1") as rx:
        port = rx.address[1]
        assert broadcast.main_send([str(port), "hi", "--address", "127.0.0.1"]) == 0
        assert next(rx)[1] == "hi"
    assert capsys.readouterr().out == "Broadcast message sent: hi\n"


def test_main_send_rejects_bad_port():
    with pytest.raises(SystemExit):
        broadcast.main_send(["notaport", "hi"])