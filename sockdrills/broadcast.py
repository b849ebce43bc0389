"""Sending and receiving UDP broadcast messages."""

from __future__ import annotations

import argparse
import socket
import sys

BUF_SIZE = 1024
BROADCAST_ADDRESS = "255.255.255.255"


def send_broadcast(port: int, message: str, address: str = BROADCAST_ADDRESS) -> int:
    """Send one datagram with broadcasting enabled; return the number of bytes sent."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        return sock.sendto(message.encode(), (address, int(port)))


class _DatagramReceiver:
    """A bound UDP socket iterated as (sender address, text) pairs."""

    def __init__(self, port: int, host: str) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind((host, int(port)))
        except OSError:
            self._sock.close()
            raise

    @property
    def address(self) -> tuple[str, int]:
        return self._sock.getsockname()[:2]

    def __iter__(self) -> "_DatagramReceiver":
        return self

    def __next__(self) -> tuple[str, str]:
        try:
            data, sender = self._sock.recvfrom(BUF_SIZE - 1)
        except OSError:
            raise StopIteration from None
        return sender[0], data.decode(errors="replace")

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> "_DatagramReceiver":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def receive_broadcasts(port: int, host: str = "") -> _DatagramReceiver:
    """Bind to `port` now and return an iterator of (sender, message) pairs.

    Iteration ends when receiving fails, for example after close().
    """
    return _DatagramReceiver(port, host)


def main_send(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="broadcast-send", description="Send a UDP broadcast")
    parser.add_argument("port", type=int)
    parser.add_argument("message")
    parser.add_argument("--address", default=BROADCAST_ADDRESS)
    args = parser.parse_args(argv)

    try:
        send_broadcast(args.port, args.message, args.address)
    except OSError as exc:
        print(f"sendto() error: {exc}", file=sys.stderr)
        return 1
    print(f"Broadcast message sent: {args.message}")
    return 0


def main_receive(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="broadcast-receive", description="Print received UDP broadcasts"
    )
    parser.add_argument("port", type=int)
    args = parser.parse_args(argv)

    try:
        receiver = receive_broadcasts(args.port)
    except OSError as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1

    print(f"Waiting for broadcast message on port {args.port}...", flush=True)
    with receiver:
        try:
            for sender, text in receiver:
                print(f"Received message from {sender}: {text}", flush=True)
        except KeyboardInterrupt:
            pass
    return 0