"""Interactive TCP echo client: sends typed lines and prints the server's reply."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Iterable, TextIO

BUF_SIZE = 1024
PROMPT = "Input message(Q to quit) : "
QUIT_LINES = frozenset({"q\n", "Q\n"})


def is_quit(line: str) -> bool:
    """Return True when the line asks to end the session."""
    return line in QUIT_LINES


class EchoClient:
    """A connected TCP client that sends a message and reads one reply."""

    def __init__(self, host: str, port: int) -> None:
        self._sock = socket.create_connection((host, int(port)))

    def send(self, message: str) -> str:
        """Send the message and return what the server sends back in one read."""
        self._sock.sendall(message.encode())
        reply = self._sock.recv(BUF_SIZE - 1)
        return reply.decode(errors="replace")

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> "EchoClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def run_session(client: EchoClient, lines: Iterable[str], output: TextIO) -> int:
    """Prompt, send each line and print each reply until a quit line.

    Returns the number of messages exchanged.
    """
    exchanged = 0
    for line in lines:
        output.write(PROMPT)
        if is_quit(line):
            break
        reply = client.send(line)
        output.write(f"Message from server : {reply}\n")
        output.flush()
        exchanged += 1
    return exchanged


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="echo-client", description="TCP echo client")
    parser.add_argument("host", help="server address")
    parser.add_argument("port", type=int, help="server port")
    args = parser.parse_args(argv)

    try:
        client = EchoClient(args.host, args.port)
    except OSError as exc:
        print(f"connect() error! {exc}", file=sys.stderr)
        return 1

    print("Connected.................")
    with client:
        try:
            run_session(client, sys.stdin, sys.stdout)
        except KeyboardInterrupt:
            pass
    return 0