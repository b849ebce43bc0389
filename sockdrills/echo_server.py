"""Single-threaded TCP echo server multiplexed with select, poll or epoll."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO


class Backend(Enum):
    """The readiness mechanism the server waits with."""

    SELECT = "select"
    POLL = "poll"
    EPOLL = "epoll"

    def make_selector(self) -> selectors.BaseSelector:
        cls = getattr(selectors, _SELECTOR_NAMES[self], None)
        if cls is None:
            raise ValueError(f"{self.value} is not available on this platform")
        return cls()


_SELECTOR_NAMES = {
    Backend.SELECT: "SelectSelector",
    Backend.POLL: "PollSelector",
    Backend.EPOLL: "EpollSelector",
}


@dataclass(frozen=True)
class _Profile:
    buffer_size: int
    timeout: float | None
    connected: str
    closed: str
    received: str
    max_watched: int | None = None
    report_activity: bool = False


_PROFILES = {
    Backend.SELECT: _Profile(
        buffer_size=100,
        timeout=5.005,
        connected="connected client: {} \n",
        closed="closed client: {} \n",
        received="Received Message by {} : {}",
    ),
    Backend.POLL: _Profile(
        buffer_size=1024,
        timeout=None,
        connected="connected client : {}\n",
        closed="closed client : {}\n",
        received="client[{}] {}",
        max_watched=100,
        report_activity=True,
    ),
    Backend.EPOLL: _Profile(
        buffer_size=1024,
        timeout=None,
        connected="connected client: {}\n",
        closed="closed client : {}\n",
        received="client[{}] {}",
    ),
}


class EchoServer:
    """Echoes every chunk a client sends back to that client."""

    def __init__(
        self,
        port: int = 0,
        host: str = "",
        backend: Backend | str = Backend.SELECT,
        output: TextIO | None = None,
    ) -> None:
        self.backend = Backend(backend)
        self.output = output if output is not None else sys.stdout
        self._profile = _PROFILES[self.backend]
        self._selector = self.backend.make_selector()
        try:
            self._listener = socket.create_server((host, int(port)), backlog=5)
        except OSError:
            self._selector.close()
            raise
        self._selector.register(self._listener, selectors.EVENT_READ)
        self._unwatched: list[socket.socket] = []
        self._closed = False

    @property
    def address(self) -> tuple[str, int]:
        return self._listener.getsockname()[:2]

    def _emit(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def serve_once(self, timeout: float | None = None) -> int:
        """Wait for activity once, handle it, and return the number of ready sockets."""
        events = self._selector.select(timeout)
        if self._profile.report_activity:
            self._emit(f"poll activity : {len(events)}\n")
        for key, _ in events:
            if key.fileobj is self._listener:
                self._accept()
            else:
                self._echo(key.fileobj)
        return len(events)

    def serve_forever(self) -> None:
        """Serve until waiting for activity fails."""
        try:
            while True:
                self.serve_once(self._profile.timeout)
        except OSError:
            return

    def _accept(self) -> None:
        conn, _ = self._listener.accept()
        limit = self._profile.max_watched
        if limit is None or len(self._selector.get_map()) < limit:
            self._selector.register(conn, selectors.EVENT_READ)
        else:
            self._unwatched.append(conn)
        self._emit(self._profile.connected.format(conn.fileno()))

    def _echo(self, conn: socket.socket) -> None:
        fd = conn.fileno()
        try:
            data = conn.recv(self._profile.buffer_size)
        except ConnectionError:
            data = b""
        if not data:
            self._selector.unregister(conn)
            conn.close()
            self._emit(self._profile.closed.format(fd))
            return
        self._emit(self._profile.received.format(fd, data.decode(errors="replace")))
        try:
            conn.sendall(data)
        except OSError:
            pass

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for key in list(self._selector.get_map().values()):
            key.fileobj.close()
        self._selector.close()
        for conn in self._unwatched:
            conn.close()
        self._unwatched.clear()

    def __enter__(self) -> "EchoServer":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="echo-server", description="TCP echo server")
    parser.add_argument("port", type=int, help="port to listen on")
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in Backend],
        default=Backend.SELECT.value,
        help="readiness mechanism",
    )
    args = parser.parse_args(argv)

    try:
        server = EchoServer(args.port, backend=Backend(args.backend))
    except (OSError, ValueError) as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0