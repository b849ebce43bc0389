"""Threaded TCP echo server that also writes the first received chunks to a log file."""

from __future__ import annotations

import argparse
import queue
import socket
import sys
import threading
from pathlib import Path
from typing import TextIO

BUF_SIZE = 100
DEFAULT_LOG = "echomsg.txt"
DEFAULT_LIMIT = 10


class LoggingEchoServer:
    """Echoes each client on its own thread and logs the first `limit` chunks."""

    def __init__(
        self,
        port: int = 0,
        log_path: str | Path = DEFAULT_LOG,
        host: str = "",
        limit: int = DEFAULT_LIMIT,
        output: TextIO | None = None,
    ) -> None:
        if limit < 0:
            raise ValueError("limit must not be negative")
        self.output = output if output is not None else sys.stdout
        self.log_path = Path(log_path)
        self._listener = socket.create_server((host, int(port)), backlog=5)
        try:
            self._log = open(self.log_path, "wb")
        except OSError:
            self._listener.close()
            raise
        self._chunks: queue.Queue[bytes | None] = queue.Queue()
        self._clients: set[socket.socket] = set()
        self._lock = threading.Lock()
        self._closed = threading.Event()
        self._logger = threading.Thread(target=self._write_log, args=(limit,), daemon=True)
        self._logger.start()

    @property
    def address(self) -> tuple[str, int]:
        return self._listener.getsockname()[:2]

    def _emit(self, text: str) -> None:
        with self._lock:
            self.output.write(text)
            self.output.flush()

    def _write_log(self, limit: int) -> None:
        with self._log:
            for _ in range(limit):
                chunk = self._chunks.get()
                if chunk is None:
                    break
                self._log.write(chunk)
                self._log.flush()

    def accept_one(self) -> threading.Thread:
        """Accept one client and return the thread that serves it."""
        conn, _ = self._listener.accept()
        self._emit("new client connected...\n")
        with self._lock:
            self._clients.add(conn)
        handler = threading.Thread(target=self._handle, args=(conn,), daemon=True)
        handler.start()
        return handler

    def _handle(self, conn: socket.socket) -> None:
        with conn:
            while True:
                try:
                    data = conn.recv(BUF_SIZE)
                except OSError:
                    break
                if not data:
                    break
                try:
                    conn.sendall(data)
                except OSError:
                    break
                self._chunks.put(data)
        with self._lock:
            self._clients.discard(conn)
        self._emit("client disconnected...\n")

    def serve_forever(self) -> None:
        """Accept clients until the server is closed."""
        while not self._closed.is_set():
            try:
                self.accept_one()
            except OSError:
                if self._closed.is_set():
                    break

    def wait_for_log(self, timeout: float | None = None) -> bool:
        """Wait for the log to be complete; return True once it is closed."""
        self._logger.join(timeout)
        return not self._logger.is_alive()

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            self._listener.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._listener.close()
        with self._lock:
            clients = list(self._clients)
        for conn in clients:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
        self._chunks.put(None)
        self._logger.join()

    def __enter__(self) -> "LoggingEchoServer":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="logging-echo-server", description="TCP echo server that logs messages"
    )
    parser.add_argument("port", type=int, help="port to listen on")
    parser.add_argument("--log", default=DEFAULT_LOG, help="log file path")
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="chunks to log")
    args = parser.parse_args(argv)

    try:
        server = LoggingEchoServer(args.port, args.log, limit=args.limit)
    except (OSError, ValueError) as exc:
        print(f"bind() error: {exc}", file=sys.stderr)
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0