"""Waiting for console input with a timeout, using select, poll or epoll."""

from __future__ import annotations

import argparse
import os
import selectors
import sys
from enum import Enum
from typing import TextIO

BUF_SIZE = 30
LINE_SIZE = 100
DEFAULT_TIMEOUT = 5.0


class WaitMethod(Enum):
    """The readiness mechanism used to wait for input."""

    SELECT = "select"
    POLL = "poll"
    EPOLL = "epoll"

    def make_selector(self) -> selectors.BaseSelector:
        cls = getattr(selectors, _SELECTOR_NAMES[self], None)
        if cls is None:
            raise ValueError(f"{self.value} is not available on this platform")
        return cls()


_SELECTOR_NAMES = {
    WaitMethod.SELECT: "SelectSelector",
    WaitMethod.POLL: "PollSelector",
    WaitMethod.EPOLL: "EpollSelector",
}


def _ready_count(stream, timeout: float | None, method: WaitMethod) -> int:
    with WaitMethod(method).make_selector() as selector:
        selector.register(stream, selectors.EVENT_READ)
        return len(selector.select(timeout))


def wait_for_input(
    stream, timeout: float | None = DEFAULT_TIMEOUT, method: WaitMethod | str = WaitMethod.SELECT
) -> bool:
    """Return True if the stream becomes readable within `timeout` seconds."""
    return _ready_count(stream, timeout, WaitMethod(method)) > 0


def read_once(
    stream: TextIO,
    output: TextIO,
    timeout: float | None = DEFAULT_TIMEOUT,
    method: WaitMethod | str = WaitMethod.POLL,
) -> str | None:
    """Wait once for a line of input and report it; return the line, or None on timeout."""
    method = WaitMethod(method)
    if method is WaitMethod.POLL:
        wait = timeout if timeout is not None else 0
        output.write(f"Wait {wait:g} seconds..... \n")
    elif method is WaitMethod.EPOLL:
        output.write("Waiting for keyboard input ...\n")

    count = _ready_count(stream, timeout, method)
    if count == 0:
        output.write("time-out\n" if method is WaitMethod.SELECT else
                     "timeout\n" if method is WaitMethod.POLL else "Timeout\n")
        output.flush()
        return None

    line = stream.readline(LINE_SIZE - 1)
    if method is WaitMethod.SELECT:
        output.write(f"message from console: {line}")
    elif method is WaitMethod.POLL:
        output.write(f"Entered : {line}\n")
    else:
        output.write(f"n: {count}\n")
        output.write(f"Entered : {line}")
    output.flush()
    return line


def watch(stream, output: TextIO, timeout: float | None = DEFAULT_TIMEOUT) -> int:
    """Echo raw input chunks until end of input, reporting each idle timeout.

    Reads straight from the stream's file descriptor, BUF_SIZE bytes at a time.
    Returns the number of chunks reported.
    """
    fd = stream.fileno()
    count = 0
    with selectors.SelectSelector() as selector:
        selector.register(fd, selectors.EVENT_READ)
        while True:
            try:
                ready = selector.select(timeout)
            except OSError:
                output.write("select() error\n")
                break
            if not ready:
                output.write("time-out\n")
                output.flush()
                continue
            data = os.read(fd, BUF_SIZE)
            if not data:
                break
            output.write(f"message from console: {data.decode(errors='replace')}")
            output.flush()
            count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="console-wait", description="Wait for console input")
    parser.add_argument(
        "--method",
        choices=[method.value for method in WaitMethod],
        default=WaitMethod.SELECT.value,
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)

    method = WaitMethod(args.method)
    try:
        if method is WaitMethod.SELECT:
            watch(sys.stdin, sys.stdout, args.timeout)
        else:
            read_once(sys.stdin, sys.stdout, args.timeout, method)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0