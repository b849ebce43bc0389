"""Sending and receiving UDP multicast messages."""

from __future__ import annotations

import argparse
import ipaddress
import socket
import struct
import sys
from typing import Iterator

BUF_SIZE = 1024
DEFAULT_TTL = 64


def _check_group(group: str) -> str:
    try:
        return str(ipaddress.IPv4Address(group))
    except ValueError:
        raise ValueError(f"not an IPv4 address: {group!r}") from None


def send_multicast(group: str, port: int, message: str, ttl: int = DEFAULT_TTL) -> int:
    """Send one datagram to the group with the given TTL; return the bytes sent."""
    group = _check_group(group)
    if not 0 <= ttl <= 255:
        raise ValueError("ttl must be between 0 and 255")
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, ttl)
        return sock.sendto(message.encode(), (group, int(port)))


def open_receiver(group: str, port: int) -> socket.socket:
    """Return a UDP socket bound to `port` on all interfaces and joined to `group`."""
    group = _check_group(group)
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", int(port)))
        membership = struct.pack(
            "4s4s", socket.inet_aton(group), socket.inet_aton("0.0.0.0")
        )
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership)
    except OSError:
        sock.close()
        raise
    return sock


def receive_multicast(group: str, port: int) -> Iterator[str]:
    """Join the group and yield each message until receiving fails."""
    with open_receiver(group, port) as sock:
        while True:
            try:
                data = sock.recv(BUF_SIZE - 1)
            except OSError:
                return
            yield data.decode(errors="replace")


def main_send(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="multicast-send", description="Send a UDP multicast")
    parser.add_argument("group")
    parser.add_argument("port", type=int)
    parser.add_argument("message")
    parser.add_argument("--ttl", type=int, default=DEFAULT_TTL)
    args = parser.parse_args(argv)

    try:
        send_multicast(args.group, args.port, args.message, args.ttl)
    except (OSError, ValueError) as exc:
        print(f"sendto() error: {exc}", file=sys.stderr)
        return 1
    print(f"Multicast message sent to {args.group}:{args.port}")
    return 0


def main_receive(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="multicast-receive", description="Print received UDP multicasts"
    )
    parser.add_argument("group")
    parser.add_argument("port", type=int)
    args = parser.parse_args(argv)

    try:
        sock = open_receiver(args.group, args.port)
    except (OSError, ValueError) as exc:
        print(f"setsockopt() Group Join error: {exc}", file=sys.stderr)
        return 1

    print(
        f"Joined multicast group {args.group} on port {args.port}. Waiting for message ...",
        flush=True,
    )
    with sock:
        try:
            while True:
                try:
                    data = sock.recv(BUF_SIZE - 1)
                except OSError:
                    break
                print(f"Received multicast message: {data.decode(errors='replace')}", flush=True)
        except KeyboardInterrupt:
            pass
    return 0