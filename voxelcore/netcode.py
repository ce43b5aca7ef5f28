"""A UDP ping to a game server."""

from __future__ import annotations

import socket
import time
from dataclasses import dataclass

_BUFFER_SIZE = 2048


@dataclass(frozen=True)
class PingReply:
    data: bytes
    source: tuple
    elapsed_ms: float


def _parse_address(address) -> tuple[str, int]:
    if isinstance(address, str):
        host, sep, port = address.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"address must be host:port, got {address!r}")
        return host, int(port)
    host, port = address
    return str(host), int(port)


def connect(address) -> PingReply:
    """Send "ping" to ``address`` and wait for one reply datagram."""
    target = _parse_address(address)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("127.0.0.1", 0))
        msg = "ping"
        start = time.perf_counter()
        sock.sendto(msg.encode(), target)
        print(f"Send {msg}")

        data, source = sock.recvfrom(_BUFFER_SIZE)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        text = data.decode("utf-8", errors="replace")
        print(
            f"received {len(data)} bytes: {text}, "
            f"from {source[0]}:{source[1]} in {elapsed_ms}ms"
        )
    return PingReply(data, source, elapsed_ms)