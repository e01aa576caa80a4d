"""Shared fixtures: an in-memory transport that replays scripted reads."""

from __future__ import annotations

from collections import deque

import pytest

from ccboot.protocol.framing import build_packet


class ScriptedPort:
    """Transport double.

    Each queued entry is the result of one ``read`` call; ``b""`` stands
    for a read timeout. Once the script runs out every read times out.
    """

    def __init__(self) -> None:
        self.reads: deque[bytes] = deque()
        self.writes: list[bytes] = []
        self.read_sizes: list[int] = []
        self.closed = False

    def queue(self, *chunks: bytes) -> ScriptedPort:
        self.reads.extend(chunks)
        return self

    def queue_stream(self, data: bytes) -> ScriptedPort:
        """Queue ``data`` as one-byte reads, the way a UART delivers it."""
        self.reads.extend(bytes([b]) for b in data)
        return self

    def queue_reply(self, payload: bytes) -> ScriptedPort:
        """Queue a well-formed packet carrying ``payload``."""
        return self.queue_stream(build_packet(payload))

    def read(self, size: int = 1) -> bytes:
        self.read_sizes.append(size)
        if not self.reads:
            return b""
        return self.reads.popleft()

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def port() -> ScriptedPort:
    return ScriptedPort()
