"""The byte channel the link layer talks through."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    """A blocking, already configured duplex byte channel.

    ``read`` must honour a per-read timeout and return ``b""`` when it
    expires instead of raising. I/O failures are raised and are never
    retried by the link layer.
    """

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...
