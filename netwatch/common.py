"""Shared definitions: the statistics record and the shared region that holds it."""

from __future__ import annotations

import fcntl
import mmap
import os
import struct
from contextlib import contextmanager
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import ClassVar, Iterator

SHM_PATH = "/tmp/net_monitor_shm"
FIFO_PATH = "/tmp/net_monitor_fifo"
NET_INTERFACE = "ens33"


@dataclass(frozen=True)
class NetStats:
    """Interface counters sampled at one moment."""

    rx_bytes: int = 0
    rx_packets: int = 0
    rx_errors: int = 0
    tx_bytes: int = 0
    tx_packets: int = 0
    tx_errors: int = 0
    timestamp: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("=7q")
    SIZE: ClassVar[int] = _STRUCT.size

    def pack(self) -> bytes:
        """Return the fixed-size binary form of the record."""
        try:
            return self._STRUCT.pack(*astuple(self))
        except struct.error as exc:
            raise ValueError(f"cannot pack statistics: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "NetStats":
        """Build a record from its binary form."""
        try:
            return cls(*cls._STRUCT.unpack(data))
        except struct.error as exc:
            raise ValueError(f"cannot unpack statistics: {exc}") from exc


class SharedStats:
    """A file-backed memory region holding one NetStats, guarded by a file lock."""

    def __init__(self, path: str | os.PathLike[str] = SHM_PATH, create: bool = False) -> None:
        self.path = Path(path)
        flags = os.O_RDWR | (os.O_CREAT if create else 0)
        fd = os.open(self.path, flags, 0o666)
        try:
            if create:
                os.ftruncate(fd, 0)
                os.ftruncate(fd, NetStats.SIZE)
            elif os.fstat(fd).st_size < NetStats.SIZE:
                raise ValueError(f"shared region {self.path} is too small")
            self._map = mmap.mmap(fd, NetStats.SIZE)
        except BaseException:
            os.close(fd)
            raise
        self._fd = fd

    @contextmanager
    def _locked(self) -> Iterator[mmap.mmap]:
        if self._map.closed:
            raise ValueError("shared stats are closed")
        fcntl.flock(self._fd, fcntl.LOCK_EX)
        try:
            yield self._map
        finally:
            fcntl.flock(self._fd, fcntl.LOCK_UN)

    def write(self, stats: NetStats) -> None:
        """Store a record in the shared region."""
        data = stats.pack()
        with self._locked() as region:
            region[: NetStats.SIZE] = data

    def read(self) -> NetStats:
        """Return the record currently stored in the shared region."""
        with self._locked() as region:
            data = bytes(region[: NetStats.SIZE])
        return NetStats.unpack(data)

    def close(self) -> None:
        """Release the mapping; calling it again does nothing."""
        if not self._map.closed:
            self._map.close()
            os.close(self._fd)

    def unlink(self) -> None:
        """Remove the backing file."""
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> "SharedStats":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()