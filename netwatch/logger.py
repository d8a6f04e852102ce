"""Read alerts from the analyzer's pipe and print them."""

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, Iterator

from .common import FIFO_PATH

_CHUNK = 511


def iter_alerts(stream: BinaryIO) -> Iterator[str]:
    """Yield each NUL-terminated alert from a binary stream until it closes."""
    pending = b""
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        pending += chunk
        *messages, pending = pending.split(b"\0")
        for message in messages:
            if message:
                yield message.decode("utf-8", errors="replace")
    if pending:
        yield pending.decode("utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="netwatch-logger", description=__doc__)
    parser.add_argument("--fifo", default=FIFO_PATH)
    args = parser.parse_args(argv)

    print(f"Logger waiting to open FIFO {args.fifo} for reading...")
    try:
        stream = open(args.fifo, "rb", buffering=0)
    except OSError as exc:
        print(f"open FIFO for reading (logger): {exc}", file=sys.stderr)
        return 1

    with stream:
        print("Logger connected to Analyzer via FIFO.")
        print("Logger waiting for alerts...")
        try:
            for alert in iter_alerts(stream):
                print(f"Logger Received: {alert}")
        except OSError as exc:
            print(f"read from FIFO (logger): {exc}", file=sys.stderr)
        else:
            print("Logger: Analyzer closed the pipe. Exiting.")
    print("Logger exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())