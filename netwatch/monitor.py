"""Sample interface counters and hand them to the analyzer."""

from __future__ import annotations

import argparse
import os
import signal
import sys
import time

from .common import NET_INTERFACE, SHM_PATH, NetStats, SharedStats

NET_DEV_PATH = "/proc/net/dev"
_HEADER_LINES = 2


def parse_net_dev(text: str, iface: str = NET_INTERFACE, timestamp: int = 0) -> NetStats:
    """Extract the counters of one interface from /proc/net/dev content."""
    marker = f"{iface}:"
    for line in text.splitlines()[_HEADER_LINES:]:
        if marker not in line:
            continue
        fields = line.partition(marker)[2].split()
        try:
            rx_bytes, rx_packets, rx_errors = (int(v) for v in fields[0:3])
            tx_bytes, tx_packets, tx_errors = (int(v) for v in fields[8:11])
        except ValueError as exc:
            raise ValueError(f"malformed statistics line for {iface}: {line!r}") from exc
        if len(fields) < 11:
            raise ValueError(f"malformed statistics line for {iface}: {line!r}")
        return NetStats(rx_bytes, rx_packets, rx_errors, tx_bytes, tx_packets, tx_errors, timestamp)
    raise LookupError(f"Interface {iface} not found in {NET_DEV_PATH}")


def read_net_stats(iface: str = NET_INTERFACE, path: str | os.PathLike[str] = NET_DEV_PATH) -> NetStats:
    """Read the current counters of an interface, stamped with the current time."""
    with open(path, encoding="ascii", errors="replace") as handle:
        text = handle.read()
    return parse_net_dev(text, iface, int(time.time()))


def run_monitor(
    analyzer_pid: int,
    shared: SharedStats,
    iface: str = NET_INTERFACE,
    interval: float = 5.0,
) -> int:
    """Sample forever until the analyzer cannot be signalled; return samples written."""
    pid = os.getpid()
    written = 0
    while True:
        try:
            stats = read_net_stats(iface, NET_DEV_PATH)
        except (OSError, LookupError, ValueError) as exc:
            print(exc, file=sys.stderr)
            print(f"Monitor (PID: {pid}) failed to get net stats", file=sys.stderr)
        else:
            shared.write(stats)
            written += 1
            print(
                f"Monitor (PID: {pid}) wrote {stats.rx_bytes} RX bytes, "
                f"{stats.tx_bytes} TX bytes at {stats.timestamp}"
            )
            try:
                os.kill(analyzer_pid, signal.SIGUSR1)
            except OSError as exc:
                print(f"kill (monitor): {exc}", file=sys.stderr)
                return written
        time.sleep(interval)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="netwatch-monitor", description=__doc__)
    parser.add_argument("analyzer_pid", type=int)
    parser.add_argument("--iface", default=NET_INTERFACE)
    parser.add_argument("--interval", type=float, default=5.0)
    parser.add_argument("--shm", default=SHM_PATH)
    args = parser.parse_args(argv)

    try:
        shared = SharedStats(args.shm, create=False)
    except (OSError, ValueError) as exc:
        print(f"monitor: cannot attach to shared stats: {exc}", file=sys.stderr)
        return 1

    pid = os.getpid()
    with shared:
        print(f"Monitor (PID: {pid}) started, targeting Analyzer PID: {args.analyzer_pid}")
        run_monitor(args.analyzer_pid, shared, args.iface, args.interval)
    print(f"Monitor (PID: {pid}) exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())