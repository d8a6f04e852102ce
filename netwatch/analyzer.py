"""Receive samples from monitors, compute rates and forward alerts."""

from __future__ import annotations

import argparse
import os
import signal
import sys

from .common import FIFO_PATH, NET_INTERFACE, SHM_PATH, NetStats, SharedStats

DEFAULT_THRESHOLD = 200
ALERT_MAX = 256


def format_alert(iface: str, rate: int, threshold: int) -> str:
    """Return the alert text for a receive rate above the threshold."""
    return (
        f"ALERT: High RX rate detected on {iface}: {rate} B/s "
        f"(Threshold: {threshold} B/s)"
    )


def encode_alert(message: str) -> bytes:
    """Encode an alert for the pipe: at most ALERT_MAX bytes, NUL terminated."""
    data = message.encode("utf-8")[: ALERT_MAX - 1]
    return data + b"\0"


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


class RateAnalyzer:
    """Track successive samples and report receive rates above a threshold."""

    def __init__(self, threshold: int = DEFAULT_THRESHOLD, iface: str = NET_INTERFACE) -> None:
        self.threshold = threshold
        self.iface = iface
        self.last = NetStats()
        self.rate: int | None = None

    def update(self, stats: NetStats) -> str | None:
        """Take a new sample; return an alert message if the rate is too high."""
        self.rate = None
        alert = None
        previous = self.last
        if previous.timestamp != 0 and stats.timestamp > previous.timestamp:
            elapsed = stats.timestamp - previous.timestamp
            self.rate = _trunc_div(stats.rx_bytes - previous.rx_bytes, elapsed)
            if self.rate > self.threshold:
                alert = format_alert(self.iface, self.rate, self.threshold)
        self.last = stats
        return alert


def _serve(shared: SharedStats, fifo_path: str, analyzer: RateAnalyzer, pending: list[bool]) -> int:
    pid = os.getpid()
    try:
        os.mkfifo(fifo_path, 0o666)
    except FileExistsError:
        pass
    except OSError as exc:
        print(f"mkfifo (analyzer): {exc}", file=sys.stderr)
        return 1

    print(f"Analyzer (PID: {pid}) waiting for Logger to connect to FIFO {fifo_path}...")
    try:
        pipe = open(fifo_path, "wb", buffering=0)
    except OSError as exc:
        print(f"open FIFO for writing (analyzer): {exc}", file=sys.stderr)
        return 1

    with pipe:
        print("Analyzer connected to Logger via FIFO.")
        print(f"Analyzer (PID: {pid}) started. Waiting for signals...")
        print(f"Run monitors like: netwatch-monitor {pid}")
        while True:
            signal.pause()
            if not pending[0]:
                continue
            pending[0] = False
            stats = shared.read()
            print(
                f"Analyzer received data: RX bytes={stats.rx_bytes}, "
                f"TX bytes={stats.tx_bytes} at {stats.timestamp}"
            )
            alert = analyzer.update(stats)
            if analyzer.rate is not None:
                print(f"Analyzer calculated RX rate: {analyzer.rate} B/s")
            if alert is not None:
                print(f"Analyzer: Sending alert: {alert}")
                try:
                    pipe.write(encode_alert(alert))
                except OSError as exc:
                    print(f"write to FIFO (analyzer): {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="netwatch-analyzer", description=__doc__)
    parser.add_argument("--threshold", type=int, default=DEFAULT_THRESHOLD)
    parser.add_argument("--iface", default=NET_INTERFACE)
    parser.add_argument("--shm", default=SHM_PATH)
    parser.add_argument("--fifo", default=FIFO_PATH)
    args = parser.parse_args(argv)

    pending = [False]

    def on_sample(signum: int, frame: object) -> None:
        pending[0] = True

    def on_terminate(signum: int, frame: object) -> None:
        print(f"\nAnalyzer received signal {signum}, shutting down...")
        raise SystemExit(0)

    previous = {
        signum: signal.getsignal(signum)
        for signum in (signal.SIGUSR1, signal.SIGINT, signal.SIGTERM)
    }
    try:
        signal.signal(signal.SIGUSR1, on_sample)
        signal.signal(signal.SIGINT, on_terminate)
        signal.signal(signal.SIGTERM, on_terminate)
        try:
            shared = SharedStats(args.shm, create=True)
        except OSError as exc:
            print(f"analyzer: cannot create shared stats: {exc}", file=sys.stderr)
            return 1
        try:
            return _serve(shared, args.fifo, RateAnalyzer(args.threshold, args.iface), pending)
        finally:
            print("Analyzer cleaning up IPC resources...")
            shared.close()
            shared.unlink()
            try:
                os.unlink(args.fifo)
            except FileNotFoundError:
                pass
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


if __name__ == "__main__":
    sys.exit(main())