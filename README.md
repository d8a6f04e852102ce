# netwatch

netwatch watches traffic on a network interface and raises an alert when the
receive rate goes over a threshold. It runs on Linux and is split into three
cooperating processes:

- **analyzer** (`netwatch-analyzer`): creates the shared statistics file and
  the alert pipe. It waits for `SIGUSR1` from monitors, reads the latest
  counters, works out the RX rate in bytes per second and writes an alert to
  the pipe when the rate is over the threshold.
- **monitor** (`netwatch-monitor`): reads the interface counters from
  `/proc/net/dev` at a fixed interval, writes them to the shared statistics
  file and signals the analyzer with `SIGUSR1`. It stops once the analyzer can
  no longer be signalled.
- **logger** (`netwatch-logger`): reads alerts from the pipe and prints them.
  It exits when the analyzer closes the pipe.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running

Start the processes in three terminals. The analyzer comes first, because it
creates the shared statistics file and the pipe. It blocks until a logger
opens the pipe.

```
netwatch-analyzer
```

```
netwatch-logger
```

Once the logger has connected, the analyzer prints its process id. Give that
id to the monitor:

```
netwatch-monitor <analyzer_pid>
```

Stop the analyzer with Ctrl-C or `SIGTERM`. On exit it removes the shared
statistics file and the pipe.

### Options

`netwatch-analyzer`

- `--threshold N`: RX rate in bytes per second above which an alert is sent
  (default `200`).
- `--iface NAME`: interface name used in alert messages (default `ens33`).
- `--shm PATH`: shared statistics file (default `/tmp/net_monitor_shm`).
- `--fifo PATH`: alert pipe (default `/tmp/net_monitor_fifo`).

`netwatch-monitor <analyzer_pid>`

- `--iface NAME`: interface to sample (default `ens33`).
- `--interval SECONDS`: pause between samples (default `5.0`).
- `--shm PATH`: shared statistics file (default `/tmp/net_monitor_shm`).

`netwatch-logger`

- `--fifo PATH`: alert pipe (default `/tmp/net_monitor_fifo`).

## Using it as a library

```python
from netwatch.monitor import parse_net_dev
from netwatch.analyzer import RateAnalyzer

with open("/proc/net/dev") as fh:
    stats = parse_net_dev(fh.read(), "eth0", timestamp=1_700_000_000)

analyzer = RateAnalyzer(threshold=200, iface="eth0")
alert = analyzer.update(stats)  # None on the first sample or below threshold
print(analyzer.rate)            # None until two samples with rising timestamps
```

- `netwatch.common.NetStats` holds the counters (`rx_bytes`, `rx_packets`,
  `rx_errors`, `tx_bytes`, `tx_packets`, `tx_errors`, `timestamp`) and has
  `pack()` and `NetStats.unpack()` for its fixed 56-byte binary layout.
- `netwatch.common.SharedStats` is the file-backed, memory-mapped statistics
  area. `write()` and `read()` take an exclusive file lock; it is a context
  manager, and `unlink()` removes the backing file.
- `netwatch.monitor.parse_net_dev()` extracts one interface's counters from
  `/proc/net/dev` text and raises `LookupError` when the interface is absent;
  `read_net_stats()` reads the file and stamps the current time.
- `netwatch.analyzer.format_alert()` builds the alert text and
  `encode_alert()` turns it into at most 256 NUL-terminated bytes.
- `netwatch.logger.iter_alerts()` yields the alert messages from a binary
  stream in which each message ends with a NUL byte.

## Limitations

- Only the receive rate is checked; transmit counters are recorded but never
  alerted on.
- The logger prints alerts to standard output only; it does not write a log
  file.
- Counters come from `/proc/net/dev`, so the monitor works on Linux only.