import signal

from netwatch.analyzer import (
    ALERT_MAX,
    RateAnalyzer,
    encode_alert,
    format_alert,
    main,
)
from netwatch.common import NetStats


def test_format_alert_text():
    assert format_alert("ens33", 500, 200) == (
        "ALERT: High RX rate detected on ens33: 500 B/s (Threshold: 200 B/s)"
    )


def test_encode_alert_is_nul_terminated():
    message = format_alert("ens33", 500, 200)
    data = encode_alert(message)
    assert data.endswith(b"\0")
    assert data[:-1].decode() == message


def test_encode_alert_truncates_long_messages():
    data = encode_alert("x" * 1000)
    assert len(data) == ALERT_MAX
    assert data.endswith(b"\0")


def test_first_sample_gives_no_rate():
    analyzer = RateAnalyzer()
    assert analyzer.update(NetStats(rx_bytes=100, timestamp=10)) is None
    assert analyzer.rate is None


def test_high_rate_produces_alert():
    analyzer = RateAnalyzer(threshold=200, iface="ens33")
    analyzer.update(NetStats(rx_bytes=0, timestamp=10))
    alert = analyzer.update(NetStats(rx_bytes=5000, timestamp=15))
    assert analyzer.rate == 1000
    assert alert == format_alert("ens33", analyzer.rate, 200)


def test_rate_equal_to_threshold_is_not_alert():
    analyzer = RateAnalyzer(threshold=200)
    analyzer.update(NetStats(rx_bytes=0, timestamp=1))
    assert analyzer.update(NetStats(rx_bytes=200, timestamp=2)) is None
    assert analyzer.rate == 200


def test_same_timestamp_skips_rate():
    analyzer = RateAnalyzer(threshold=0)
    analyzer.update(NetStats(rx_bytes=0, timestamp=5))
    assert analyzer.update(NetStats(rx_bytes=9999, timestamp=5)) is None
    assert analyzer.rate is None
    assert analyzer.last.rx_bytes == 9999


def test_negative_rate_truncates_toward_zero():
    analyzer = RateAnalyzer()
    analyzer.update(NetStats(rx_bytes=1000, timestamp=1))
    assert analyzer.update(NetStats(rx_bytes=993, timestamp=3)) is None
    assert analyzer.rate == -3


def test_zero_timestamp_resets_comparison():
    analyzer = RateAnalyzer(threshold=0)
    analyzer.update(NetStats(rx_bytes=0, timestamp=0))
    assert analyzer.update(NetStats(rx_bytes=100000, timestamp=9)) is None


def test_main_fails_without_shared_directory(tmp_path):
    before = signal.getsignal(signal.SIGUSR1)
    code = main([
        "--shm", str(tmp_path / "missing" / "shm"),
        "--fifo", str(tmp_path / "fifo"),
    ])
    assert code == 1
    assert signal.getsignal(signal.SIGUSR1) == before