"""Network interface traffic monitor, receive-rate analyzer and alert logger."""

__version__ = "0.1.0"
__all__ = ["common", "monitor", "analyzer", "logger"]