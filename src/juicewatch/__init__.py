"""Battery status monitor with threshold notifications."""

__version__ = "0.1.0"
