"""Use-case portfolio scoring and value estimation engine."""

__version__ = "0.1.0"
