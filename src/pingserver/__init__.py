"""Minimal HTTP server that reports ping latency to a host."""

__version__ = "0.1.0"
