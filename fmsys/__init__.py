"""Multi-threaded file management server and client, with small text tools."""

__version__ = "0.1.0"