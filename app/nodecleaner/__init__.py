"""nodecleaner - find, measure and delete dependency folders."""

__version__ = "0.1.0"
