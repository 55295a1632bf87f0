"""Command-line line-buffer editor with buffers that persist between runs."""

__all__ = [
    "buffer",
    "commands",
    "runtime",
    "cli",
    "config",
]

__version__ = "0.2.0"
