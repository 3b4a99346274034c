"""brewer - Homebrew formula generation and tap publishing."""

__version__ = "0.1.0"
