"""Command-line interface: interactive menu loop and one-shot evaluation."""

__version__ = "0.1.0"
