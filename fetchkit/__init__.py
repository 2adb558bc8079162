"""System information detection and formatted output for terminal fetch tools."""

__version__ = "0.1.0"