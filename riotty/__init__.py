"""Pseudoterminals, text-grid layout and rendering data for terminal emulators."""

__version__ = "0.1.0"