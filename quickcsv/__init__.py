"""Labelled, typed access to CSV documents held in memory."""

__version__ = "1.0.0"
__all__ = ["converter", "document", "grid", "params", "parser"]