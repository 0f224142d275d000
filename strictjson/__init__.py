"""Strict JSON parsing with exact error positions and value streaming."""

__version__ = "0.1.0"

__all__ = ["de", "error", "linecol", "numbers", "reader", "stream"]