"""Viewport and cursor engine."""

from .viewport import Position, Size, Viewport, VisibleLines

__all__ = ["Position", "Size", "Viewport", "VisibleLines"]
