"""Command-line (``:``) editing."""

from .line_editor import ExLineEditor, ExResult, ExStatus

__all__ = ["ExLineEditor", "ExResult", "ExStatus"]
