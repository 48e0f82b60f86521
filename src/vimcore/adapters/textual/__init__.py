"""Textual adapter for vimcore.

Only the controller is imported eagerly; ``app`` requires Textual at import.
"""

from .controller import RenderFrame, TextualEditorAdapter, TextualUIHooks

__all__ = ["RenderFrame", "TextualEditorAdapter", "TextualUIHooks"]
