"""Operator-pending mode.

Registered so it can be switched to, but no binding enters it and it has
no behaviour of its own: every key is a no-op.
"""

from __future__ import annotations

from .base_mode import EditorMode, Mode


class OperatorMode(Mode):
    name = EditorMode.OPERATOR
