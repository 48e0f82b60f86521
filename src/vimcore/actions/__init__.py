"""High-level editing verbs reused across modes."""

from .core import enter_ex_mode, enter_insert_mode, exit_to_normal_mode
from .motion import (
    half_page,
    move_down,
    move_half_page_down,
    move_half_page_up,
    move_left,
    move_right,
    move_up,
)
from .command import command_names, run_ex_command

__all__ = [
    "enter_insert_mode",
    "enter_ex_mode",
    "exit_to_normal_mode",
    "half_page",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_half_page_down",
    "move_half_page_up",
    "command_names",
    "run_ex_command",
]
