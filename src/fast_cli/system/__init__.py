"""Operating system integration: editor and clipboard."""

from fast_cli.system.clipboard import copy_to_clipboard
from fast_cli.system.editor import (
    get_available_editor,
    is_command_available,
    open_editor_and_read,
)

__all__ = [
    "copy_to_clipboard",
    "get_available_editor",
    "is_command_available",
    "open_editor_and_read",
]
