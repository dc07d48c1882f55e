"""Clipboard access."""

from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Returns:
        False when no clipboard mechanism is available (headless Linux without
        xclip/xsel, for instance)

    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning("Could not copy to clipboard: %s", e)
        return False
    return True
