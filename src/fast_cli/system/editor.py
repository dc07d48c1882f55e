"""Interactive text editing through the user's editor."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import shutil
import sys
import tempfile
import uuid
from pathlib import Path

import aiofiles

from fast_cli.errors import EditorError

logger = logging.getLogger(__name__)

WINDOWS_EDITORS = ("notepad",)
POSIX_EDITORS = ("nvim", "vim", "vi", "nano")


def is_command_available(command: str) -> bool:
    return shutil.which(command) is not None


def get_available_editor() -> str:
    """Return the editor command line to use.

    ``$EDITOR`` wins; otherwise the first installed candidate for the
    platform is used.

    Raises:
        EditorError: If no editor can be found

    """
    editor = os.getenv("EDITOR", "").strip()
    if editor:
        return editor

    candidates = WINDOWS_EDITORS if sys.platform == "win32" else POSIX_EDITORS
    for candidate in candidates:
        if is_command_available(candidate):
            return candidate

    raise EditorError("No text editor found. Please set the EDITOR environment variable.")


async def open_editor_and_read(title: str = "", filename_prefix: str = "fast-editor") -> str:
    """Open a temporary file in the editor and return what the user wrote.

    The file starts with ``# <title>`` when a title is given; lines starting
    with ``#`` are dropped from the result.

    Raises:
        EditorError: If no editor is available or it exits with a non-zero code

    """
    editor = shlex.split(get_available_editor())
    tmp_file = Path(tempfile.gettempdir()) / f"{filename_prefix}-{uuid.uuid4()}.txt"

    async with aiofiles.open(tmp_file, "w", encoding="utf-8") as f:
        await f.write(f"# {title}\n" if title else "")

    try:
        logger.debug("Opening %s with %s", tmp_file, editor[0])
        try:
            process = await asyncio.create_subprocess_exec(*editor, str(tmp_file))
        except OSError as e:
            raise EditorError(f"Failed to start editor {editor[0]}: {e}") from e

        code = await process.wait()
        if code != 0:
            raise EditorError(f"{editor[0]} exited with code {code}")

        async with aiofiles.open(tmp_file, encoding="utf-8") as f:
            content = await f.read()
    finally:
        tmp_file.unlink(missing_ok=True)

    lines = [line for line in content.splitlines() if not line.startswith("#")]
    return "\n".join(lines).strip()
