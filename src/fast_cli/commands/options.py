"""Options shared by several commands."""

from typing import Annotated

import typer

LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARN, ERROR, SILENT)",
        case_sensitive=False,
    ),
]
