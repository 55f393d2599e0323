"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


FETCH_PANEL = "Fetching"
OUTPUT_PANEL = "Output"

ImagePathArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="IMAGE...",
        help="Encoded PNG, JPEG or GIF files to inspect.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

SourceArgument = Annotated[
    list[str],
    typer.Argument(
        metavar="SRC...",
        help="Resource references as they appear in the tree (e.g. /img/logo.png).",
    ),
]

OriginOption = Annotated[
    str | None,
    typer.Option(
        "--origin",
        help="Site origin joined onto root-relative references (e.g. https://example.com).",
        rich_help_panel=FETCH_PANEL,
    ),
]

BaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--base-url",
        help="Path prefix the site is mounted under.",
        rich_help_panel=FETCH_PANEL,
    ),
]

TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        min=0.1,
        help="Per-request timeout in seconds.",
        rich_help_panel=FETCH_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--output",
        "-o",
        file_okay=False,
        dir_okay=True,
        help="Directory receiving the fetched files.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Emit one JSON object per line instead of a table.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]
