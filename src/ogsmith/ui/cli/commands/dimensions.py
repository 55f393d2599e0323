"""Report image dimensions read from file headers."""

from __future__ import annotations

import json

import typer

from ogsmith.images import detect_image_size, sniff_image_format

from .._options import ImagePathArgument, JsonOption
from ..state import emit_warning, get_cli_state


def _cell(value: object | None) -> str:
    return "-" if value is None else str(value)


def dimensions(paths: ImagePathArgument, as_json: JsonOption = False) -> None:
    """Print the format, width and height of each image."""
    rows: list[dict[str, object]] = []
    for path in paths:
        data = path.read_bytes()
        size = detect_image_size(data)
        if not size:
            emit_warning(f"Unable to read dimensions from '{path.name}'.")
        rows.append({"path": str(path), "format": sniff_image_format(data), **size.as_dict()})

    if as_json:
        for row in rows:
            typer.echo(json.dumps(row))
        return

    from rich.table import Table

    table = Table("File", "Format", "Width", "Height")
    for row in rows:
        table.add_row(
            str(row["path"]),
            _cell(row.get("format")),
            _cell(row.get("width")),
            _cell(row.get("height")),
        )
    get_cli_state().console.print(table)


__all__ = ["dimensions"]
