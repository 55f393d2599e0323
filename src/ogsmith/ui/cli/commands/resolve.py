"""Fetch resource references the way the renderer does and store them."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import typer

from ogsmith.core.config import RenderConfig
from ogsmith.core.http import create_session
from ogsmith.resources import ResourceResolver

from .._options import BaseUrlOption, OriginOption, OutputDirOption, SourceArgument, TimeoutOption
from ..diagnostics import CliEmitter
from ..state import emit_warning


def _target_name(src: str, taken: set[str]) -> str:
    name = PurePosixPath(urlparse(src).path).name or "resource"
    stem, suffix = PurePosixPath(name).stem, PurePosixPath(name).suffix
    candidate = name
    counter = 1
    while candidate in taken:
        candidate = f"{stem}-{counter}{suffix}"
        counter += 1
    taken.add(candidate)
    return candidate


def resolve(
    sources: SourceArgument,
    origin: OriginOption = None,
    base_url: BaseUrlOption = None,
    timeout: TimeoutOption = None,
    output: OutputDirOption = Path("."),
) -> None:
    """Resolve references through their candidate URLs and write the bytes."""
    overrides: dict[str, object] = {}
    if origin is not None:
        overrides["origin"] = origin
    if base_url is not None:
        overrides["base_url"] = base_url
    if timeout is not None:
        overrides["fetch_timeout"] = timeout
    config = RenderConfig.from_env(**overrides)

    resolver = ResourceResolver.from_config(
        config,
        session=create_session(user_agent=config.user_agent),
        emitter=CliEmitter(),
    )
    resources = resolver.resolve_all(sources)

    output.mkdir(parents=True, exist_ok=True)
    taken: set[str] = set()
    resolved: set[str] = set()
    for resource in resources:
        target = output / _target_name(resource.src, taken)
        target.write_bytes(resource.data)
        resolved.add(resource.src)
        typer.echo(f"{resource.src} -> {target}")

    for src in dict.fromkeys(sources):
        if src not in resolved:
            candidates = ", ".join(resolver.candidates(src))
            emit_warning(f"Unable to resolve '{src}' (tried {candidates}).")


__all__ = ["resolve"]
