"""Diagnostic abstractions shared across the provisioning pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None and self.debug_enabled:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "font_loaded":
        family = data.get("family") or "<unknown>"
        subset = data.get("subset") or "<unknown>"
        return f"Loaded font {family} as {subset}"

    if name == "resource_fetch":
        src = data.get("src") or "<unknown>"
        url = data.get("url")
        if url and url != src:
            return f"Fetched: {src} (via {url})"
        return f"Fetched: {src}"

    if name == "resource_unresolved":
        src = data.get("src") or "<unknown>"
        attempts = data.get("attempts") or []
        suffix = f" after {len(attempts)} attempt(s)" if attempts else ""
        return f"Unable to resolve resource: {src}{suffix}"

    if name == "resource_attempt_failed":
        reason = data.get("reason") or data.get("url") or "<unknown>"
        return f"Fetch attempt failed: {reason}"

    return None


def resolve_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return the emitter to use, defaulting to the logging bridge."""
    return emitter if emitter is not None else LoggingEmitter()


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
    "resolve_emitter",
]
