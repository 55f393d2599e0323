"""Resolve resource references to bytes through ordered URL candidates.

Templates usually reference assets relative to the site (``/img/logo.png``)
while the renderer runs without a notion of "the current page". Each
reference is therefore tried as written, then joined onto the site origin,
then joined onto the mount path and the origin. The first candidate that
answers wins; references nobody answers for are dropped from the result.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

import requests

from ogsmith.core.diagnostics import DiagnosticEmitter, resolve_emitter
from ogsmith.core.exceptions import ResourceFetchError
from ogsmith.core.http import create_session, describe_request_error


if TYPE_CHECKING:  # pragma: no cover - typing only
    from ogsmith.core.config import RenderConfig


_PROTOCOL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:|^//")


@dataclass(frozen=True, slots=True)
class FetchedResource:
    """Bytes retrieved for a reference, keyed by the reference as written."""

    src: str
    data: bytes


def with_base(path: str, base: str | None) -> str:
    """Prefix ``path`` with ``base`` unless it is absolute or already prefixed."""
    if not base or base == "/" or _PROTOCOL.match(path):
        return path
    trimmed = base.rstrip("/")
    if path.startswith(trimmed):
        return path
    return f"{trimmed}/{path.lstrip('/')}"


def candidate_urls(src: str, origin: str | None, base_url: str | None = None) -> list[str]:
    """Return the ordered list of URLs tried for ``src``."""
    candidates = [src]
    if src.startswith("/") and origin:
        candidates.append(with_base(src, origin))
        if base_url and base_url != "/" and not src.startswith(base_url):
            candidates.append(with_base(with_base(src, base_url), origin))
    return candidates


class ResourceResolver:
    """Fetch resource references with per-reference fallbacks."""

    def __init__(
        self,
        *,
        origin: str | None = None,
        base_url: str | None = "/",
        session: requests.Session | None = None,
        timeout: float = 10.0,
        max_workers: int = 8,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.origin = origin
        self.base_url = base_url
        self._session = session
        self._timeout = timeout
        self._max_workers = max_workers
        self._emitter = resolve_emitter(emitter)

    @classmethod
    def from_config(
        cls,
        config: RenderConfig,
        *,
        session: requests.Session | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> ResourceResolver:
        return cls(
            origin=config.origin,
            base_url=config.base_url,
            session=session or create_session(user_agent=config.user_agent),
            timeout=config.fetch_timeout,
            max_workers=config.max_workers,
            emitter=emitter,
        )

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = create_session()
        return self._session

    def candidates(self, src: str) -> list[str]:
        return candidate_urls(src, self.origin, self.base_url)

    def _download(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ResourceFetchError(url, reason=describe_request_error(url, exc)) from exc
        if not 200 <= response.status_code < 300:
            raise ResourceFetchError(url, status_code=response.status_code)
        return response.content

    def fetch(self, url: str) -> bytes | None:
        """Return the body for ``url``, or ``None`` on any failure.

        An empty 2xx body is a successful fetch and yields ``b""``.
        """
        try:
            return self._download(url)
        except ResourceFetchError as exc:
            self._emitter.event("resource_attempt_failed", {"url": url, "reason": str(exc)})
            return None

    def resolve(self, src: str) -> FetchedResource | None:
        """Try each candidate in order and stop at the first success."""
        attempts: list[str] = []
        for url in self.candidates(src):
            data = self.fetch(url)
            if data is None:
                attempts.append(url)
                continue
            self._emitter.event("resource_fetch", {"src": src, "url": url})
            return FetchedResource(src=src, data=data)
        self._emitter.event("resource_unresolved", {"src": src, "attempts": attempts})
        return None

    def resolve_all(
        self, sources: Iterable[str], *, executor: Executor | None = None
    ) -> list[FetchedResource]:
        """Resolve distinct references concurrently and wait for all of them.

        Results follow the first appearance of each reference; unresolved
        references are omitted.
        """
        unique = list(dict.fromkeys(sources))
        if not unique:
            return []
        if executor is not None:
            results = list(executor.map(self.resolve, unique))
        else:
            workers = min(self._max_workers, len(unique))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ogsmith-fetch") as pool:
                results = list(pool.map(self.resolve, unique))
        return [resource for resource in results if resource is not None]


__all__ = ["FetchedResource", "ResourceResolver", "candidate_urls", "with_base"]
