from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import threading

import requests

from ogsmith.core.config import RenderConfig
from ogsmith.core.diagnostics import NullEmitter
from ogsmith.resources import FetchedResource, ResourceResolver, candidate_urls, with_base


class FakeResponse:
    def __init__(self, status_code: int, content: bytes) -> None:
        self.status_code = status_code
        self.content = content


class FakeSession:
    def __init__(self, responses: dict[str, FakeResponse | Exception]) -> None:
        self.responses = responses
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def get(self, url: str, timeout: float) -> FakeResponse:
        with self._lock:
            self.calls.append(url)
        outcome = self.responses.get(url)
        if outcome is None:
            raise requests.exceptions.MissingSchema(f"Invalid URL {url!r}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _resolver(session: FakeSession, **kwargs) -> ResourceResolver:
    kwargs.setdefault("origin", "https://x.test")
    return ResourceResolver(session=session, emitter=NullEmitter(), **kwargs)


def test_with_base_joins_once() -> None:
    assert with_base("/img.png", "https://x.test") == "https://x.test/img.png"
    assert with_base("/img.png", "https://x.test/") == "https://x.test/img.png"
    assert with_base("/blog/img.png", "/blog") == "/blog/img.png"
    assert with_base("/img.png", "/") == "/img.png"
    assert with_base("https://cdn.test/a.png", "https://x.test") == "https://cdn.test/a.png"


def test_candidate_urls_for_root_relative_reference() -> None:
    assert candidate_urls("/img.png", "https://x.test", "/") == [
        "/img.png",
        "https://x.test/img.png",
    ]
    assert candidate_urls("/img.png", "https://x.test", "/blog/") == [
        "/img.png",
        "https://x.test/img.png",
        "https://x.test/blog/img.png",
    ]
    assert candidate_urls("/blog/img.png", "https://x.test", "/blog/") == [
        "/blog/img.png",
        "https://x.test/blog/img.png",
    ]


def test_candidate_urls_keep_absolute_and_relative_references_literal() -> None:
    assert candidate_urls("https://cdn.test/a.png", "https://x.test", "/blog") == [
        "https://cdn.test/a.png"
    ]
    assert candidate_urls("img.png", "https://x.test", "/blog") == ["img.png"]


def test_resolve_falls_through_to_origin_candidate() -> None:
    session = FakeSession({"https://x.test/img.png": FakeResponse(200, b"png-bytes")})

    resource = _resolver(session).resolve("/img.png")

    assert resource == FetchedResource(src="/img.png", data=b"png-bytes")
    assert session.calls == ["/img.png", "https://x.test/img.png"]


def test_resolve_stops_at_first_success() -> None:
    session = FakeSession(
        {
            "https://x.test/img.png": FakeResponse(200, b"first"),
            "https://x.test/blog/img.png": FakeResponse(200, b"second"),
        }
    )

    resource = _resolver(session, base_url="/blog").resolve("/img.png")

    assert resource is not None and resource.data == b"first"
    assert "https://x.test/blog/img.png" not in session.calls


def test_resolve_treats_errors_and_bad_status_as_soft_failures() -> None:
    session = FakeSession(
        {
            "https://x.test/img.png": FakeResponse(404, b"missing"),
            "https://x.test/blog/img.png": requests.ConnectionError("refused"),
        }
    )

    assert _resolver(session, base_url="/blog").resolve("/img.png") is None
    assert session.calls == [
        "/img.png",
        "https://x.test/img.png",
        "https://x.test/blog/img.png",
    ]


def test_empty_success_body_resolves() -> None:
    session = FakeSession({"https://x.test/empty.txt": FakeResponse(200, b"")})
    resolver = _resolver(session)

    assert resolver.fetch("https://x.test/empty.txt") == b""
    assert resolver.resolve_all(["/empty.txt"]) == [FetchedResource("/empty.txt", b"")]


class RecordingEmitter(NullEmitter):
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def event(self, name, payload) -> None:
        self.events.append((name, dict(payload)))


def test_resolve_reports_each_failed_candidate() -> None:
    session = FakeSession({"https://x.test/img.png": FakeResponse(404, b"")})
    emitter = RecordingEmitter()
    resolver = ResourceResolver(session=session, origin="https://x.test", emitter=emitter)

    assert resolver.resolve("/img.png") is None

    failed = [payload["url"] for name, payload in emitter.events if name == "resource_attempt_failed"]
    assert failed == ["/img.png", "https://x.test/img.png"]
    assert emitter.events[-1] == (
        "resource_unresolved",
        {"src": "/img.png", "attempts": ["/img.png", "https://x.test/img.png"]},
    )


def test_resolve_all_omits_unresolved_and_keeps_order() -> None:
    session = FakeSession(
        {
            "https://x.test/a.png": FakeResponse(200, b"a"),
            "https://cdn.test/c.png": FakeResponse(200, b"c"),
        }
    )

    resources = _resolver(session).resolve_all(
        ["/a.png", "/missing.png", "https://cdn.test/c.png", "/a.png"]
    )

    assert resources == [
        FetchedResource("/a.png", b"a"),
        FetchedResource("https://cdn.test/c.png", b"c"),
    ]
    assert session.calls.count("/a.png") == 1


def test_resolve_all_runs_locators_concurrently() -> None:
    barrier = threading.Barrier(2, timeout=5)

    class BarrierSession(FakeSession):
        def get(self, url: str, timeout: float) -> FakeResponse:
            if url.startswith("https://"):
                barrier.wait()
            return super().get(url, timeout)

    session = BarrierSession(
        {
            "https://x.test/a.png": FakeResponse(200, b"a"),
            "https://x.test/b.png": FakeResponse(200, b"b"),
        }
    )

    resources = _resolver(session, max_workers=2).resolve_all(["/a.png", "/b.png"])

    assert [resource.data for resource in resources] == [b"a", b"b"]


def test_resolve_all_accepts_external_executor() -> None:
    session = FakeSession({"https://x.test/a.png": FakeResponse(200, b"a")})

    with ThreadPoolExecutor(max_workers=1) as executor:
        resources = _resolver(session).resolve_all(["/a.png"], executor=executor)

    assert resources == [FetchedResource("/a.png", b"a")]
    assert _resolver(session).resolve_all([]) == []


def test_from_config_uses_configured_origin_and_base() -> None:
    config = RenderConfig(origin="https://x.test/", base_url="docs", fetch_timeout=2.5)
    session = FakeSession({})

    resolver = ResourceResolver.from_config(config, session=session, emitter=NullEmitter())

    assert resolver.candidates("/img.png") == [
        "/img.png",
        "https://x.test/img.png",
        "https://x.test/docs/img.png",
    ]
