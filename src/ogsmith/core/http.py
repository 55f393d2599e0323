"""HTTP helpers with cross-platform TLS guidance."""

from __future__ import annotations

from collections.abc import Mapping

import requests

from ogsmith.core.config import DEFAULT_USER_AGENT


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def create_session(
    *,
    user_agent: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> requests.Session:
    """Return a session preconfigured with the resolver headers."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
    session.headers.setdefault("Accept", "*/*")
    if headers:
        session.headers.update(dict(headers))
    return session


def describe_request_error(url: str, exc: BaseException) -> str:
    """Return a one-line description of a failed request, with TLS hints."""
    if isinstance(exc, requests.exceptions.SSLError):
        return _tls_help(url)
    return f"{url}: {exc}"


__all__ = ["create_session", "describe_request_error"]
