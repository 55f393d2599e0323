from __future__ import annotations

from pydantic import ValidationError
import pytest

from ogsmith.core.config import RenderConfig


def test_defaults() -> None:
    config = RenderConfig()

    assert config.origin is None
    assert config.base_url == "/"
    assert config.device_pixel_ratio == 2.0
    assert config.max_workers == 8


def test_origin_and_base_url_are_normalised() -> None:
    config = RenderConfig(origin=" https://x.test/ ", base_url="blog/")

    assert config.origin == "https://x.test"
    assert config.base_url == "/blog/"
    assert RenderConfig(origin="", base_url="").base_url == "/"


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        RenderConfig(origins="https://x.test")


def test_from_env_reads_prefixed_variables() -> None:
    config = RenderConfig.from_env(
        {
            "OGSMITH_ORIGIN": "https://env.test",
            "OGSMITH_BASE_URL": "/docs",
            "OGSMITH_FETCH_TIMEOUT": "3.5",
            "OGSMITH_MAX_WORKERS": "2",
        },
        max_workers=4,
    )

    assert config.origin == "https://env.test"
    assert config.base_url == "/docs"
    assert config.fetch_timeout == 3.5
    assert config.max_workers == 4


def test_from_env_validates_values() -> None:
    with pytest.raises(ValidationError):
        RenderConfig.from_env({"OGSMITH_MAX_WORKERS": "0"})
