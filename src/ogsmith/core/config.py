"""Configuration models used by the raster pipeline.

RenderConfig

`origin` (`str | None`)
: Absolute origin (scheme and host) of the hosting site. Root-relative
  resource references such as ``/img/logo.png`` are joined onto it when the
  literal reference cannot be fetched.

`base_url` (`str`)
: Path prefix the site is mounted under. When it is not ``/`` and a
  reference does not already start with it, the prefixed form is tried as a
  last candidate.

`width` / `height` (`int`)
: Logical canvas size in CSS pixels before the device pixel ratio applies.

`device_pixel_ratio` (`float`)
: Multiplier applied to the canvas size for the final raster.

`fetch_timeout` (`float`)
: Timeout in seconds forwarded to every HTTP request.

`max_workers` (`int`)
: Upper bound on concurrently resolved resource references.

`user_agent` (`str`)
: ``User-Agent`` header sent with resource requests.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


ENV_PREFIX = "OGSMITH_"
DEFAULT_USER_AGENT = "ogsmith-resource-resolver"


class RenderConfig(BaseModel):
    """Host settings consumed by the provisioning steps."""

    model_config = ConfigDict(extra="forbid")

    origin: str | None = Field(default=None, description="Site origin")
    base_url: str = Field(default="/", description="Mount path of the site")
    width: int = Field(default=1200, gt=0)
    height: int = Field(default=600, gt=0)
    device_pixel_ratio: float = Field(default=2.0, gt=0)
    fetch_timeout: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=8, ge=1)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("origin")
    @classmethod
    def strip_origin(cls, value: str | None) -> str | None:
        """Drop trailing slashes so joins never produce ``//``."""
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    @field_validator("base_url")
    @classmethod
    def normalise_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return "/"
        if not value.startswith("/"):
            value = f"/{value}"
        return value

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> RenderConfig:
        """Build a configuration from ``OGSMITH_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_name in ("origin", "base_url", "fetch_timeout", "max_workers", "user_agent"):
            raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw:
                values[field_name] = raw
        values.update(overrides)
        return cls.model_validate(values)


__all__ = ["DEFAULT_USER_AGENT", "ENV_PREFIX", "RenderConfig"]
