"""Font, media and metadata provisioning for tree-to-raster rendering."""

from __future__ import annotations

from ogsmith.core.config import RenderConfig
from ogsmith.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from ogsmith.core.exceptions import (
    FontRegistrationError,
    OgsmithError,
    ResourceFetchError,
    UnsupportedFormatError,
)
from ogsmith.engine import EngineFactory, RenderEngine
from ogsmith.fonts import (
    FontDescriptor,
    FontStateStore,
    FontStyle,
    get_font_state,
    load_fonts,
    rewrite_font_families,
)
from ogsmith.images import ImageSize, detect_image_size, sniff_image_format
from ogsmith.nodes import NodeStyle, StyledNode, collect_resource_urls
from ogsmith.pipeline import RasterPipeline
from ogsmith.resources import FetchedResource, ResourceResolver, candidate_urls
from ogsmith.version import get_version


__version__ = get_version()

__all__ = [
    "DiagnosticEmitter",
    "EngineFactory",
    "FetchedResource",
    "FontDescriptor",
    "FontRegistrationError",
    "FontStateStore",
    "FontStyle",
    "ImageSize",
    "LoggingEmitter",
    "NodeStyle",
    "NullEmitter",
    "OgsmithError",
    "RasterPipeline",
    "RenderConfig",
    "RenderEngine",
    "ResourceFetchError",
    "ResourceResolver",
    "StyledNode",
    "UnsupportedFormatError",
    "__version__",
    "candidate_urls",
    "collect_resource_urls",
    "detect_image_size",
    "get_font_state",
    "get_version",
    "load_fonts",
    "rewrite_font_families",
    "sniff_image_format",
]
