"""Font provisioning for the raster engine.

Architecture
: `FontStateStore` is attached to the hosting session and remembers which
  variants the engine already holds, the subset names they were registered
  under, and the counter used to mint new names.
: `load_fonts` pushes new variants into the engine, isolating failures so a
  single broken payload never aborts a render.
: `rewrite_font_families` turns node declarations into subset chains that
  end with every loaded subset, giving each node global glyph fallback.
"""

from ogsmith.fonts.fallback import (
    fallback_suffix,
    parse_font_families,
    resolve_font_chain,
    rewrite_font_families,
)
from ogsmith.fonts.loader import load_fonts
from ogsmith.fonts.models import FontDescriptor, FontStyle, font_bytes
from ogsmith.fonts.state import FontStateStore, forget_font_state, get_font_state


__all__ = [
    "FontDescriptor",
    "FontStateStore",
    "FontStyle",
    "fallback_suffix",
    "font_bytes",
    "forget_font_state",
    "get_font_state",
    "load_fonts",
    "parse_font_families",
    "resolve_font_chain",
    "rewrite_font_families",
]
