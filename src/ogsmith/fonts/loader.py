"""Register font payloads with the rendering engine, once per variant."""

from __future__ import annotations

from collections.abc import Iterable

from ogsmith.core.diagnostics import DiagnosticEmitter, resolve_emitter
from ogsmith.core.exceptions import FontRegistrationError, exception_hint
from ogsmith.fonts.models import FontDescriptor, font_bytes
from ogsmith.fonts.state import FontStateStore


def load_fonts(
    store: FontStateStore,
    fonts: Iterable[FontDescriptor],
    *,
    emitter: DiagnosticEmitter | None = None,
) -> list[str]:
    """Load every new font variant into the store's engine.

    Descriptors without data, or whose key was already attempted, are skipped.
    The subset counter advances before each attempt, so a rejected font
    leaves a gap in the numbering. Rejections are reported as warnings and
    never abort the batch; the key is still marked as attempted.

    Returns the subset identifiers registered by this call.
    """
    emitter = resolve_emitter(emitter)
    registered: list[str] = []
    for font in fonts:
        if font.data is None:
            continue
        key = font.key
        if key in store.loaded_keys:
            continue

        subset_name = store.next_subset_name(font.family)
        try:
            data = font_bytes(font.data)
            store.engine.load_font(subset_name, data, font.weight, font.style)
        except Exception as exc:
            error = FontRegistrationError(
                font.family,
                font.weight,
                exception_hint(exc) or type(exc).__name__,
                engine=type(store.engine).__name__,
            )
            emitter.warning(str(error), exc)
        else:
            store.family_subsets.setdefault(font.family, []).append(subset_name)
            registered.append(subset_name)
            emitter.event("font_loaded", {"family": font.family, "subset": subset_name})
        store.loaded_keys.add(key)
    return registered


__all__ = ["load_fonts"]
