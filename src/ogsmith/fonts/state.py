"""Session-scoped font registry shared by successive renders.

A :class:`FontStateStore` remembers which font variants were pushed into the
rendering engine of a hosting session, so repeated renders reuse both the
engine instance and the fonts it already holds. Stores are attached to the
session object through a weak-key registry and disappear with it.

Sessions that cannot be weakly referenced (plain dicts, slotted objects) are
kept in a strong registry keyed by ``id()``. That registry holds the session
itself next to its store, so the id stays valid; such entries live until
:func:`forget_font_state` is called for the session.

The store is a single-writer object: callers must not run two
:func:`~ogsmith.fonts.loader.load_fonts` batches against the same store at
the same time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Any
import weakref

from ogsmith.engine import EngineFactory, RenderEngine


_STORES: weakref.WeakKeyDictionary[Any, FontStateStore] = weakref.WeakKeyDictionary()
_PINNED: dict[int, tuple[Any, FontStateStore]] = {}
_LOCK: RLock = RLock()


@dataclass(slots=True)
class FontStateStore:
    """Fonts loaded into one engine instance and the subset names they received."""

    engine: RenderEngine
    loaded_keys: set[str] = field(default_factory=set)
    family_subsets: dict[str, list[str]] = field(default_factory=dict)
    subset_counter: int = 0

    def next_subset_name(self, family: str) -> str:
        """Reserve the next subset identifier for ``family``."""
        name = f"{family}__{self.subset_counter}"
        self.subset_counter += 1
        return name

    def has_family(self, family: str) -> bool:
        return bool(self.family_subsets.get(family))


def _weakrefable(session: Any) -> bool:
    try:
        weakref.ref(session)
    except TypeError:
        return False
    return True


def get_font_state(session: Any, engine_factory: EngineFactory) -> FontStateStore:
    """Return the store bound to ``session``, creating it on first use."""
    with _LOCK:
        if _weakrefable(session):
            store = _STORES.get(session)
            if store is None:
                store = FontStateStore(engine=engine_factory())
                _STORES[session] = store
            return store

        entry = _PINNED.get(id(session))
        if entry is None:
            entry = (session, FontStateStore(engine=engine_factory()))
            _PINNED[id(session)] = entry
        return entry[1]


def forget_font_state(session: Any) -> FontStateStore | None:
    """Detach and return the store bound to ``session``, if any."""
    with _LOCK:
        if _weakrefable(session):
            return _STORES.pop(session, None)
        entry = _PINNED.pop(id(session), None)
        return entry[1] if entry is not None else None


__all__ = ["FontStateStore", "forget_font_state", "get_font_state"]
