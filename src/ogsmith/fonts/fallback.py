"""Rewrite font-family declarations into engine fallback chains.

Each loaded font variant lives in the engine under its own subset name, so a
declaration such as ``font-family: 'Inter', sans-serif`` has to be expanded
to the subset names of ``Inter`` before the engine can resolve it. Every
other loaded subset is appended afterwards: a node whose primary family lacks
a glyph (e.g. Devanagari in a Latin-only face) can then fall back to any
font loaded for the render.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ogsmith.nodes import StyledNode, iter_nodes


_QUOTES = "'\""


def parse_font_families(value: str) -> list[str]:
    """Split a CSS family list, dropping whitespace and quote characters."""
    families: list[str] = []
    for part in value.split(","):
        name = part.strip()
        for quote in _QUOTES:
            name = name.replace(quote, "")
        families.append(name)
    return families


def fallback_suffix(family_subsets: Mapping[str, Sequence[str]]) -> list[str]:
    """Ordered union of every subset name, computed once per render."""
    seen: dict[str, None] = {}
    for names in family_subsets.values():
        for name in names:
            seen.setdefault(name, None)
    return list(seen)


def resolve_font_chain(
    value: str,
    family_subsets: Mapping[str, Sequence[str]],
    suffix: Sequence[str] | None = None,
) -> list[str]:
    """Expand a family list to subset names followed by every other subset."""
    chain: list[str] = []
    for family in parse_font_families(value):
        chain.extend(family_subsets.get(family) or [family])
    present = set(chain)
    for name in fallback_suffix(family_subsets) if suffix is None else suffix:
        if name not in present:
            chain.append(name)
            present.add(name)
    return chain


def rewrite_font_families(
    tree: StyledNode, family_subsets: Mapping[str, Sequence[str]]
) -> StyledNode:
    """Rewrite every declared ``font_family`` in ``tree`` in place."""
    suffix = fallback_suffix(family_subsets)
    for node in iter_nodes(tree):
        style = node.style
        if style is None or not style.font_family:
            continue
        style.font_family = ", ".join(resolve_font_chain(style.font_family, family_subsets, suffix))
    return tree


__all__ = [
    "fallback_suffix",
    "parse_font_families",
    "resolve_font_chain",
    "rewrite_font_families",
]
