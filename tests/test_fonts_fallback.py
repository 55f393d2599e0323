from __future__ import annotations

from ogsmith.fonts.fallback import (
    fallback_suffix,
    parse_font_families,
    resolve_font_chain,
    rewrite_font_families,
)
from ogsmith.nodes import NodeStyle, StyledNode, iter_nodes


FAMILY_SUBSETS = {
    "Inter": ["Inter__0", "Inter__1"],
    "Noto Sans Devanagari": ["Noto Sans Devanagari__2"],
    "Noto Color Emoji": ["Noto Color Emoji__4"],
}


def _chain(node: StyledNode) -> list[str]:
    assert node.style is not None and node.style.font_family is not None
    return [part.strip() for part in node.style.font_family.split(",")]


def _tree() -> StyledNode:
    return StyledNode(
        style=NodeStyle(font_family="'Inter', sans-serif"),
        children=[
            StyledNode(kind="text", text="नमस्ते", style=NodeStyle(font_family='"Noto Sans Devanagari"')),
            StyledNode(
                children=[
                    StyledNode(kind="text", text="plain"),
                    StyledNode(kind="text", text="serif", style=NodeStyle(font_family="Georgia, serif")),
                ]
            ),
        ],
    )


def test_parse_font_families_strips_quotes_and_whitespace() -> None:
    assert parse_font_families(" 'Inter' ,  \"Noto Sans\", sans-serif ") == [
        "Inter",
        "Noto Sans",
        "sans-serif",
    ]


def test_requested_families_expand_before_fallbacks() -> None:
    chain = resolve_font_chain("Noto Sans Devanagari, Inter", FAMILY_SUBSETS)

    assert chain == [
        "Noto Sans Devanagari__2",
        "Inter__0",
        "Inter__1",
        "Noto Color Emoji__4",
    ]


def test_unknown_families_are_kept_verbatim() -> None:
    chain = resolve_font_chain("Georgia, serif", FAMILY_SUBSETS)

    assert chain[:2] == ["Georgia", "serif"]
    assert chain[2:] == fallback_suffix(FAMILY_SUBSETS)


def test_rewrite_gives_every_declaring_node_every_subset() -> None:
    tree = rewrite_font_families(_tree(), FAMILY_SUBSETS)
    all_subsets = {name for names in FAMILY_SUBSETS.values() for name in names}

    declaring = [node for node in iter_nodes(tree) if node.style and node.style.font_family]
    assert len(declaring) == 3
    for node in declaring:
        chain = _chain(node)
        assert all_subsets <= set(chain)
        assert len(chain) == len(set(chain))


def test_rewrite_preserves_requested_order_first() -> None:
    tree = rewrite_font_families(_tree(), FAMILY_SUBSETS)

    assert _chain(tree) == [
        "Inter__0",
        "Inter__1",
        "sans-serif",
        "Noto Sans Devanagari__2",
        "Noto Color Emoji__4",
    ]
    assert _chain(tree.children[0])[0] == "Noto Sans Devanagari__2"


def test_rewrite_leaves_nodes_without_declaration_untouched() -> None:
    tree = rewrite_font_families(_tree(), FAMILY_SUBSETS)
    plain = tree.children[1].children[0]

    assert plain.style is None
    assert tree.children[1].style is None


def test_rewrite_with_no_loaded_fonts_only_normalises() -> None:
    tree = StyledNode(style=NodeStyle(font_family="'Inter',serif"))

    rewrite_font_families(tree, {})

    assert tree.style is not None
    assert tree.style.font_family == "Inter, serif"


def test_rewrite_handles_very_deep_trees() -> None:
    root = StyledNode(style=NodeStyle(font_family="Inter"))
    node = root
    for _ in range(5000):
        child = StyledNode(style=NodeStyle(font_family="Inter"))
        node.children.append(child)
        node = child

    rewrite_font_families(root, FAMILY_SUBSETS)

    assert _chain(node)[:2] == ["Inter__0", "Inter__1"]
