"""Styled node tree handed to the rendering engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import re
from typing import Any


_CSS_URL = re.compile(r"""url\(\s*(['"]?)(?P<url>.*?)\1\s*\)""")


@dataclass(slots=True)
class NodeStyle:
    """Style block of a node.

    Only the properties the pipeline inspects get their own field; every other
    declaration is kept verbatim in ``extra`` so it round-trips to the engine.
    """

    font_family: str | None = None
    background_image: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> NodeStyle:
        data = dict(payload)
        return cls(
            font_family=data.pop("fontFamily", None),
            background_image=data.pop("backgroundImage", None),
            extra=data,
        )

    def to_dict(self) -> dict[str, Any]:
        payload = dict(self.extra)
        if self.font_family is not None:
            payload["fontFamily"] = self.font_family
        if self.background_image is not None:
            payload["backgroundImage"] = self.background_image
        return payload


@dataclass(slots=True)
class StyledNode:
    """One node of the tree: a container, a text run or an image."""

    kind: str = "container"
    style: NodeStyle | None = None
    children: list[StyledNode] = field(default_factory=list)
    text: str | None = None
    src: str | None = None
    props: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> StyledNode:
        """Build a tree from its JSON representation (``type``/``style``/``children``)."""
        root = cls._shallow(payload)
        stack: list[tuple[StyledNode, Mapping[str, Any]]] = [(root, payload)]
        while stack:
            node, data = stack.pop()
            for child_payload in data.get("children") or ():
                child = cls._shallow(child_payload)
                node.children.append(child)
                stack.append((child, child_payload))
        return root

    @classmethod
    def _shallow(cls, payload: Mapping[str, Any]) -> StyledNode:
        style = payload.get("style")
        props = {
            key: value
            for key, value in payload.items()
            if key not in {"type", "style", "children", "text", "src"}
        }
        return cls(
            kind=str(payload.get("type") or "container"),
            style=NodeStyle.from_dict(style) if style is not None else None,
            text=payload.get("text"),
            src=payload.get("src"),
            props=props,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.kind, **self.props}
        if self.style is not None:
            payload["style"] = self.style.to_dict()
        if self.text is not None:
            payload["text"] = self.text
        if self.src is not None:
            payload["src"] = self.src
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


def iter_nodes(tree: StyledNode) -> Iterator[StyledNode]:
    """Yield ``tree`` and its descendants in pre-order, without recursion."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_resource_urls(tree: StyledNode) -> list[str]:
    """Return image sources and CSS ``url()`` references, first-seen order.

    Inline ``data:`` URIs are already resolved and are left out.
    """
    seen: dict[str, None] = {}
    for node in iter_nodes(tree):
        candidates: list[str] = []
        if node.src:
            candidates.append(node.src)
        if node.style is not None and node.style.background_image:
            candidates.extend(
                match.group("url") for match in _CSS_URL.finditer(node.style.background_image)
            )
        for url in candidates:
            url = url.strip()
            if url and not url.startswith("data:"):
                seen.setdefault(url, None)
    return list(seen)


__all__ = ["NodeStyle", "StyledNode", "collect_resource_urls", "iter_nodes"]
