"""Shared fixtures: an in-memory document and an icon factory."""

from __future__ import annotations

from typing import Callable

import pytest

from icon_variants.configs.loader import PluginConfig, load_config
from icon_variants.scene import BLACK, Document, FrameNode, RectangleNode, VectorNode, VectorPath


IconFactory = Callable[..., FrameNode]


@pytest.fixture()
def config() -> PluginConfig:
    """Default configuration shipped with the package."""
    return load_config()


@pytest.fixture()
def document() -> Document:
    return Document()


@pytest.fixture()
def make_icon(document: Document) -> IconFactory:
    """Build a square icon frame on the document's page.

    ``kind="rect"`` gives a frame with one filled rectangle,
    ``kind="stroke"`` a frame with one open stroked path.
    """

    def factory(
        name: str = "icon",
        size: float = 24.0,
        x: float = 0.0,
        y: float = 0.0,
        kind: str = "rect",
        stroke_weight: float = 2.0,
    ) -> FrameNode:
        inset = size / 8.0
        inner = size - 2 * inset
        if kind == "rect":
            child = RectangleNode(
                name="shape",
                x=inset,
                y=inset,
                width=inner,
                height=inner,
                strokes=(BLACK,),
                stroke_weight=stroke_weight,
            )
        else:
            child = VectorNode(
                name="path",
                x=inset,
                y=inset,
                width=inner,
                height=inner,
                fills=(),
                strokes=(BLACK,),
                stroke_weight=stroke_weight,
                vector_paths=(VectorPath(((0.0, 0.0), (inner, inner)), closed=False),),
            )
        icon = FrameNode(name=name, x=x, y=y, width=size, height=size, fills=(), children=[child])
        document.current_page.append_child(icon)
        return icon

    return factory
