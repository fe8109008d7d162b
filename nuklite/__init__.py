"""Immediate-mode GUI drawing core: UTF-8 glyphs, hashing, text measurement and tessellation."""

__version__ = "0.1.0"

__all__ = [
    "draw_list",
    "geometry",
    "hashing",
    "tessellate",
    "text",
    "utf8",
    "vertex_layout",
]