# nuklite

Building blocks for the drawing side of an immediate-mode user interface.
It is plain Python and needs nothing beyond the standard library.

## What is inside

- `nuklite.utf8` decodes and encodes UTF-8 one glyph at a time.
  - `decode(data)` returns `(rune, length)`. A length of 0 means the input is empty or cut short.
  - `encode(rune)` returns the bytes of one code point.
  - `iter_glyphs(data)` yields `(offset, rune, length)` for each glyph.
  - `utf_len(data)` counts glyphs.
  - `utf_at(data, index)` finds one glyph by its position.
  - Invalid sequences and code points become the replacement rune `UTF_INVALID` (U+FFFD). No exception is raised.
- `nuklite.hashing` provides `murmur_hash(key, seed=0)`, a 32-bit MurmurHash3. Text keys are hashed as UTF-8.
- `nuklite.text` measures text with a font you supply.
  - `UserFont(height, width, query=None, texture=None)` is the font. `width(height, data)` measures UTF-8 bytes. `query(height, rune, next_rune)` returns a `Glyph`.
  - `text_clamp(font, data, space, separators=())` returns a `ClampResult` with `length`, `glyphs` and `width`. It tells how much text fits into `space`. When the text does not fit, it cuts back to just after the last separator.
  - `text_bounds(font, data, row_height, stop_on_new_line=False)` returns a `TextBounds` with `size`, `offset`, `remaining` and `glyphs`, for text that may run over several lines.
- `nuklite.geometry` holds the value types:
  - `Vec2`, which supports `+`, `-`, multiplication by a number and `length_squared()`.
  - `Rect`, with `intersects()` and `shrink()`.
  - `Color`, 8-bit channels checked to lie in 0..255, with `to_floats()`, `from_floats()` and `to_u32()`.
  - `Colorf` and `Image`. `Image.is_subimage()` tells whether the image is a sub-region.
  - Named colors (`RED`, `WHITE` and others) and `NULL_RECT`.
- `nuklite.vertex_layout` describes and packs vertices.
  - A vertex is described by a `ConvertConfig`: a list of `LayoutElement(attribute, format, offset)` entries, a vertex size, the global alpha, `AntiAliasing` settings, segment counts and a `NullTexture`.
  - `encode_values`, `encode_color` and `encode_vertex` pack values into little-endian bytes. Values are clamped to the range of the `VertexFormat`.
  - A config whose elements do not fit into the vertex size raises `ValueError`. So does an element whose format does not suit its attribute.
- `nuklite.tessellate` builds triangles as a `Mesh` of `MeshVertex` objects and indices.
  - `stroke_poly_line` strokes a polyline, open or closed.
  - `fill_poly_convex` fills a convex polygon.
  - Both work with or without anti-aliasing fringes.
- `nuklite.draw_list` collects drawing into a `DrawList`.
  - Paths: `path_line_to`, `path_arc_to`, `path_arc_to_fast`, `path_rect_to`, `path_curve_to`, `path_fill`, `path_stroke`.
  - Shapes: lines, rectangles (rounded, and filled with one color per corner), triangles, circles, curves, images and text.
  - The results are in `vertices` (encoded bytes), `elements` (indices) and `commands`. `commands` is a list of `DrawCommand` batches, each with a clip rectangle, a texture and an element count.
  - With the default 16-bit indices, going past 65535 vertices raises `OverflowError`.

## Example

```python
from nuklite.geometry import Color, Rect, Vec2
from nuklite.draw_list import DrawList
from nuklite.vertex_layout import (
    AntiAliasing, ConvertConfig, LayoutElement, VertexAttribute, VertexFormat,
)

config = ConvertConfig(
    vertex_layout=[
        LayoutElement(VertexAttribute.POSITION, VertexFormat.FLOAT, 0),
        LayoutElement(VertexAttribute.TEXCOORD, VertexFormat.FLOAT, 8),
        LayoutElement(VertexAttribute.COLOR, VertexFormat.R8G8B8A8, 16),
    ],
    vertex_size=20,
    line_aa=AntiAliasing.ON,
    shape_aa=AntiAliasing.ON,
)

draw = DrawList(config)
draw.fill_rect(Rect(10, 10, 100, 40), Color(200, 60, 60, 255), 4.0)
draw.stroke_line(Vec2(0, 0), Vec2(50, 50), Color(255, 255, 255, 255), 2.0)
print(draw.vertex_count, len(draw.elements), len(draw.commands))
```

## What it does not do

This package stops at turning shapes, images and text into vertices and indices.

- It does not hand those vertices to a graphics API.
- It has no widgets, no layout and no input handling.
- It does not manage or stack windows.
- It does not replay a recorded list of draw commands. You call the `DrawList` methods yourself.
- It does not parse or format numbers.

## Running the tests

```
pip install -e ".[test]"
pytest
```