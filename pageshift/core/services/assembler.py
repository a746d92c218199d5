"""
Module assembler — serialize a rewritten page back to text.

Fixed layout: header, module doc comment, imports, active
declarations, preserved helpers and loose text (original order), then
the archived history. Top-level chunks are separated by two blank
lines, as elm-format lays them out.
"""

from __future__ import annotations

from pageshift.core.models.page import (
    Declaration,
    History,
    Import,
    ModuleHeader,
    TextBlock,
)
from pageshift.core.models.shape import Shape

_SEPARATOR = "\n\n\n"


def render_header(name: str, shape: Shape, *, port: bool = False) -> ModuleHeader:
    """Header whose exposing list is exactly the shape's public names."""
    return ModuleHeader(name=name, exposing=shape.exposing, port=port)


def assemble(
    header: ModuleHeader,
    imports: list[Import],
    declarations: list[Declaration],
    preserved: list[Declaration | TextBlock],
    history: History,
    doc: TextBlock | None = None,
) -> str:
    """Compose the final page text. Pure, no I/O."""
    top = header.render()
    if doc is not None:
        top += "\n\n" + doc.text
    if imports:
        top += "\n\n" + "\n".join(imp.render() for imp in imports)

    chunks = [top]
    chunks.extend(d.text for d in declarations)
    chunks.extend(item.text for item in preserved)
    if history.batches:
        chunks.append(history.text)

    return _SEPARATOR.join(chunk.rstrip("\n") for chunk in chunks if chunk.strip()) + "\n"
