"""texrender: build TeX documents programmatically and render them to PDF."""

from texrender.exceptions import (
    LatexError,
    LatexRunError,
    ReadOutputFileError,
    RenderingError,
    TempdirCreationError,
    TexEncodingError,
    TexRenderError,
    WriteInputFileError,
)
from texrender.render import RenderOptions, TexRender
from texrender.tex_escape import escape, write_escaped

__all__ = [
    "LatexError",
    "LatexRunError",
    "ReadOutputFileError",
    "RenderOptions",
    "RenderingError",
    "TempdirCreationError",
    "TexEncodingError",
    "TexRender",
    "TexRenderError",
    "WriteInputFileError",
    "escape",
    "write_escaped",
]
