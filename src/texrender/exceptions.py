"""Custom exceptions for texrender."""

from __future__ import annotations


class TexRenderError(Exception):
    """Base exception for texrender operations."""


class TexEncodingError(TexRenderError):
    """Rendered output is not valid UTF-8 (only possible through raw TeX)."""


class RenderingError(TexRenderError):
    """Error while running the external TeX toolchain."""


class TempdirCreationError(RenderingError):
    """Temporary directory could not be created."""


class WriteInputFileError(RenderingError):
    """Writing the input file failed."""


class ReadOutputFileError(RenderingError):
    """Reading the resulting output file failed."""


class LatexRunError(RenderingError):
    """latexmk could not be started or did not finish in time."""


class LatexError(RenderingError):
    """latexmk exited with a failure status."""

    def __init__(self, status: int | None, stdout: bytes, stderr: bytes) -> None:
        self.status = status
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"LaTeX failure (exit status {status}): {stdout!r} {stderr!r}")
