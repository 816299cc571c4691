"""Render finished TeX documents to PDF with latexmk."""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from texrender.config import (
    TEXRENDER_ALLOW_SHELL_ESCAPE,
    TEXRENDER_LATEXMK_PATH,
    TEXRENDER_TEXINPUTS,
    TEXRENDER_TIMEOUT_S,
    TEXRENDER_USE_XELATEX,
)
from texrender.exceptions import (
    LatexError,
    LatexRunError,
    ReadOutputFileError,
    TempdirCreationError,
    WriteInputFileError,
)
from texrender.tpl import TexElement, render_bytes

logger = logging.getLogger(__name__)

_INPUT_NAME = "input.tex"
_OUTPUT_NAME = "input.pdf"


class RenderOptions(BaseModel):
    """Settings for a latexmk invocation.

    Attributes:
        latex_mk_path: latexmk executable, passed to subprocess unchanged; a
            bare name is looked up on PATH.
        use_xelatex: Pass ``-xelatex`` to latexmk.
        allow_shell_escape: Allow ``\\write18``; when False ``-no-shell-escape``
            is passed.
        timeout_s: Seconds to wait for latexmk. None or 0 waits indefinitely.
    """

    latex_mk_path: str = TEXRENDER_LATEXMK_PATH
    use_xelatex: bool = TEXRENDER_USE_XELATEX
    allow_shell_escape: bool = TEXRENDER_ALLOW_SHELL_ESCAPE
    timeout_s: float | None = Field(default=TEXRENDER_TIMEOUT_S, ge=0)

    @field_validator("latex_mk_path", mode="before")
    @classmethod
    def coerce_latex_mk_path(cls, value: object) -> object:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value


class TexRender:
    """LaTeX rendering command.

    A render starts from a complete document, given as bytes, a file or an
    element tree. Search paths and assets can be added before calling
    ``render``, which runs latexmk in a fresh temporary directory and returns
    the resulting PDF.

    Search paths are passed through ``TEXINPUTS``. Assets are written into a
    temporary folder owned by the instance; that folder is added to the search
    path automatically and removed by ``close`` (or when the instance is
    garbage-collected).

    Example:
        with TexRender.from_element(tex) as job:
            job.add_asset_from_file("logo.png")
            pdf = job.render()
    """

    def __init__(self, source: bytes, options: RenderOptions | None = None) -> None:
        self.source = source
        self.options = options or RenderOptions()
        self.texinputs: list[Path] = list(TEXRENDER_TEXINPUTS)
        self._assets_dir: tempfile.TemporaryDirectory[str] | None = None

    @classmethod
    def from_bytes(cls, source: bytes, options: RenderOptions | None = None) -> TexRender:
        """Create a render from raw document bytes."""
        return cls(source, options)

    @classmethod
    def from_file(cls, source: str | os.PathLike[str], options: RenderOptions | None = None) -> TexRender:
        """Create a render from a ``.tex`` file."""
        return cls(Path(source).read_bytes(), options)

    @classmethod
    def from_element(cls, element: TexElement, options: RenderOptions | None = None) -> TexRender:
        """Create a render from an element tree."""
        return cls(render_bytes(element), options)

    def __enter__(self) -> TexRender:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def assets_path(self) -> Path | None:
        """Directory holding added assets, if any were added."""
        if self._assets_dir is None:
            return None
        return Path(self._assets_dir.name)

    def close(self) -> None:
        """Remove the asset directory, if one was created."""
        if self._assets_dir is None:
            return
        assets_path = Path(self._assets_dir.name)
        self._assets_dir.cleanup()
        self._assets_dir = None
        self.texinputs = [path for path in self.texinputs if path != assets_path]

    def add_texinput(self, input_path: str | os.PathLike[str]) -> TexRender:
        """Add a directory to the ``TEXINPUTS`` search path."""
        self.texinputs.append(Path(input_path))
        return self

    def latex_mk_path(self, latex_mk_path: str | os.PathLike[str]) -> TexRender:
        """Set the latexmk executable."""
        self.options = self.options.model_copy(update={"latex_mk_path": os.fspath(latex_mk_path)})
        return self

    def add_asset_from_bytes(self, filename: str | os.PathLike[str], data: bytes) -> None:
        """Store ``data`` as an asset named ``filename``.

        ``filename`` may contain subdirectories, which are created as needed.
        """
        if self._assets_dir is None:
            self._assets_dir = tempfile.TemporaryDirectory(prefix="texrender-assets")
            self.texinputs.append(Path(self._assets_dir.name))
            logger.debug("Created asset directory %s", self._assets_dir.name)

        output_path = Path(self._assets_dir.name) / filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.debug("Wrote asset %s (%d bytes)", output_path, len(data))

    def add_asset_from_file(self, path: str | os.PathLike[str]) -> None:
        """Copy a file into the asset directory under its base name.

        Raises:
            ValueError: If ``path`` has no file name.
        """
        source = Path(path)
        if not source.name:
            raise ValueError(f"Asset path has no file name: {path}")
        self.add_asset_from_bytes(source.name, source.read_bytes())

    def build_command(self, input_file: Path) -> list[str]:
        """Assemble the latexmk command line for ``input_file``."""
        command = [
            self.options.latex_mk_path,
            "-interaction=batchmode",
            "-halt-on-error",
            "-file-line-error",
            "-pdf",
        ]
        if self.options.use_xelatex:
            command.append("-xelatex")
        if not self.options.allow_shell_escape:
            command.append("-no-shell-escape")
        command.append(str(input_file))
        return command

    def build_env(self) -> dict[str, str]:
        """Environment for latexmk with ``TEXINPUTS`` set.

        Every entry is prefixed with the path separator, so the leading empty
        entry keeps TeX's default search path in place.
        """
        env = os.environ.copy()
        env["TEXINPUTS"] = "".join(f"{os.pathsep}{path}" for path in self.texinputs)
        return env

    def render(self) -> bytes:
        """Render the source as PDF.

        Returns:
            The PDF produced by latexmk.

        Raises:
            TempdirCreationError: If the working directory cannot be created.
            WriteInputFileError: If the source cannot be written.
            LatexRunError: If latexmk cannot be started or times out.
            LatexError: If latexmk exits with a failure status.
            ReadOutputFileError: If the PDF cannot be read.
        """
        try:
            tmp = tempfile.TemporaryDirectory(prefix="texrender")
        except OSError as exc:
            raise TempdirCreationError(f"Could not create temporary directory: {exc}") from exc

        with tmp as tmp_name:
            tmp_path = Path(tmp_name)
            input_file = tmp_path / _INPUT_NAME
            output_file = tmp_path / _OUTPUT_NAME

            try:
                input_file.write_bytes(self.source)
            except OSError as exc:
                raise WriteInputFileError(f"Could not write input file: {exc}") from exc

            command = self.build_command(input_file)
            logger.debug("Running %s in %s", " ".join(command), tmp_path)

            try:
                result = subprocess.run(
                    command,
                    cwd=tmp_path,
                    env=self.build_env(),
                    capture_output=True,
                    timeout=self.options.timeout_s or None,
                    check=False,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                raise LatexRunError(f"Could not run latexmk: {exc}") from exc

            if result.returncode != 0:
                raise LatexError(result.returncode, result.stdout, result.stderr)

            try:
                return output_file.read_bytes()
            except OSError as exc:
                raise ReadOutputFileError(f"Could not read output file: {exc}") from exc

    async def render_async(self) -> bytes:
        """Render in a worker thread so the event loop is not blocked."""
        return await asyncio.to_thread(self.render)
