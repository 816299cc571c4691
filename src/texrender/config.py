"""Local configuration for texrender."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_LATEXMK_PATH = "latexmk"
DEFAULT_USE_XELATEX = "true"
DEFAULT_ALLOW_SHELL_ESCAPE = "false"
DEFAULT_TIMEOUT_S = 120.0


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_paths(name: str) -> list[Path]:
    raw = os.getenv(name, "")
    return [Path(entry).expanduser() for entry in raw.split(os.pathsep) if entry]


# Executable used for rendering, kept as given; a bare name is looked up on PATH.
TEXRENDER_LATEXMK_PATH = os.getenv("TEXRENDER_LATEXMK_PATH", DEFAULT_LATEXMK_PATH)
TEXRENDER_USE_XELATEX = _env_flag("TEXRENDER_USE_XELATEX", DEFAULT_USE_XELATEX)
TEXRENDER_ALLOW_SHELL_ESCAPE = _env_flag("TEXRENDER_ALLOW_SHELL_ESCAPE", DEFAULT_ALLOW_SHELL_ESCAPE)
# 0 disables the timeout.
TEXRENDER_TIMEOUT_S = float(os.getenv("TEXRENDER_TIMEOUT_S", str(DEFAULT_TIMEOUT_S)))
TEXRENDER_TEXINPUTS = _env_paths("TEXRENDER_TEXINPUTS")
