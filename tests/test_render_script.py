"""Tests for scripts/render_tex.py with latexmk mocked."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "render_tex.py"
FAKE_PDF = b"%PDF-1.5 fake"


def _load_script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("render_tex", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(returncode: int, seen: dict[str, Any]) -> Any:
    def fake_run(command: list[str], **kwargs: Any) -> MagicMock:
        seen["command"] = command
        seen["env"] = kwargs["env"]
        if returncode == 0:
            (Path(kwargs["cwd"]) / "input.pdf").write_bytes(FAKE_PDF)
        return MagicMock(returncode=returncode, stdout=b"! Missing $ inserted.", stderr=b"")

    return fake_run


@pytest.fixture
def tex_file(tmp_path: Path) -> Path:
    path = tmp_path / "paper.tex"
    path.write_bytes(b"\\documentclass{article}\n\\begin{document}\nx\n\\end{document}\n")
    return path


class TestMain:
    """Tests for the command-line entry point."""

    def test_writes_pdf_next_to_input(
        self, tex_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        seen: dict[str, Any] = {}
        monkeypatch.setattr("sys.argv", ["render_tex.py", str(tex_file)])

        with patch("texrender.render.subprocess.run", side_effect=_run(0, seen)):
            status = _load_script().main()

        assert status == 0
        assert tex_file.with_suffix(".pdf").read_bytes() == FAKE_PDF
        assert "Wrote" in capsys.readouterr().out

    def test_options_reach_latexmk(
        self, tex_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: dict[str, Any] = {}
        output = tmp_path / "out" / "result.pdf"
        output.parent.mkdir()
        monkeypatch.setattr(
            "sys.argv",
            [
                "render_tex.py",
                str(tex_file),
                "-o",
                str(output),
                "--latexmk",
                "./latexmk",
                "--texinput",
                str(tmp_path / "styles"),
            ],
        )

        with patch("texrender.render.subprocess.run", side_effect=_run(0, seen)):
            status = _load_script().main()

        assert status == 0
        assert output.read_bytes() == FAKE_PDF
        assert seen["command"][0] == "./latexmk"
        assert str(tmp_path / "styles") in seen["env"]["TEXINPUTS"]

    def test_latex_failure_returns_error(
        self, tex_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.argv", ["render_tex.py", str(tex_file)])

        with patch("texrender.render.subprocess.run", side_effect=_run(12, {})):
            status = _load_script().main()

        assert status == 1
        assert not tex_file.with_suffix(".pdf").exists()
        err = capsys.readouterr().err
        assert "Missing $ inserted" in err
        assert "status 12" in err

    def test_missing_latexmk_returns_error(
        self, tex_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.argv", ["render_tex.py", str(tex_file)])

        with patch("texrender.render.subprocess.run", side_effect=FileNotFoundError("latexmk")):
            status = _load_script().main()

        assert status == 1
        assert "Could not run latexmk" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["render_tex.py", str(tmp_path / "nope.tex")])

        with pytest.raises(SystemExit) as exc_info:
            _load_script().main()

        assert exc_info.value.code == 2
