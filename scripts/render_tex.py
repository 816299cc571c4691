"""Render a .tex file to PDF with latexmk."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from texrender import LatexError, RenderingError, TexRender


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a LaTeX document to PDF.")
    parser.add_argument("file", help="Input .tex file")
    parser.add_argument("-o", "--output", help="Output PDF path (defaults to the input name with .pdf)")
    parser.add_argument(
        "--texinput",
        action="append",
        default=[],
        help="Extra directory for TEXINPUTS (repeatable)",
    )
    parser.add_argument("--asset", action="append", default=[], help="File to make available to the document")
    parser.add_argument("--latexmk", help="Path to latexmk")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log the latexmk invocation")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    source = Path(args.file)
    if not source.is_file():
        parser.error(f"TeX file not found: {source}")
    output = Path(args.output) if args.output else source.with_suffix(".pdf")

    with TexRender.from_file(source) as job:
        for texinput in args.texinput:
            job.add_texinput(texinput)
        for asset in args.asset:
            job.add_asset_from_file(asset)
        if args.latexmk:
            job.latex_mk_path(args.latexmk)

        try:
            pdf = job.render()
        except LatexError as exc:
            sys.stderr.write(exc.stdout.decode("utf-8", errors="replace"))
            sys.stderr.write(exc.stderr.decode("utf-8", errors="replace"))
            print(f"latexmk failed with status {exc.status}", file=sys.stderr)
            return 1
        except RenderingError as exc:
            print(str(exc), file=sys.stderr)
            return 1

    output.write_bytes(pdf)
    print(f"Wrote {output} ({len(pdf)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
