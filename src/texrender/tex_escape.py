"""Escape text for insertion into (La)TeX documents."""

from __future__ import annotations

import io
from typing import BinaryIO, Final

# Every character not listed here passes through unchanged.
_ESCAPES: Final[dict[str, bytes]] = {
    "&": b"\\&",
    "%": b"\\%",
    "$": b"\\$",
    "#": b"\\#",
    "_": b"\\_",
    "{": b"\\{",
    "}": b"\\}",
    "~": b"\\textasciitilde{}",
    "^": b"\\textasciicircum{}",
    "\\": b"\\textbackslash{}",
    "<": b"\\textless{}",
    ">": b"\\textgreater{}",
    "|": b"\\textbar{}",
    '"': b"\\textquotedbl{}",
    # Brackets are braced so a preceding \\ linebreak cannot swallow them.
    "[": b"{[}",
    "]": b"{]}",
}

SPECIAL_CHARACTERS: Final[frozenset[str]] = frozenset(_ESCAPES)


def write_escaped(out: BinaryIO, string: str) -> None:
    """Escape ``string`` and write it to ``out`` as UTF-8.

    Characters are handled one at a time, left to right; runs of ordinary
    characters are written in one call. Surrogate escapes (as produced by
    ``os.fsdecode``) are written back as their original bytes; any other lone
    surrogate raises ``UnicodeEncodeError``. Errors raised by ``out`` propagate
    and abort the write.

    Args:
        out: Binary sink with a ``write(bytes)`` method.
        string: Text to escape.
    """
    start = 0
    for index, char in enumerate(string):
        replacement = _ESCAPES.get(char)
        if replacement is None:
            continue
        if start < index:
            out.write(string[start:index].encode("utf-8", "surrogateescape"))
        out.write(replacement)
        start = index + 1

    if start < len(string):
        out.write(string[start:].encode("utf-8", "surrogateescape"))


def escape(string: str) -> str:
    """Return the escaped form of ``string``."""
    buffer = io.BytesIO()
    write_escaped(buffer, string)
    return buffer.getvalue().decode("utf-8", "surrogateescape")
