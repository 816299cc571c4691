"""Element tree for building TeX documents.

Documents are built from a closed set of immutable elements that know how to
write themselves to a binary sink. The tree guarantees syntactic well-formedness
(escaped text, balanced braces and brackets, matching ``\\begin``/``\\end``)
but not semantic correctness: nothing stops a caller from emitting two
``\\documentclass`` calls, and ``RawTex`` is inserted unchecked.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from functools import singledispatch
from numbers import Number
from typing import Any, BinaryIO, Iterable

from texrender.exceptions import TexEncodingError
from texrender.tex_escape import write_escaped


class TexElement:
    """Base class of every renderable element."""

    __slots__ = ()

    def write_tex(self, writer: BinaryIO) -> None:
        """Write a rendering of the element to ``writer``."""
        write_tex(self, writer)

    def render(self) -> str:
        """Render the element into a string.

        Raises:
            TexEncodingError: If raw TeX inside the tree is not valid UTF-8.
        """
        return render(self)


def _lift_all(values: Iterable[Any]) -> tuple[TexElement, ...]:
    # A lone string or element is one child, not a sequence of characters.
    if isinstance(values, (str, bytes, bytearray, TexElement)) or not isinstance(values, Iterable):
        return (into_tex_element(values),)
    return tuple(into_tex_element(value) for value in values)


@dataclass(frozen=True)
class RawTex(TexElement):
    """A raw, unescaped piece of TeX.

    The value is written out as-is, so it can produce syntactically broken
    documents. Strings are stored UTF-8 encoded, with surrogate escapes
    turned back into their original bytes.
    """

    raw: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.raw, str):
            object.__setattr__(self, "raw", self.raw.encode("utf-8", "surrogateescape"))
        elif isinstance(self.raw, bytearray):
            object.__setattr__(self, "raw", bytes(self.raw))
        elif not isinstance(self.raw, bytes):
            raise TypeError(f"RawTex expects bytes or str, not {type(self.raw).__name__}")


@dataclass(frozen=True)
class Text(TexElement):
    """A text string, escaped on output."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Text expects str, not {type(self.text).__name__}")


@dataclass(frozen=True)
class OptArgs(TexElement):
    """Optional arguments, rendered as ``[a,b,...]`` or nothing when empty."""

    elements: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", _lift_all(self.elements))

    @classmethod
    def single(cls, elem: Any) -> OptArgs:
        """Create optional arguments holding one value."""
        return cls((elem,))


@dataclass(frozen=True)
class Args(TexElement):
    """Mandatory arguments, each in its own pair of braces: ``{a}{b}``."""

    elements: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", _lift_all(self.elements))

    @classmethod
    def single(cls, elem: Any) -> Args:
        """Create arguments holding one value."""
        return cls((elem,))


def _as_opt_args(value: Any) -> OptArgs:
    if isinstance(value, OptArgs):
        return value
    if value is None:
        return OptArgs()
    return OptArgs(value)


def _as_args(value: Any) -> Args:
    if isinstance(value, Args):
        return value
    if value is None:
        return Args()
    return Args(value)


@dataclass(frozen=True)
class MacroCall(TexElement):
    """A macro invocation such as ``\\macroname[opt1]{arg1}{arg2}``.

    Block calls (the default) end with a newline; inline calls do not, so they
    can sit inside running text.
    """

    ident: TexElement
    opt_args: OptArgs = field(default_factory=OptArgs)
    args: Args = field(default_factory=Args)
    newline: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "ident", into_tex_element(self.ident))
        object.__setattr__(self, "opt_args", _as_opt_args(self.opt_args))
        object.__setattr__(self, "args", _as_args(self.args))

    @classmethod
    def inline(cls, ident: Any, opt_args: Any = None, args: Any = None) -> MacroCall:
        """Create a macro call without a trailing newline."""
        return cls(ident, opt_args, args, newline=False)


@dataclass(frozen=True)
class BeginEndBlock(TexElement):
    """A ``\\begin{ident}`` ... ``\\end{ident}`` environment.

    The identifier is stored once and used for both ends. Arguments apply to
    the opening only.
    """

    ident: TexElement
    opt_args: OptArgs = field(default_factory=OptArgs)
    args: Args = field(default_factory=Args)
    children: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ident", into_tex_element(self.ident))
        object.__setattr__(self, "opt_args", _as_opt_args(self.opt_args))
        object.__setattr__(self, "args", _as_args(self.args))
        object.__setattr__(self, "children", _lift_all(self.children))


@dataclass(frozen=True)
class AnonymousBlock(TexElement):
    """Children enclosed in a bare pair of braces."""

    children: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _lift_all(self.children))


@dataclass(frozen=True)
class Group(TexElement):
    """Children written in order without any added characters."""

    children: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _lift_all(self.children))


@dataclass(frozen=True)
class TableRow(TexElement):
    """Table cells joined by ``&`` and terminated by ``\\\\``."""

    cells: tuple[TexElement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", _lift_all(self.cells))


def write_list(writer: BinaryIO, separator: bytes, elements: Iterable[TexElement]) -> None:
    """Write ``elements`` to ``writer`` with ``separator`` between them."""
    for index, element in enumerate(elements):
        if index:
            writer.write(separator)
        write_tex(element, writer)


def write_tex(element: TexElement, writer: BinaryIO) -> None:
    """Write the rendering of ``element`` to ``writer``.

    Children are written left to right. The first error raised by ``writer``
    propagates immediately; the remaining children are not written.

    Raises:
        TypeError: If ``element`` is not one of the known element kinds.
    """
    if isinstance(element, RawTex):
        writer.write(element.raw)
    elif isinstance(element, Text):
        write_escaped(writer, element.text)
    elif isinstance(element, OptArgs):
        if element.elements:
            writer.write(b"[")
            write_list(writer, b",", element.elements)
            writer.write(b"]")
    elif isinstance(element, Args):
        if element.elements:
            writer.write(b"{")
            write_list(writer, b"}{", element.elements)
            writer.write(b"}")
    elif isinstance(element, MacroCall):
        writer.write(b"\\")
        write_tex(element.ident, writer)
        write_tex(element.opt_args, writer)
        write_tex(element.args, writer)
        if element.newline:
            writer.write(b"\n")
    elif isinstance(element, BeginEndBlock):
        writer.write(b"\\begin{")
        write_tex(element.ident, writer)
        writer.write(b"}")
        write_tex(element.opt_args, writer)
        write_tex(element.args, writer)
        writer.write(b"\n")
        for child in element.children:
            write_tex(child, writer)
        writer.write(b"\n\\end{")
        write_tex(element.ident, writer)
        writer.write(b"}\n")
    elif isinstance(element, AnonymousBlock):
        writer.write(b"{")
        for child in element.children:
            write_tex(child, writer)
        writer.write(b"}")
    elif isinstance(element, Group):
        for child in element.children:
            write_tex(child, writer)
    elif isinstance(element, TableRow):
        write_list(writer, b" & ", element.cells)
        writer.write(b"\\\\\n")
    else:
        raise TypeError(f"Cannot render {type(element).__name__} as TeX")


def render_bytes(element: TexElement) -> bytes:
    """Render ``element`` into raw bytes without decoding."""
    buffer = io.BytesIO()
    write_tex(element, buffer)
    return buffer.getvalue()


def render(element: TexElement) -> str:
    """Render ``element`` into a string.

    Raises:
        TexEncodingError: If the output is not valid UTF-8.
    """
    data = render_bytes(element)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TexEncodingError(f"Rendered TeX is not valid UTF-8: {exc}") from exc


@singledispatch
def into_tex_element(value: Any) -> TexElement:
    """Convert a native value into a TeX element.

    * elements are returned unchanged
    * ``str`` becomes escaped ``Text``
    * numbers become escaped ``Text`` of their ``str()`` form
    * lists and tuples become a ``Group`` of converted items
    * ``None`` becomes an empty ``RawTex``

    Raises:
        TypeError: For any other type, including ``bool``.
    """
    raise TypeError(f"Cannot convert {type(value).__name__} to a TeX element")


@into_tex_element.register
def _(value: TexElement) -> TexElement:
    return value


@into_tex_element.register
def _(value: str) -> TexElement:
    return Text(value)


@into_tex_element.register(Number)
def _(value: Number) -> TexElement:
    return Text(str(value))


@into_tex_element.register
def _(value: bool) -> TexElement:
    raise TypeError("Cannot convert bool to a TeX element")


@into_tex_element.register(list)
@into_tex_element.register(tuple)
def _(value: list | tuple) -> TexElement:  # type: ignore[type-arg]
    return Group(value)


@into_tex_element.register(type(None))
def _(value: None) -> TexElement:
    return RawTex(b"")


def elems(*values: Any) -> tuple[TexElement, ...]:
    """Convert each value into an element, for use as a child list."""
    return _lift_all(values)
