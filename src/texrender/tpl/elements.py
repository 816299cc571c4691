"""Shorthand constructors for common TeX constructs.

Each helper returns a ready-made element. Caller-supplied content is escaped
(strings become ``Text``), except for dimensions, column specs, colours, file
paths and class or package names, which are inserted verbatim because
escaping would break them.
"""

from __future__ import annotations

from typing import Any, Iterable

from texrender.tpl.core import (
    AnonymousBlock,
    BeginEndBlock,
    Group,
    MacroCall,
    RawTex,
    TableRow,
    TexElement,
    Text,
    into_tex_element,
)

# "No arguments", usable for both optional and mandatory argument lists.
N: tuple[()] = ()


def _verbatim(value: Any) -> TexElement:
    if isinstance(value, str):
        return RawTex(value)
    return into_tex_element(value)


def _verbatim_all(values: Any) -> tuple[TexElement, ...]:
    if isinstance(values, (str, TexElement)):
        return (_verbatim(values),)
    return tuple(_verbatim(value) for value in values)


def _placement(value: str | None) -> tuple[TexElement, ...]:
    return (RawTex(value),) if value else N


def raw(tex: str | bytes) -> RawTex:
    """Unescaped TeX."""
    return RawTex(tex)


def t(text: str) -> Text:
    """Escaped text."""
    return Text(text)


def doc(children: Iterable[Any]) -> Group:
    """Document root."""
    return Group(children)


def document(children: Iterable[Any]) -> BeginEndBlock:
    """The ``document`` environment."""
    return BeginEndBlock(RawTex("document"), children=children)


def documentclass(opt_args: Iterable[Any], doc_class: Any) -> MacroCall:
    """``\\documentclass[opts]{doc_class}``; the class name is not escaped."""
    return MacroCall(RawTex("documentclass"), opt_args, (_verbatim(doc_class),))


def usepackage(opt_args: Iterable[Any], package_name: Any) -> MacroCall:
    """``\\usepackage[opts]{package_name}``; the package name is not escaped."""
    return MacroCall(RawTex("usepackage"), opt_args, (_verbatim(package_name),))


def section(title: Any) -> MacroCall:
    return MacroCall(RawTex("section"), args=(title,))


def subsection(title: Any) -> MacroCall:
    return MacroCall(RawTex("subsection"), args=(title,))


def subsubsection(title: Any) -> MacroCall:
    return MacroCall(RawTex("subsubsection"), args=(title,))


def figure(children: Iterable[Any], placement: str | None = None) -> BeginEndBlock:
    """A ``figure`` environment, optionally with a placement such as ``"ht"``."""
    return BeginEndBlock(RawTex("figure"), _placement(placement), children=children)


def caption(text: Any) -> MacroCall:
    return MacroCall(RawTex("caption"), args=(text,))


def centering() -> MacroCall:
    return MacroCall(RawTex("centering"))


def noindent() -> MacroCall:
    return MacroCall(RawTex("noindent"))


def newpage() -> MacroCall:
    return MacroCall(RawTex("newpage"))


def hline() -> MacroCall:
    return MacroCall(RawTex("hline"))


def minipage(
    width: Any, children: Iterable[Any], position: str | None = None
) -> BeginEndBlock:
    """A ``minipage`` of the given width, e.g. ``minipage(r"0.5\\textwidth", ...)``."""
    return BeginEndBlock(
        RawTex("minipage"),
        _placement(position),
        (_verbatim(width),),
        children,
    )


def tabular(column_spec: Any, rows: Iterable[Any]) -> BeginEndBlock:
    """A ``tabular`` environment; ``column_spec`` is inserted verbatim (``"l|r"``)."""
    return BeginEndBlock(RawTex("tabular"), args=(_verbatim(column_spec),), children=rows)


def tabularx(width: Any, column_spec: Any, rows: Iterable[Any]) -> BeginEndBlock:
    """A ``tabularx`` environment (requires the ``tabularx`` package)."""
    return BeginEndBlock(
        RawTex("tabularx"),
        args=(_verbatim(width), _verbatim(column_spec)),
        children=rows,
    )


def row(*cells: Any) -> TableRow:
    """A table row; ``row("a", "b")`` renders ``a & b\\\\``."""
    return TableRow(cells)


def hspace(size: Any) -> MacroCall:
    """Inline horizontal space."""
    return MacroCall.inline(RawTex("hspace"), args=(_verbatim(size),))


def vspace(size: Any) -> MacroCall:
    """Vertical space, on its own line."""
    return MacroCall(RawTex("vspace"), args=(_verbatim(size),))


def textbf(content: Any) -> MacroCall:
    return MacroCall.inline(RawTex("textbf"), args=(content,))


def emph(content: Any) -> MacroCall:
    return MacroCall.inline(RawTex("emph"), args=(content,))


def footnote(content: Any) -> MacroCall:
    return MacroCall.inline(RawTex("footnote"), args=(content,))


def cellcolor(color: Any, content: Any) -> Group:
    """Colored table cell (requires ``colortbl`` or ``xcolor[table]``)."""
    return Group((MacroCall.inline(RawTex("cellcolor"), args=(_verbatim(color),)), content))


def includegraphics(path: Any, opt_args: Iterable[Any] = N) -> MacroCall:
    """``\\includegraphics[opts]{path}``; the path is not escaped."""
    return MacroCall(
        RawTex("includegraphics"),
        _verbatim_all(opt_args),
        (_verbatim(path),),
    )


def anonymous_block(children: Iterable[Any]) -> AnonymousBlock:
    return AnonymousBlock(children)
