"""TeX templating.

Build TeX documents programmatically from composable elements. Documents come
out well-formed syntactically, not semantically.

"Hello, world" using the elements directly::

    from texrender.tpl import Args, BeginEndBlock, Group, MacroCall, OptArgs

    tex = Group([
        MacroCall("documentclass", OptArgs.single("12pt"), Args.single("article")),
        BeginEndBlock("document", children=[
            MacroCall("section", args=["Hello, world"]),
            "This is fun & easy.",
        ]),
    ])
    tex.render()

The same using the element helpers::

    from texrender.tpl.elements import doc, document, documentclass, section

    tex = doc([
        documentclass(["12pt"], "article"),
        document([section("Hello, world"), "This is fun & easy."]),
    ])
"""

from texrender.tpl.core import (
    AnonymousBlock,
    Args,
    BeginEndBlock,
    Group,
    MacroCall,
    OptArgs,
    RawTex,
    TableRow,
    TexElement,
    Text,
    elems,
    into_tex_element,
    render,
    render_bytes,
    write_list,
    write_tex,
)

__all__ = [
    "AnonymousBlock",
    "Args",
    "BeginEndBlock",
    "Group",
    "MacroCall",
    "OptArgs",
    "RawTex",
    "TableRow",
    "TexElement",
    "Text",
    "elems",
    "into_tex_element",
    "render",
    "render_bytes",
    "write_list",
    "write_tex",
]
