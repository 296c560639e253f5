#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/serialize.py
"""Serialization of node trees back to markup.

The serializer is a NodeVisitor that appends markup fragments to an output
buffer. Nodes are emitted exactly as stored: no indentation or whitespace is
added or removed. Output of ``parse(markup).html()`` differs from markup
parsed with ``html.parser`` only in attribute quoting, entity normalization,
void-tag style and BeautifulSoup collapsing whitespace-only runs to a single
space or newline.
"""

from __future__ import annotations

from html import escape
from typing import Iterable

from htmledit.constants import RAW_TEXT_ELEMENTS, VOID_ELEMENTS
from htmledit.nodes import Comment, Doctype, Element, Node, Text
from htmledit.options import RenderOptions
from htmledit.visitors import NodeVisitor


class HtmlSerializer(NodeVisitor):
    """Render nodes to an HTML string.

    Parameters
    ----------
    options : RenderOptions or None, default = None
        Serialization options

    """

    def __init__(self, options: RenderOptions | None = None):
        """Initialize the serializer with options."""
        self.options = options or RenderOptions()
        self._output: list[str] = []
        self._raw_text_depth = 0

    def render_to_string(self, nodes: Node | Iterable[Node]) -> str:
        """Render one node or a sequence of sibling nodes.

        Parameters
        ----------
        nodes : Node or iterable of Node
            What to render

        Returns
        -------
        str
            Markup text

        """
        self._output = []
        self._raw_text_depth = 0
        if isinstance(nodes, Node):
            nodes.accept(self)
        else:
            for node in nodes:
                node.accept(self)
        return "".join(self._output)

    def visit_doctype(self, node: Doctype) -> None:
        self._output.append(f"<!DOCTYPE {node.text}>")

    def visit_comment(self, node: Comment) -> None:
        self._output.append(f"<!--{node.text}-->")

    def visit_text(self, node: Text) -> None:
        if self._raw_text_depth or not self.options.escape_text:
            self._output.append(node.text)
        else:
            self._output.append(escape(node.text, quote=False))

    def visit_element(self, node: Element) -> None:
        name = node.name
        attrs = "".join(f' {key}="{escape(value, quote=True)}"' for key, value in node.attrs)
        is_void = name.lower() in VOID_ELEMENTS

        if is_void and not node.children:
            closer = " />" if self.options.void_style == "xhtml" else ">"
            self._output.append(f"<{name}{attrs}{closer}")
            return

        self._output.append(f"<{name}{attrs}>")
        raw = name.lower() in RAW_TEXT_ELEMENTS
        if raw:
            self._raw_text_depth += 1
        try:
            for child in node.children:
                child.accept(self)
        finally:
            if raw:
                self._raw_text_depth -= 1
        self._output.append(f"</{name}>")


def to_html(nodes: Node | Iterable[Node], options: RenderOptions | None = None) -> str:
    """Serialize a node, or a sequence of sibling nodes, to markup.

    Parameters
    ----------
    nodes : Node or iterable of Node
        What to serialize
    options : RenderOptions or None, default = None
        Serialization options

    Returns
    -------
    str
        Markup text

    Examples
    --------
    >>> from htmledit.nodes import Comment, Text, new_element
    >>> to_html([new_element("p", children=[Text("a < b")]), Comment(" end ")])
    '<p>a &lt; b</p><!-- end -->'

    """
    return HtmlSerializer(options).render_to_string(nodes)
