#  Copyright (c) 2025 Tom Villani, Ph.D.
"""htmledit - selector-driven, in-place editing of HTML node trees.

The package parses markup into a small tree of ``Doctype``, ``Comment``,
``Text`` and ``Element`` nodes, edits it in place with five operations, and
serializes it back to markup.

Editing operations
------------------
- ``trim``: drop comments and whitespace-only text at every depth
- ``insert_to``: append a copy of a node to every matching element
- ``remove_by``: delete every matching element with its subtree
- ``replace_with``: swap every matching element for a transform's result
- ``execute_for``: call a visitor on every matching element

Each is available as a function in :mod:`htmledit.edit` and as a chainable
method on ``NodeList`` (what ``parse`` returns) and ``Element``.

Examples
--------
    >>> from htmledit import Text, parse
    >>> parse("<body><p>Hello</p></body>").insert_to("body", Text("!")).html()
    '<body><p>Hello</p>!</body>'

    >>> parse('<div><div class="ad"></div><div class="keep"></div></div>').remove_by(".ad").html()
    '<div><div class="keep"></div></div>'

"""

from __future__ import annotations

from htmledit.edit import execute_for, insert_to, matches_full, matches_shape, remove_by, replace_with, trim
from htmledit.exceptions import (
    DependencyError,
    EditError,
    HtmlEditError,
    ParsingError,
    SelectorError,
    ValidationError,
)
from htmledit.nodes import Comment, Doctype, Element, Node, NodeList, Text, clone_node, new_element
from htmledit.options import ParseOptions, RenderOptions
from htmledit.parser import parse, parse_element
from htmledit.query import query, query_all
from htmledit.selector import Selector, SelectorLike, as_selector
from htmledit.serialize import HtmlSerializer, to_html
from htmledit.visitors import NodeVisitor

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Nodes
    "Comment",
    "Doctype",
    "Element",
    "Node",
    "NodeList",
    "Text",
    "clone_node",
    "new_element",
    # Selectors
    "Selector",
    "SelectorLike",
    "as_selector",
    # Editing
    "execute_for",
    "insert_to",
    "matches_full",
    "matches_shape",
    "remove_by",
    "replace_with",
    "trim",
    # Lookup
    "query",
    "query_all",
    # Parsing and serialization
    "HtmlSerializer",
    "NodeVisitor",
    "ParseOptions",
    "RenderOptions",
    "parse",
    "parse_element",
    "to_html",
    # Errors
    "DependencyError",
    "EditError",
    "HtmlEditError",
    "ParsingError",
    "SelectorError",
    "ValidationError",
]
