#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/parser.py
"""Markup to node tree conversion.

Parsing is delegated to BeautifulSoup; this module converts the resulting
soup into ``Doctype``/``Comment``/``Text``/``Element`` nodes. The default
``html.parser`` tree builder keeps the document structure as written
(no implied ``html``/``head``/``body`` elements), which is what an editing
round trip usually wants. BeautifulSoup reduces text that is only ASCII
whitespace to a single newline or space; other text is kept exactly.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import CData, NavigableString, PreformattedString, Tag
from bs4.element import Comment as SoupComment
from bs4.element import Doctype as SoupDoctype
from bs4.exceptions import FeatureNotFound, ParserRejectedMarkup

from htmledit.constants import HTML_PARSER_PACKAGES
from htmledit.edit import trim
from htmledit.exceptions import DependencyError, ParsingError
from htmledit.nodes import Comment, Doctype, Element, Node, NodeList, Text
from htmledit.options import ParseOptions

logger = logging.getLogger(__name__)


def _attribute_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    return str(value)


def _convert(item: Any, options: ParseOptions) -> Node | None:
    """Convert one soup item, returning None for items that are dropped."""
    # Doctype and Comment subclass PreformattedString, so they are checked first
    if isinstance(item, SoupDoctype):
        if not options.keep_doctype:
            return None
        text = str(item)
        # html.parser only strips an upper-case "DOCTYPE " prefix
        if text[:8].lower() == "doctype ":
            text = text[8:]
        return Doctype(text)
    if isinstance(item, SoupComment):
        return Comment(str(item))
    if isinstance(item, CData):
        return Text(str(item))
    if isinstance(item, PreformattedString):
        logger.debug("Dropping %s: %r", type(item).__name__, str(item)[:50])
        return None
    if isinstance(item, NavigableString):
        return Text(str(item))
    if isinstance(item, Tag):
        return Element(
            name=item.name,
            attrs=[(str(key), _attribute_value(value)) for key, value in item.attrs.items()],
            children=_convert_all(item.contents, options),
        )

    logger.debug("Dropping unsupported soup item %s", type(item).__name__)
    return None


def _convert_all(items: list[Any], options: ParseOptions) -> list[Node]:
    nodes: list[Node] = []
    for item in items:
        node = _convert(item, options)
        if node is not None:
            nodes.append(node)
    return nodes


def parse(markup: str | bytes, options: ParseOptions | None = None) -> NodeList:
    """Parse markup into a list of top-level nodes.

    Parameters
    ----------
    markup : str or bytes
        Markup text; bytes are decoded by BeautifulSoup's encoding detection
    options : ParseOptions or None, default = None
        Parsing options

    Returns
    -------
    NodeList
        Top-level nodes in document order

    Raises
    ------
    ParsingError
        If ``markup`` is not text or the tree builder rejects it
    DependencyError
        If the selected tree builder is not installed

    Examples
    --------
    >>> parse('<div class="a">Hi<!-- c --></div>')
    [Element(name='div', attrs=[('class', 'a')], children=[Text(text='Hi'), Comment(text=' c ')])]

    """
    options = options or ParseOptions()
    if not isinstance(markup, (str, bytes)):
        raise ParsingError(f"Expected markup as str or bytes, got {type(markup).__name__}")

    try:
        soup = BeautifulSoup(markup, options.html_parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(options.html_parser, ("", ""))
        missing_packages = [package] if package[0] else []
        raise DependencyError(
            f"Tree builder {options.html_parser!r}",
            missing_packages=missing_packages,
            original_error=e,
        ) from e
    except ParserRejectedMarkup as e:
        raise ParsingError(f"Markup rejected by {options.html_parser}: {e}", original_error=e) from e

    nodes = NodeList(_convert_all(soup.contents, options))
    logger.debug("Parsed %d top-level node(s) with %s", len(nodes), options.html_parser)

    if options.trim:
        trim(nodes)
    return nodes


def parse_element(markup: str | bytes, options: ParseOptions | None = None) -> Element:
    """Parse markup that holds exactly one top-level element.

    Blank text and comments around the element are ignored.

    Parameters
    ----------
    markup : str or bytes
        Markup text
    options : ParseOptions or None, default = None
        Parsing options

    Returns
    -------
    Element
        The single top-level element

    Raises
    ------
    ParsingError
        If the markup does not contain exactly one top-level element, or
        contains top-level text or a doctype

    """
    nodes = parse(markup, options)
    significant = [
        node for node in nodes if not isinstance(node, Comment) and not (isinstance(node, Text) and node.is_blank())
    ]
    if len(significant) != 1 or not isinstance(significant[0], Element):
        raise ParsingError(f"Expected exactly one top-level element, found {len(significant)} top-level node(s)")
    return significant[0]
