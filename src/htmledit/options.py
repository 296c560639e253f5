#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for parsing and serialization.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy. Field metadata carries the help text used by the CLI.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from htmledit.constants import (
    DEFAULT_ESCAPE_TEXT,
    DEFAULT_HTML_PARSER,
    DEFAULT_KEEP_DOCTYPE,
    DEFAULT_TRIM_ON_PARSE,
    DEFAULT_VOID_STYLE,
    HTML_PARSER_PACKAGES,
    HtmlParserType,
    VoidStyle,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ParseOptions(CloneFrozenMixin):
    """Options controlling how markup is turned into a node tree.

    Parameters
    ----------
    html_parser : {"html.parser", "lxml", "html5lib", "xml", "lxml-xml"}, default "html.parser"
        BeautifulSoup tree builder. ``html.parser`` keeps the markup structure
        as written; ``lxml`` and ``html5lib`` repair it the way browsers do
        (adding ``html``/``head``/``body``) and need their packages installed.
    trim : bool, default False
        Trim comments and whitespace-only text right after parsing
    keep_doctype : bool, default True
        Keep doctype declarations in the parsed tree

    """

    html_parser: HtmlParserType = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup tree builder used to parse markup", "importance": "core"},
    )
    trim: bool = field(
        default=DEFAULT_TRIM_ON_PARSE,
        metadata={"help": "Remove comments and whitespace-only text after parsing", "importance": "core"},
    )
    keep_doctype: bool = field(
        default=DEFAULT_KEEP_DOCTYPE,
        metadata={"help": "Keep <!DOCTYPE> declarations in the parsed tree", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the tree builder name.

        Raises
        ------
        ValueError
            If ``html_parser`` is not a known BeautifulSoup tree builder

        """
        if self.html_parser not in HTML_PARSER_PACKAGES:
            valid = ", ".join(sorted(HTML_PARSER_PACKAGES))
            raise ValueError(f"html_parser must be one of {valid}, got {self.html_parser!r}")


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Options controlling how a node tree is serialized to markup.

    Parameters
    ----------
    escape_text : bool, default True
        Escape ``&``, ``<`` and ``>`` in text outside ``script``/``style``
    void_style : {"html", "xhtml"}, default "html"
        Emit void elements as ``<br>`` (html) or ``<br />`` (xhtml)

    """

    escape_text: bool = field(
        default=DEFAULT_ESCAPE_TEXT,
        metadata={"help": "Escape special characters in text nodes", "importance": "core"},
    )
    void_style: VoidStyle = field(
        default=DEFAULT_VOID_STYLE,
        metadata={"help": "Void element style: 'html' (<br>) or 'xhtml' (<br />)", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the void element style.

        Raises
        ------
        ValueError
            If ``void_style`` is not ``"html"`` or ``"xhtml"``

        """
        if self.void_style not in ("html", "xhtml"):
            raise ValueError(f"void_style must be 'html' or 'xhtml', got {self.void_style!r}")
