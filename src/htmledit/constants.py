#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the htmledit library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parsing - BeautifulSoup tree builders and defaults
3. Serialization - Element categories that change how markup is emitted
4. Errors - Fixed diagnostic text
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParserType = Literal["html.parser", "lxml", "html5lib", "xml", "lxml-xml"]
VoidStyle = Literal["html", "xhtml"]

# =============================================================================
# Parsing
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParserType = "html.parser"
DEFAULT_TRIM_ON_PARSE = False
DEFAULT_KEEP_DOCTYPE = True

# Tree builder name -> (install name, version spec) of the package providing it
HTML_PARSER_PACKAGES: dict[str, tuple[str, str]] = {
    "html.parser": ("", ""),
    "lxml": ("lxml", ""),
    "html5lib": ("html5lib", ""),
    "xml": ("lxml", ""),
    "lxml-xml": ("lxml", ""),
}

# =============================================================================
# Serialization
# =============================================================================

DEFAULT_ESCAPE_TEXT = True
DEFAULT_VOID_STYLE: VoidStyle = "html"

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Text inside these elements is emitted verbatim
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# =============================================================================
# Errors
# =============================================================================

EDIT_ERROR_MESSAGE = "Unexpected error in HTML Editor"

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_EDIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
EXIT_DEPENDENCY_ERROR = 4
