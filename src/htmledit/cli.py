#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for the htmledit library.

Reads a document, applies selector-driven edits in a fixed order (trim,
removals, insertions, attribute updates) and writes the result.

Environment Variable Support
----------------------------
Options without a value of their own on the command line fall back to
``HTMLEDIT_<OPTION_NAME>`` environment variables (``HTMLEDIT_HTML_PARSER``,
``HTMLEDIT_LOG_LEVEL``, ``HTMLEDIT_TRIM``, ``HTMLEDIT_XHTML``).
Command-line arguments always override environment variables.

Examples
--------
Strip comments and blank text::

    $ htmledit page.html --trim

Remove ads and add a script to the body::

    $ htmledit page.html --remove ".ad, .sponsored" \\
        --insert body '<script src="app.js"></script>' --out clean.html

Tag every input::

    $ htmledit form.html --set-attr input class input

"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from htmledit.constants import (
    DEFAULT_HTML_PARSER,
    EXIT_DEPENDENCY_ERROR,
    EXIT_EDIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    HTML_PARSER_PACKAGES,
)
from htmledit.exceptions import DependencyError, HtmlEditError, ValidationError
from htmledit.logging_utils import configure_logging
from htmledit.nodes import Element, Node, NodeList, clone_node
from htmledit.options import ParseOptions, RenderOptions
from htmledit.parser import parse
from htmledit.selector import Selector

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(f"HTMLEDIT_{name}", default)


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in _TRUE_VALUES


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser, with defaults taken from the environment."""
    parser = argparse.ArgumentParser(
        prog="htmledit",
        description="Edit HTML documents in place using element selectors.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file, or '-' for stdin (default)")
    parser.add_argument("-o", "--out", help="Output file (default: stdout)")

    edits = parser.add_argument_group("edits", "Applied in this order: trim, remove, insert, set-attr")
    edits.add_argument(
        "--trim",
        action="store_true",
        default=_env_flag("TRIM"),
        help="Remove comments and whitespace-only text nodes",
    )
    edits.add_argument(
        "--remove",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="Remove elements matching SELECTOR with their content (repeatable)",
    )
    edits.add_argument(
        "--insert",
        action="append",
        nargs=2,
        default=[],
        metavar=("SELECTOR", "MARKUP"),
        help="Append MARKUP as the last child of elements matching SELECTOR (repeatable)",
    )
    edits.add_argument(
        "--set-attr",
        action="append",
        nargs=3,
        default=[],
        metavar=("SELECTOR", "KEY", "VALUE"),
        help="Set attribute KEY to VALUE on elements matching SELECTOR (repeatable)",
    )

    formatting = parser.add_argument_group("parsing and output")
    formatting.add_argument(
        "--html-parser",
        choices=sorted(HTML_PARSER_PACKAGES),
        default=_env("HTML_PARSER", DEFAULT_HTML_PARSER),
        help="BeautifulSoup tree builder (default: %(default)s)",
    )
    formatting.add_argument(
        "--xhtml",
        action="store_true",
        default=_env_flag("XHTML"),
        help="Write void elements as <br /> instead of <br>",
    )
    formatting.add_argument("--rich", action="store_true", help="Syntax-highlight output written to a terminal")

    logs = parser.add_argument_group("logging")
    logs.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=(_env("LOG_LEVEL", "WARNING") or "WARNING").upper(),
        help="Logging level (default: %(default)s)",
    )
    logs.add_argument("--log-file", help="Also write log records to this file")
    logs.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    logs.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace or parsed_args.verbose:
        log_level: int | str = logging.DEBUG
    else:
        log_level = parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _fragment(markup: str, options: ParseOptions) -> list[Node]:
    nodes = parse(markup, options.create_updated(trim=False))
    if not nodes:
        raise ValidationError("Inserted markup must not be empty", parameter_name="insert", parameter_value=markup)
    return list(nodes)


def apply_edits(document: NodeList, parsed_args: argparse.Namespace, options: ParseOptions) -> NodeList:
    """Apply the edits requested on the command line to ``document``.

    Selectors are compiled before any edit runs, so a bad selector leaves the
    document untouched.

    Parameters
    ----------
    document : NodeList
        Parsed document, mutated in place
    parsed_args : argparse.Namespace
        Parsed command line arguments
    options : ParseOptions
        Options used to parse inserted markup

    Returns
    -------
    NodeList
        ``document``

    Raises
    ------
    SelectorError
        If any selector is invalid
    ValidationError
        If inserted markup is empty

    """
    removals = [Selector(text) for text in parsed_args.remove]
    insertions = [(Selector(text), _fragment(markup, options)) for text, markup in parsed_args.insert]
    updates = [(Selector(text), key, value) for text, key, value in parsed_args.set_attr]

    if parsed_args.trim:
        document.trim()

    for selector in removals:
        document.remove_by(selector)

    for selector, fragment in insertions:
        # Targets are collected first so inserted markup is never a target itself
        targets = document.query_all(selector)
        for element in targets:
            element.children.extend(clone_node(node) for node in fragment)
        logger.debug("--insert %r appended %d node(s) to %d element(s)", selector.text, len(fragment), len(targets))

    for selector, key, value in updates:

        def set_value(element: Element, key: str = key, value: str = value) -> None:
            element.set_attribute(key, value)

        document.execute_for(selector, set_value)

    return document


def _write_output(output: str, parsed_args: argparse.Namespace) -> None:
    if parsed_args.out:
        Path(parsed_args.out).write_text(output, encoding="utf-8")
        logger.info("Wrote %s", parsed_args.out)
        return

    if parsed_args.rich and sys.stdout.isatty():
        from rich.console import Console
        from rich.syntax import Syntax

        Console().print(Syntax(output, "html", word_wrap=True))
        return

    sys.stdout.write(output)


def main(args: Sequence[str] | None = None) -> int:
    """Run the htmledit command line and return a process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        parse_options = ParseOptions(html_parser=parsed_args.html_parser)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    render_options = RenderOptions(void_style="xhtml" if parsed_args.xhtml else "html")

    try:
        markup = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        document = parse(markup, parse_options)
        apply_edits(document, parsed_args, parse_options)
        output = document.html(render_options)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR
    except HtmlEditError as e:
        logger.debug("Edit failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_EDIT_ERROR

    try:
        _write_output(output, parsed_args)
    except OSError as e:
        print(f"Error: cannot write {parsed_args.out}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
