#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/selector.py
"""Element selectors.

A selector is any object exposing ``matches(element) -> bool``. The editing
operations only rely on that contract; this module supplies the bundled
implementation, compiled from a subset of CSS selector syntax.

Supported syntax
----------------
A comma-separated list of compound selectors. Each compound selector is an
optional type selector (``div`` or ``*``) followed by any number of:

    - ``.class``
    - ``#id``
    - ``[attr]``, ``[attr=value]``, ``[attr~=value]``, ``[attr|=value]``,
      ``[attr^=value]``, ``[attr$=value]``, ``[attr*=value]``

Combinators (descendant whitespace, ``>``, ``+``, ``~``) and pseudo-classes
are not supported, because a selector must be decidable from a single
element's name and attributes.

Examples
--------
    >>> from htmledit.nodes import new_element
    >>> Selector("div.ad, [data-tracking]").matches(new_element("div", {"class": "ad banner"}))
    True

"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from htmledit.exceptions import SelectorError

if TYPE_CHECKING:
    from htmledit.nodes import Element

_WHITESPACE = " \t\n\r\f"
_COMBINATORS = ">+~"
_ATTR_OPERATORS = ("~=", "|=", "^=", "$=", "*=", "=")


@runtime_checkable
class SelectorLike(Protocol):
    """Anything that can decide whether an element is matched.

    Implementations must be pure: deterministic, free of side effects, and
    independent of global or mutable state, because the editing operations
    re-evaluate them freely while descending the tree.
    """

    def matches(self, element: Element) -> bool: ...


@dataclass(frozen=True)
class SimpleSelector:
    """One condition of a compound selector."""

    TYPE_UNIVERSAL = "universal"
    TYPE_TAG = "tag"
    TYPE_ID = "id"
    TYPE_CLASS = "class"
    TYPE_ATTR = "attr"

    type: str
    name: str = ""
    operator: str | None = None
    value: str = ""

    def matches(self, element: Element) -> bool:
        if self.type == self.TYPE_UNIVERSAL:
            return True

        if self.type == self.TYPE_TAG:
            # HTML tag names are case-insensitive
            return element.name.lower() == self.name.lower()

        if self.type == self.TYPE_ID:
            return any(value == self.name for value in _values(element, "id"))

        if self.type == self.TYPE_CLASS:
            return any(self.name in value.split() for value in _values(element, "class"))

        return any(self._matches_value(value) for value in _values(element, self.name))

    def _matches_value(self, attr_value: str) -> bool:
        op = self.operator
        value = self.value

        if op is None:
            return True
        if op == "=":
            return attr_value == value
        if op == "~=":
            return value in attr_value.split()
        if op == "|=":
            return attr_value == value or attr_value.startswith(value + "-")
        if op == "^=":
            return bool(value) and attr_value.startswith(value)
        if op == "$=":
            return bool(value) and attr_value.endswith(value)
        if op == "*=":
            return bool(value) and value in attr_value
        return False


def _values(element: Element, name: str) -> list[str]:
    # Attribute names are case-insensitive in HTML; duplicates are all considered
    lowered = name.lower()
    return [value for key, value in element.attrs if key.lower() == lowered]


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors that must all match the same element."""

    selectors: tuple[SimpleSelector, ...]

    def matches(self, element: Element) -> bool:
        return all(simple.matches(element) for simple in self.selectors)


class _CompoundParser:
    """Parses the text of a single compound selector."""

    def __init__(self, text: str, source: str, offset: int) -> None:
        self.text = text
        self.source = source
        self.offset = offset
        self.pos = 0

    def _error(self, message: str) -> SelectorError:
        return SelectorError(f"{message} in selector {self.source!r}", self.source, self.offset + self.pos)

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _read_name(self) -> str:
        start = self.pos
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if not (ch.isalnum() or ch in "-_" or ord(ch) > 127):
                break
            self.pos += 1
        if self.pos == start:
            raise self._error("Expected a name")
        return self.text[start : self.pos]

    def _read_string(self, quote: str) -> str:
        self.pos += 1
        parts: list[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(parts)
            if ch == "\\" and self.pos + 1 < len(self.text):
                self.pos += 1
                ch = self.text[self.pos]
            parts.append(ch)
            self.pos += 1
        raise self._error("Unterminated string")

    def _read_attribute(self) -> SimpleSelector:
        self.pos += 1  # [
        self._skip_whitespace()
        name = self._read_name()
        self._skip_whitespace()

        if self._peek() == "]":
            self.pos += 1
            return SimpleSelector(SimpleSelector.TYPE_ATTR, name)

        operator = next((op for op in _ATTR_OPERATORS if self.text.startswith(op, self.pos)), None)
        if operator is None:
            raise self._error("Expected an attribute operator or ']'")
        self.pos += len(operator)
        self._skip_whitespace()

        if self._peek() in ("'", '"'):
            value = self._read_string(self._peek())
        else:
            start = self.pos
            while self.pos < len(self.text) and self.text[self.pos] not in _WHITESPACE + "]":
                self.pos += 1
            value = self.text[start : self.pos]

        self._skip_whitespace()
        if self._peek() != "]":
            raise self._error("Expected ']'")
        self.pos += 1
        return SimpleSelector(SimpleSelector.TYPE_ATTR, name, operator, value)

    def parse(self) -> CompoundSelector:
        simples: list[SimpleSelector] = []

        if self._peek() == "*":
            self.pos += 1
            simples.append(SimpleSelector(SimpleSelector.TYPE_UNIVERSAL))
        elif self._peek() and (self._peek().isalpha() or self._peek() in "-_"):
            simples.append(SimpleSelector(SimpleSelector.TYPE_TAG, self._read_name()))

        while self.pos < len(self.text):
            ch = self._peek()
            if ch == ".":
                self.pos += 1
                simples.append(SimpleSelector(SimpleSelector.TYPE_CLASS, self._read_name()))
            elif ch == "#":
                self.pos += 1
                simples.append(SimpleSelector(SimpleSelector.TYPE_ID, self._read_name()))
            elif ch == "[":
                simples.append(self._read_attribute())
            elif ch == ":":
                raise self._error("Pseudo-classes are not supported")
            elif ch in _WHITESPACE or ch in _COMBINATORS:
                raise self._error("Combinators are not supported")
            else:
                raise self._error(f"Unexpected character {ch!r}")

        if not simples:
            raise self._error("Empty compound selector")
        return CompoundSelector(tuple(simples))


def _split_groups(text: str) -> list[tuple[int, str]]:
    """Split a selector list on top-level commas, returning (offset, part) pairs."""
    groups: list[tuple[int, str]] = []
    start = 0
    quote = ""
    depth = 0
    for index, ch in enumerate(text):
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch == "," and depth == 0:
            groups.append((start, text[start:index]))
            start = index + 1
    groups.append((start, text[start:]))
    return groups


@lru_cache(maxsize=256)
def _compile(text: str) -> tuple[CompoundSelector, ...]:
    if not text.strip():
        raise SelectorError("Empty selector", text, 0)

    compounds = []
    for offset, part in _split_groups(text):
        stripped = part.strip()
        if not stripped:
            raise SelectorError(f"Empty selector in list {text!r}", text, offset)
        leading = len(part) - len(part.lstrip())
        compounds.append(_CompoundParser(stripped, text, offset + leading).parse())
    return tuple(compounds)


class Selector:
    """A compiled selector list.

    Parameters
    ----------
    text : str
        Selector text, e.g. ``"div.ad"`` or ``"meta, link[rel=preload]"``

    Raises
    ------
    SelectorError
        If the text is empty, malformed, or uses combinators/pseudo-classes

    Notes
    -----
    ``matches`` only looks at the element's name and attributes, never at its
    children.

    """

    __slots__ = ("compounds", "text")

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise SelectorError(f"Selector text must be a string, got {type(text).__name__}")
        self.text = text
        self.compounds = _compile(text)

    def matches(self, element: Element) -> bool:
        """Return True when any compound selector in the list matches ``element``."""
        return any(compound.matches(element) for compound in self.compounds)

    def __repr__(self) -> str:
        return f"Selector({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selector):
            return NotImplemented
        return self.compounds == other.compounds

    def __hash__(self) -> int:
        return hash(self.compounds)


def as_selector(value: SelectorLike | str) -> SelectorLike:
    """Coerce ``value`` into a selector.

    Parameters
    ----------
    value : SelectorLike or str
        Selector text, or an object exposing ``matches(element)``

    Returns
    -------
    SelectorLike
        ``Selector(value)`` for strings, ``value`` itself otherwise

    Raises
    ------
    SelectorError
        If ``value`` is neither a string nor exposes a callable ``matches``

    """
    if isinstance(value, str):
        return Selector(value)
    if callable(getattr(value, "matches", None)):
        return value
    raise SelectorError(f"Expected selector text or an object with matches(), got {type(value).__name__}")
