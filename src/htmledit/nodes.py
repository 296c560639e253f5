#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/nodes.py
"""Node classes for the editable document tree.

This module defines the four node kinds that can appear in a tree, plus the
``NodeList`` container used for a sequence of sibling nodes (what the parser
returns for a whole document).

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

    - Doctype: document type declaration, e.g. ``<!DOCTYPE html>``
    - Comment: ``<!-- ... -->``
    - Text: character data, stored exactly as parsed
    - Element: named node with ordered attributes and ordered children

Both ``Element`` and ``NodeList`` expose the editing operations (``trim``,
``insert_to``, ``remove_by``, ``replace_with``, ``execute_for``) as chainable
methods that mutate the receiver in place and return it.

Examples
--------
    >>> from htmledit.nodes import Element, NodeList, Text
    >>> doc = NodeList([Element("body", children=[Element("p", children=[Text("Hello")])])])
    >>> doc.insert_to("body", Text("!")).html()
    '<body><p>Hello</p>!</body>'

"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, TypeVar

if TYPE_CHECKING:
    from htmledit.options import RenderOptions
    from htmledit.selector import SelectorLike

_EditableT = TypeVar("_EditableT", bound="_Editable")

Attribute = tuple[str, str]

# Separator controls that str.isspace() accepts but Unicode White_Space excludes
_NON_WHITE_SPACE = frozenset("\x1c\x1d\x1e\x1f")


class Node(ABC):
    """Base class for all tree nodes.

    All nodes inherit from this base class and support the visitor pattern
    for traversal and serialization.

    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass

    def is_element(self) -> bool:
        """Return True when this node is an Element."""
        return False

    def as_element(self) -> Element | None:
        """Return this node as an Element, or None for other node kinds."""
        return None

    def html(self, options: RenderOptions | None = None) -> str:
        """Serialize this node to markup.

        Parameters
        ----------
        options : RenderOptions or None, default = None
            Serialization options

        Returns
        -------
        str
            Markup text

        """
        from htmledit.serialize import to_html

        return to_html(self, options)


class _Editable:
    """Chainable editing methods shared by ``Element`` and ``NodeList``.

    Every method delegates to the module-level function of the same name in
    :mod:`htmledit.edit`, passing ``self`` as the receiver.
    """

    def trim(self: _EditableT) -> _EditableT:
        """Remove comments and whitespace-only text nodes at every depth."""
        from htmledit import edit

        return edit.trim(self)

    def insert_to(self: _EditableT, selector: SelectorLike | str, target: Node) -> _EditableT:
        """Append a copy of ``target`` to every element matching ``selector``."""
        from htmledit import edit

        return edit.insert_to(self, selector, target)

    def remove_by(self: _EditableT, selector: SelectorLike | str) -> _EditableT:
        """Remove every element matching ``selector`` with its subtree."""
        from htmledit import edit

        return edit.remove_by(self, selector)

    def replace_with(self: _EditableT, selector: SelectorLike | str, transform: Callable[[Element], Node]) -> _EditableT:
        """Replace every element matching ``selector`` with ``transform(element)``.

        Raises
        ------
        EditError
            If the transform fails for a matched element

        """
        from htmledit import edit

        return edit.replace_with(self, selector, transform)

    def execute_for(self: _EditableT, selector: SelectorLike | str, visitor: Callable[[Element], Any]) -> _EditableT:
        """Call ``visitor`` on every element matching ``selector``."""
        from htmledit import edit

        return edit.execute_for(self, selector, visitor)

    def query(self, selector: SelectorLike | str) -> Element | None:
        """Return the first element matching ``selector`` in document order."""
        from htmledit.query import query

        return query(self, selector)  # type: ignore[arg-type]

    def query_all(self, selector: SelectorLike | str) -> list[Element]:
        """Return every element matching ``selector`` in document order."""
        from htmledit.query import query_all

        return query_all(self, selector)  # type: ignore[arg-type]


@dataclass
class Doctype(Node):
    """Document type declaration.

    Parameters
    ----------
    text : str
        Declaration body, e.g. ``"html"`` for ``<!DOCTYPE html>``

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_doctype``."""
        return visitor.visit_doctype(self)


@dataclass
class Comment(Node):
    """Markup comment.

    Parameters
    ----------
    text : str
        Comment body without the ``<!--``/``-->`` delimiters

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment``."""
        return visitor.visit_comment(self)


@dataclass
class Text(Node):
    """Character data.

    Parameters
    ----------
    text : str
        Text content, stored exactly as parsed (whitespace included)

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)

    def is_blank(self) -> bool:
        """Return True when the text is empty or holds only Unicode White_Space characters."""
        return all(char.isspace() and char not in _NON_WHITE_SPACE for char in self.text)


@dataclass
class Element(_Editable, Node):
    """Named node with attributes and child nodes.

    Parameters
    ----------
    name : str
        Tag name
    attrs : list of (str, str), default = empty list
        Attributes as ordered key/value pairs. Duplicate keys are allowed and
        insertion order is preserved.
    children : list of Node, default = empty list
        Child nodes, owned exclusively by this element

    """

    name: str
    attrs: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_element``."""
        return visitor.visit_element(self)

    def is_element(self) -> bool:
        return True

    def as_element(self) -> Element:
        return self

    def shape(self) -> Element:
        """Return a copy with the same name and attributes but no children."""
        return Element(name=self.name, attrs=list(self.attrs), children=[])

    def get_attribute(self, key: str) -> str | None:
        """Return the value of the first attribute named ``key``, or None."""
        for attr_key, value in self.attrs:
            if attr_key == key:
                return value
        return None

    def get_attributes(self, key: str) -> list[str]:
        """Return the values of every attribute named ``key``, in order."""
        return [value for attr_key, value in self.attrs if attr_key == key]

    def set_attribute(self, key: str, value: str) -> Element:
        """Set an attribute value.

        The first attribute named ``key`` is updated in place, keeping its
        position. When there is none, the pair is appended.

        Returns
        -------
        Element
            This element, for chaining

        """
        for index, (attr_key, _value) in enumerate(self.attrs):
            if attr_key == key:
                self.attrs[index] = (key, value)
                return self
        self.attrs.append((key, value))
        return self

    def remove_attribute(self, key: str) -> Element:
        """Remove every attribute named ``key``."""
        self.attrs[:] = [(attr_key, value) for attr_key, value in self.attrs if attr_key != key]
        return self

    def text_content(self) -> str:
        """Return the concatenated text of all descendant Text nodes."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.text)
            elif isinstance(child, Element):
                parts.append(child.text_content())
        return "".join(parts)


class NodeList(_Editable, list[Node]):
    """A mutable sequence of sibling nodes.

    This is the receiver type for editing a whole document (or any run of
    siblings). It behaves like a regular ``list`` and adds the chainable
    editing methods plus ``html()``.

    Examples
    --------
    >>> from htmledit import parse
    >>> parse("<!-- note --><p>Hi</p>").trim().html()
    '<p>Hi</p>'

    """

    def html(self, options: RenderOptions | None = None) -> str:
        """Serialize all nodes in order to markup."""
        from htmledit.serialize import to_html

        return to_html(self, options)

    def elements(self) -> list[Element]:
        """Return the Element members of this list (not descendants)."""
        return [node for node in self if isinstance(node, Element)]


def new_element(
    name: str,
    attrs: Mapping[str, str] | Iterable[Attribute] | None = None,
    children: Iterable[Node] | None = None,
) -> Element:
    """Construct an Element.

    Parameters
    ----------
    name : str
        Tag name
    attrs : mapping or iterable of (str, str), optional
        Attributes; a mapping is converted to pairs in iteration order
    children : iterable of Node, optional
        Child nodes

    Returns
    -------
    Element
        The new element

    Examples
    --------
    >>> new_element("span", {"class": "note"}, [Text("Cancel")]).html()
    '<span class="note">Cancel</span>'

    """
    if attrs is None:
        pairs: list[Attribute] = []
    elif isinstance(attrs, Mapping):
        pairs = [(str(key), str(value)) for key, value in attrs.items()]
    else:
        pairs = [(str(key), str(value)) for key, value in attrs]
    return Element(name=name, attrs=pairs, children=list(children or []))


def clone_node(node: Node) -> Node:
    """Create a deep copy of a node.

    The copy shares no mutable state with the original, so editing one
    never affects the other.

    Parameters
    ----------
    node : Node
        Node to clone

    Returns
    -------
    Node
        Independent deep copy

    """
    return copy.deepcopy(node)
