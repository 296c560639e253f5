#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/visitors.py
"""Visitor pattern implementation for node tree traversal.

Visitors separate algorithms (serialization, statistics, validation) from the
node classes. Each node's ``accept`` dispatches to the matching ``visit_*``
method.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from htmledit.nodes import Comment, Doctype, Element, Text


class NodeVisitor(ABC):
    """Abstract base class for node visitors.

    Subclasses implement one ``visit_*`` method per node kind.

    Examples
    --------
    Visitor that counts elements:

        >>> class ElementCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_doctype(self, node): pass
        ...     def visit_comment(self, node): pass
        ...     def visit_text(self, node): pass
        ...     def visit_element(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_doctype(self, node: Doctype) -> Any:
        """Visit a Doctype node."""
        pass

    @abstractmethod
    def visit_comment(self, node: Comment) -> Any:
        """Visit a Comment node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_element(self, node: Element) -> Any:
        """Visit an Element node.

        Implementations are responsible for visiting the element's children.

        """
        pass
