#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/query.py
"""Read-only element lookup built on the matching-traversal engine."""

from __future__ import annotations

from htmledit.edit import walk_element_matches, walk_matches
from htmledit.nodes import Element, Node
from htmledit.selector import SelectorLike, as_selector


class _FirstMatch(Exception):
    def __init__(self, element: Element) -> None:
        super().__init__()
        self.element = element


def query_all(root: list[Node] | Element, selector: SelectorLike | str) -> list[Element]:
    """Return every element matching ``selector``, in document (pre-)order.

    Parameters
    ----------
    root : list of Node or Element
        Tree to search; an Element root is itself a candidate
    selector : SelectorLike or str
        Selector, evaluated on each element with its children

    Returns
    -------
    list of Element
        Matching elements (the live nodes, not copies)

    """
    compiled = as_selector(selector)
    found: list[Element] = []
    if isinstance(root, Element):
        walk_element_matches(root, compiled, found.append)
    else:
        walk_matches(root, compiled, found.append)
    return found


def query(root: list[Node] | Element, selector: SelectorLike | str) -> Element | None:
    """Return the first element matching ``selector`` in document order, or None."""
    compiled = as_selector(selector)

    def stop(element: Element) -> None:
        raise _FirstMatch(element)

    try:
        if isinstance(root, Element):
            walk_element_matches(root, compiled, stop)
        else:
            walk_matches(root, compiled, stop)
    except _FirstMatch as match:
        return match.element
    return None
