#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmledit/edit.py
"""Selector-driven, in-place editing of node trees.

This module provides the five editing operations. Each accepts either a
sequence of sibling nodes (a ``NodeList`` or plain ``list``) or a single
``Element`` as the receiver, mutates it in place, and returns it so calls can
be chained.

Matching rules
--------------
Two ways of asking a selector about an element are used:

- Shape match (``matches_shape``): the selector sees the element's name and
  attributes with its children cleared. Used by ``insert_to`` and
  ``remove_by`` so that structural edits never depend on descendant content,
  including content an insertion is about to add.
- True-value match (``matches_full``): the selector sees the element as it
  is. Used by ``execute_for`` and ``replace_with``.

Error propagation
-----------------
Only ``replace_with`` can fail, when its transform fails. The first failure,
at any depth, aborts the operation and propagates as an ``EditError``. Nodes
replaced before the failure stay replaced; the failing node is left as it was.

Concurrency
-----------
Operations are synchronous and assume exclusive access to the tree for their
whole duration. Sharing a tree across threads requires external locking.

Examples
--------
Remove ads and annotate inputs:

    >>> from htmledit import parse
    >>> doc = parse('<div><div class="ad"></div><input type="text"></div>')
    >>> _ = doc.remove_by(".ad").execute_for("input", lambda el: el.set_attribute("class", "input"))
    >>> doc.html()
    '<div><input type="text" class="input"></div>'

"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from htmledit.exceptions import EditError
from htmledit.nodes import Comment, Element, Node, Text, clone_node
from htmledit.selector import SelectorLike, as_selector

logger = logging.getLogger(__name__)

EditTarget = TypeVar("EditTarget", bound="list[Node] | Element")

Transform = Callable[[Element], Node]
Visitor = Callable[[Element], Any]


# ============================================================================
# Matching helpers
# ============================================================================


def matches_shape(selector: SelectorLike, element: Element) -> bool:
    """Evaluate ``selector`` on ``element`` with its children cleared.

    Parameters
    ----------
    selector : SelectorLike
        Selector to evaluate
    element : Element
        Element to test; it is not modified

    Returns
    -------
    bool
        True when the childless copy of ``element`` matches

    """
    return selector.matches(element.shape())


def matches_full(selector: SelectorLike, element: Element) -> bool:
    """Evaluate ``selector`` on ``element`` as it is, children included."""
    return selector.matches(element)


# ============================================================================
# Matching-traversal engine
# ============================================================================


def walk_matches(nodes: list[Node], selector: SelectorLike, action: Visitor) -> int:
    """Call ``action`` on every element under ``nodes`` that matches ``selector``.

    Traversal is pre-order: an element is tested (true-value match) and, if it
    matches, passed to ``action`` before its children are traversed. Matching
    does not stop descent. Each element is visited at most once.

    Parameters
    ----------
    nodes : list of Node
        Sibling nodes to traverse
    selector : SelectorLike
        Selector evaluated with ``matches_full``
    action : callable
        Called with each matched element

    Returns
    -------
    int
        Number of elements passed to ``action``

    """
    visited = 0
    for node in nodes:
        if isinstance(node, Element):
            visited += walk_element_matches(node, selector, action)
    return visited


def walk_element_matches(element: Element, selector: SelectorLike, action: Visitor) -> int:
    """Apply ``walk_matches`` to ``element`` itself and then its descendants."""
    visited = 0
    if matches_full(selector, element):
        action(element)
        visited += 1
    # Children are read after the action so its mutations are seen
    return visited + walk_matches(element.children, selector, action)


# ============================================================================
# Per-level implementations
# ============================================================================


def _survives_trim(node: Node) -> bool:
    if isinstance(node, Comment):
        return False
    if isinstance(node, Text):
        return not node.is_blank()
    return True


def _trim_nodes(nodes: list[Node]) -> int:
    before = len(nodes)
    nodes[:] = [node for node in nodes if _survives_trim(node)]
    removed = before - len(nodes)
    for node in nodes:
        if isinstance(node, Element):
            removed += _trim_nodes(node.children)
    return removed


def _insert_nodes(nodes: list[Node], selector: SelectorLike, target: Node) -> int:
    inserted = 0
    for node in nodes:
        if isinstance(node, Element):
            inserted += _insert_element(node, selector, target)
    return inserted


def _insert_element(element: Element, selector: SelectorLike, target: Node) -> int:
    # Descendants first, so nested matches receive their copy before this one
    inserted = _insert_nodes(element.children, selector, target)
    if matches_shape(selector, element):
        element.children.append(clone_node(target))
        inserted += 1
    return inserted


def _remove_nodes(nodes: list[Node], selector: SelectorLike) -> int:
    before = len(nodes)
    nodes[:] = [node for node in nodes if not (isinstance(node, Element) and matches_shape(selector, node))]
    removed = before - len(nodes)
    for node in nodes:
        if isinstance(node, Element):
            removed += _remove_nodes(node.children, selector)
    return removed


def _apply_transform(transform: Transform, element: Element) -> Node:
    try:
        result = transform(element)
    except EditError:
        logger.debug("replace_with transform failed for <%s>", element.name)
        raise
    except Exception as e:
        logger.debug("replace_with transform failed for <%s>: %s", element.name, e)
        raise EditError(e) from e

    if not isinstance(result, Node):
        error = TypeError(f"replace_with transform returned {type(result).__name__}, expected a Node")
        logger.debug("%s", error)
        raise EditError(error) from error
    return result


def _replace_nodes(nodes: list[Node], selector: SelectorLike, transform: Transform, placed: set[int]) -> int:
    replaced = 0
    for index, node in enumerate(nodes):
        if not isinstance(node, Element):
            continue
        if matches_full(selector, node):
            result = _apply_transform(transform, node)
            # Each node has a single parent
            if id(result) in placed:
                result = clone_node(result)
            placed.add(id(result))
            # Assigned only once the transform succeeded
            nodes[index] = result
            replaced += 1
        else:
            replaced += _replace_nodes(node.children, selector, transform, placed)
    return replaced


def _children_of(target: list[Node] | Element) -> list[Node]:
    if isinstance(target, Element):
        return target.children
    if isinstance(target, list):
        return target
    raise TypeError(f"Expected a list of nodes or an Element, got {type(target).__name__}")


# ============================================================================
# Public operations
# ============================================================================


def trim(target: EditTarget) -> EditTarget:
    """Remove comments and whitespace-only text nodes at every depth.

    Every ``Comment`` is removed, and every ``Text`` whose content is empty
    once surrounding whitespace is stripped. The stored text of surviving
    ``Text`` nodes is never changed. ``Doctype`` and ``Element`` nodes are
    always kept. Applying ``trim`` twice gives the same tree as applying it
    once.

    Parameters
    ----------
    target : list of Node or Element
        Receiver, mutated in place

    Returns
    -------
    list of Node or Element
        ``target``, for chaining

    Examples
    --------
    >>> from htmledit import parse
    >>> parse("<!DOCTYPE html>\\n<html>\\n  <head></head>\\n</html>").trim().html()
    '<!DOCTYPE html><html><head></head></html>'

    """
    removed = _trim_nodes(_children_of(target))
    logger.debug("trim removed %d node(s)", removed)
    return target


def insert_to(target: EditTarget, selector: SelectorLike | str, node: Node) -> EditTarget:
    """Append a copy of ``node`` as the last child of every shape-matching element.

    Every element whose name and attributes match ``selector`` (children
    disregarded) receives its own deep copy of ``node``; when the receiver is
    an ``Element`` it is a candidate too. Descendants are processed before
    their ancestors, and an ancestor and descendant that both match each get
    a copy. ``node`` itself is never placed in the tree, and every copy is
    taken from ``node`` as it was when the call started, even when ``node``
    is part of the tree being edited.

    Parameters
    ----------
    target : list of Node or Element
        Receiver, mutated in place
    selector : SelectorLike or str
        Selector, evaluated with ``matches_shape``
    node : Node
        Node to copy into each match

    Returns
    -------
    list of Node or Element
        ``target``, for chaining

    """
    if not isinstance(node, Node):
        raise TypeError(f"insert_to expects a Node to insert, got {type(node).__name__}")
    compiled = as_selector(selector)
    # Copies come from a snapshot taken before the tree changes
    payload = clone_node(node)

    if isinstance(target, Element):
        inserted = _insert_element(target, compiled, payload)
    else:
        inserted = _insert_nodes(_children_of(target), compiled, payload)

    logger.debug("insert_to %r inserted %d cop%s", selector, inserted, "y" if inserted == 1 else "ies")
    return target


def remove_by(target: EditTarget, selector: SelectorLike | str) -> EditTarget:
    """Remove every shape-matching element together with its subtree.

    Each level is filtered first and only the surviving elements are
    descended into. ``Doctype``, ``Comment`` and ``Text`` nodes are never
    removed. When the receiver is an ``Element``, only its descendants are
    candidates.

    Parameters
    ----------
    target : list of Node or Element
        Receiver, mutated in place
    selector : SelectorLike or str
        Selector, evaluated with ``matches_shape``

    Returns
    -------
    list of Node or Element
        ``target``, for chaining

    """
    compiled = as_selector(selector)
    removed = _remove_nodes(_children_of(target), compiled)
    logger.debug("remove_by %r removed %d element(s)", selector, removed)
    return target


def replace_with(target: EditTarget, selector: SelectorLike | str, transform: Transform) -> EditTarget:
    """Replace every matching element with the node returned by ``transform``.

    Each element whose true value matches ``selector`` is replaced in place
    by ``transform(element)``, which receives the element before replacement.
    Non-matching elements are descended into; a replaced element's original
    children are not. When the receiver is an ``Element``, only its
    descendants are candidates.

    Parameters
    ----------
    target : list of Node or Element
        Receiver, mutated in place
    selector : SelectorLike or str
        Selector, evaluated with ``matches_full``
    transform : callable
        ``(Element) -> Node``; called at most once per matched element. When
        it returns the same node object for several matches, the first match
        receives that object and later ones receive deep copies of it.

    Returns
    -------
    list of Node or Element
        ``target``, for chaining

    Raises
    ------
    EditError
        On the first transform failure at any depth. An ``EditError`` raised
        by the transform propagates as is; any other exception, or a return
        value that is not a ``Node``, is wrapped. Processing stops, the
        failing element is left in place and earlier replacements are kept.

    """
    compiled = as_selector(selector)
    replaced = _replace_nodes(_children_of(target), compiled, transform, set())
    logger.debug("replace_with %r replaced %d element(s)", selector, replaced)
    return target


def execute_for(target: EditTarget, selector: SelectorLike | str, visitor: Visitor) -> EditTarget:
    """Call ``visitor`` on every element whose true value matches ``selector``.

    Traversal is pre-order and descends into every element whether or not it
    matched, so changes a visitor makes to an element's children are seen when
    those children are traversed. When the receiver is an ``Element`` it is
    visited too if it matches.

    The visitor may change the element's attributes and children, but must
    not detach the element from its parent or reorder its siblings; the
    result of doing so is undefined.

    Parameters
    ----------
    target : list of Node or Element
        Receiver, mutated in place by ``visitor``
    selector : SelectorLike or str
        Selector, evaluated with ``matches_full``
    visitor : callable
        ``(Element) -> None``; called once per matched element

    Returns
    -------
    list of Node or Element
        ``target``, for chaining

    """
    compiled = as_selector(selector)
    if isinstance(target, Element):
        visited = walk_element_matches(target, compiled, visitor)
    else:
        visited = walk_matches(_children_of(target), compiled, visitor)
    logger.debug("execute_for %r visited %d element(s)", selector, visited)
    return target
