"""Test utilities for the htmledit test suite.

Helpers for walking trees and Hypothesis strategies that generate random
node trees.
"""

from typing import Iterator

from hypothesis import strategies as st

from htmledit import Comment, Doctype, Element, Node, NodeList, Text

SAMPLE_HTML = """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>Document</title>
    </head>
    <body>
        <p>Hello</p>
    </body>
    </html>"""

TAG_NAMES = ["div", "p", "span", "section"]
ATTR_KEYS = ["class", "id", "data-x"]
ATTR_VALUES = ["a", "b", "a b", ""]
TEXT_VALUES = ["", " ", "\n    ", "\t", "x", " y ", "Hello"]

# Selectors that never match the <ins data-marker> nodes used as insert payloads
SELECTOR_TEXTS = ["div", "p", ".a", "#b", "[data-x]", "span, section", "div.a"]


class RecordingSelector:
    """Selector that matches by tag name and records every element it is shown."""

    def __init__(self, name: str):
        self.name = name
        self.seen: list[Element] = []

    def matches(self, element: Element) -> bool:
        self.seen.append(element)
        return element.name == self.name


class HasChildrenSelector:
    """Selector that matches elements named ``name`` that have at least one child."""

    def __init__(self, name: str):
        self.name = name

    def matches(self, element: Element) -> bool:
        return element.name == self.name and bool(element.children)


def iter_nodes(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node under ``nodes`` in pre-order."""
    for node in nodes:
        yield node
        if isinstance(node, Element):
            yield from iter_nodes(node.children)


def iter_elements(nodes: list[Node]) -> Iterator[Element]:
    """Yield every element under ``nodes`` in pre-order."""
    for node in iter_nodes(nodes):
        if isinstance(node, Element):
            yield node


_attrs = st.lists(st.tuples(st.sampled_from(ATTR_KEYS), st.sampled_from(ATTR_VALUES)), max_size=3)

_leaves = st.one_of(
    st.builds(Text, st.sampled_from(TEXT_VALUES)),
    st.builds(Comment, st.text(max_size=5)),
    st.builds(Doctype, st.just("html")),
    st.builds(Element, st.sampled_from(TAG_NAMES), _attrs, st.builds(list)),
)


def _extend(children: st.SearchStrategy[Node]) -> st.SearchStrategy[Node]:
    return st.builds(Element, st.sampled_from(TAG_NAMES), _attrs, st.lists(children, max_size=4))


node_trees = st.recursive(_leaves, _extend, max_leaves=25)
documents = st.lists(node_trees, max_size=5).map(NodeList)
selector_texts = st.sampled_from(SELECTOR_TEXTS)
