"""Unit tests for element lookup."""

import pytest
from utils import HasChildrenSelector

from htmledit import Element, parse, query, query_all


@pytest.mark.unit
class TestQuery:
    """Test query and query_all."""

    def test_query_all_document_order(self):
        """Test matches come back in pre-order, nested ones included."""
        nodes = parse('<div id="a"><div id="b"></div></div><p><div id="c"></div></p>')

        assert [element.get_attribute("id") for element in query_all(nodes, "div")] == ["a", "b", "c"]

    def test_results_are_live_nodes(self):
        """Test returned elements are the nodes in the tree, not copies."""
        nodes = parse("<ul><li>a</li></ul>")

        nodes.query("li").set_attribute("class", "first")

        assert nodes.html() == '<ul><li class="first">a</li></ul>'

    def test_query_first_match(self):
        """Test query returns the first match in document order."""
        nodes = parse('<section><p id="1"></p></section><p id="2"></p>')

        assert query(nodes, "p").get_attribute("id") == "1"

    def test_query_no_match(self):
        """Test query returns None and query_all an empty list."""
        nodes = parse("<p></p>")

        assert query(nodes, "table") is None
        assert query_all(nodes, "table") == []

    def test_element_root_is_candidate(self):
        """Test an Element root may be returned itself."""
        root = Element("div", children=[Element("div")])

        assert query(root, "div") is root
        assert query_all(root, "div") == [root, root.children[0]]

    def test_query_sees_children(self):
        """Test lookup evaluates the element with its children."""
        nodes = parse("<p></p><p>x</p>")

        assert nodes.query(HasChildrenSelector("p")) is nodes[1]

    def test_query_does_not_modify(self):
        """Test lookup leaves the tree unchanged."""
        nodes = parse("<div><p>a</p></div>")
        before = nodes.html()

        nodes.query_all("p")

        assert nodes.html() == before
