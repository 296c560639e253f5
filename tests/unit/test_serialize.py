"""Unit tests for the HTML serializer."""

import pytest

from htmledit import (
    Comment,
    Doctype,
    Element,
    HtmlSerializer,
    NodeVisitor,
    RenderOptions,
    Text,
    new_element,
    parse,
    to_html,
)


@pytest.mark.unit
class TestHtmlSerializer:
    """Test rendering of each node kind."""

    def test_doctype(self):
        """Test doctype rendering."""
        assert to_html(Doctype("html")) == "<!DOCTYPE html>"

    def test_comment(self):
        """Test comment text is emitted unchanged."""
        assert to_html(Comment(" a < b ")) == "<!-- a < b -->"

    def test_text_escaping(self):
        """Test &, < and > are escaped but quotes are not."""
        assert to_html(Text('a & b < c > "d"')) == 'a &amp; b &lt; c &gt; "d"'

    def test_text_escaping_disabled(self):
        """Test escape_text=False emits text verbatim."""
        assert to_html(Text("<b>"), RenderOptions(escape_text=False)) == "<b>"

    def test_attribute_escaping(self):
        """Test attribute values are always quoted and escaped."""
        element = Element("a", [("title", 'say "hi" & <go>')])

        assert to_html(element) == '<a title="say &quot;hi&quot; &amp; &lt;go&gt;"></a>'

    def test_attribute_order_and_duplicates(self):
        """Test attributes are emitted in stored order, duplicates included."""
        element = Element("div", [("b", "1"), ("a", "2"), ("b", "3")])

        assert to_html(element) == '<div b="1" a="2" b="3"></div>'

    def test_void_elements(self):
        """Test void elements have no end tag."""
        assert to_html(new_element("br")) == "<br>"
        assert to_html(new_element("IMG", {"src": "x.png"})) == '<IMG src="x.png">'

    def test_void_elements_xhtml(self):
        """Test the xhtml void style."""
        assert to_html(new_element("br"), RenderOptions(void_style="xhtml")) == "<br />"

    def test_void_element_with_children_gets_end_tag(self):
        """Test a void element that was given children still renders them."""
        assert to_html(new_element("br", children=[Text("x")])) == "<br>x</br>"

    def test_empty_non_void_element(self):
        """Test empty regular elements keep their end tag."""
        assert to_html(new_element("script", {"src": "app.js"})) == '<script src="app.js"></script>'

    def test_raw_text_elements(self):
        """Test script and style content is not escaped."""
        element = new_element("script", children=[Text("if (a < b && c) {}")])

        assert to_html(element) == "<script>if (a < b && c) {}</script>"

    def test_escaping_resumes_after_raw_text(self):
        """Test escaping applies again after a script element closes."""
        nodes = [new_element("style", children=[Text("a>b")]), Text("a>b")]

        assert to_html(nodes) == "<style>a>b</style>a&gt;b"

    def test_sequence_rendering(self):
        """Test sibling nodes are concatenated with nothing added."""
        nodes = [Doctype("html"), Text("\n"), new_element("p", children=[Text("x")])]

        assert to_html(nodes) == "<!DOCTYPE html>\n<p>x</p>"

    def test_serializer_is_reusable(self):
        """Test render_to_string resets its buffer between calls."""
        serializer = HtmlSerializer()

        assert serializer.render_to_string(Text("a")) == "a"
        assert serializer.render_to_string(Text("b")) == "b"

    def test_node_and_list_html_methods(self):
        """Test the html() convenience methods."""
        nodes = parse("<p>x</p><br>")

        assert nodes.html() == "<p>x</p><br>"
        assert nodes[0].html() == "<p>x</p>"
        assert nodes.html(RenderOptions(void_style="xhtml")) == "<p>x</p><br />"

    def test_parse_round_trip(self):
        """Test markup parsed with html.parser is reproduced exactly."""
        markup = '<!DOCTYPE html>\n<div id="a">\n<p> One &amp; two </p>\n<!-- note -->\n<img src="x.png"> </div>'

        assert parse(markup).html() == markup


@pytest.mark.unit
class TestRenderOptions:
    """Test serializer option validation."""

    def test_defaults(self):
        """Test default option values."""
        options = RenderOptions()

        assert options.escape_text is True
        assert options.void_style == "html"

    def test_invalid_void_style(self):
        """Test an unknown void style is rejected."""
        with pytest.raises(ValueError):
            RenderOptions(void_style="sgml")  # type: ignore[arg-type]

    def test_create_updated(self):
        """Test deriving a modified copy leaves the original alone."""
        options = RenderOptions()
        updated = options.create_updated(void_style="xhtml")

        assert updated.void_style == "xhtml"
        assert options.void_style == "html"

    def test_frozen(self):
        """Test options cannot be modified in place."""
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            RenderOptions().escape_text = False  # type: ignore[misc]


@pytest.mark.unit
class TestNodeVisitor:
    """Test custom visitors."""

    def test_counting_visitor(self):
        """Test a visitor dispatched through accept()."""

        class Counter(NodeVisitor):
            def __init__(self):
                self.counts = {"doctype": 0, "comment": 0, "text": 0, "element": 0}

            def visit_doctype(self, node):
                self.counts["doctype"] += 1

            def visit_comment(self, node):
                self.counts["comment"] += 1

            def visit_text(self, node):
                self.counts["text"] += 1

            def visit_element(self, node):
                self.counts["element"] += 1
                for child in node.children:
                    child.accept(self)

        counter = Counter()
        for node in parse("<!DOCTYPE html><div><!--c--><p>a</p>b</div>"):
            node.accept(counter)

        assert counter.counts == {"doctype": 1, "comment": 1, "text": 2, "element": 2}

    def test_incomplete_visitor_cannot_be_instantiated(self):
        """Test every visit method must be implemented."""

        class Partial(NodeVisitor):
            def visit_text(self, node):
                pass

        with pytest.raises(TypeError):
            Partial()  # type: ignore[abstract]
