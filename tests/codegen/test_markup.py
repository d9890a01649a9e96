"""Tests for JSX markup emission."""

import pytest

from yamlskript.codegen import normalize_attribute_name
from yamlskript.codegen.markup import format_attribute


@pytest.mark.parametrize(
    "name, expected",
    [("class", "className"), ("for", "htmlFor"), ("id", "id"), ("onClick", "onClick")],
)
def test_reserved_attribute_names(name, expected):
    assert normalize_attribute_name(name) == expected


def test_format_attribute_values():
    assert format_attribute("title", "Hello") == 'title="Hello"'
    assert format_attribute("value", "{{form.email}}") == "value={form.email}"
    assert format_attribute("count", 3) == "count={3}"
    assert format_attribute("disabled", True) == "disabled={true}"
    assert format_attribute("style", {"color": "red"}) == 'style={{"color":"red"}}'


class TestMarkupEmitter:
    """Markup trees become indented JSX."""

    def test_text_leaves(self, markup):
        assert markup.emit(["Hello"]) == "Hello\n"
        assert markup.emit(["{{user.name}}"]) == "{user.name}\n"

    def test_self_closing_element(self, markup):
        assert markup.emit([{"type": "br"}]) == "<br />\n"

    def test_attributes_are_renamed(self, markup):
        node = {"type": "label", "props": {"class": "field", "for": "email"}, "children": ["Email"]}
        assert markup.emit([node]) == '<label className="field" htmlFor="email">\n    Email\n</label>\n'

    def test_nested_indentation(self, markup):
        tree = [
            {
                "type": "ul",
                "children": [
                    {"type": "li", "children": ["{{first}}"]},
                    {"type": "li", "children": [{"type": "img", "props": {"src": "{{logo}}"}}]},
                ],
            }
        ]
        assert markup.emit(tree, 1) == (
            "    <ul>\n"
            "        <li>\n"
            "            {first}\n"
            "        </li>\n"
            "        <li>\n"
            "            <img src={logo} />\n"
            "        </li>\n"
            "    </ul>\n"
        )

    def test_numbers_render_as_text(self, markup):
        assert markup.emit([42]) == "42\n"

    def test_fragment(self, markup):
        assert markup.fragment([{"type": "h1", "children": ["Title"]}, "Body"]) == (
            "<>\n"
            "    <h1>\n"
            "        Title\n"
            "    </h1>\n"
            "    Body\n"
            "</>\n"
        )

    def test_invalid_node_is_reported(self, markup, diagnostics):
        assert markup.emit([{"props": {}}, "after"]) == "after\n"
        assert diagnostics.items[0].category == "markup"
