import pytest

from html_tree import (
    Node,
    append_text,
    create_child,
    create_document,
    render,
    set_attribute,
)


def test_childless_element_self_closes():
    assert render(Node("br")) == "<br/>"


def test_void_element_with_children_gets_closing_tag():
    img = Node("img")
    append_text(img, "alt")
    assert render(img) == "<img>alt</img>"


def test_attributes_in_stored_order_and_escaped():
    link = Node("a")
    set_attribute(link, "href", 'x"y')
    set_attribute(link, "title", "a<b & 'c'")
    assert render(link) == '<a href="x&quot;y" title="a&lt;b &amp; &#39;c&#39;"/>'


def test_non_string_attribute_values():
    cell = Node("td")
    set_attribute(cell, "colspan", 2)
    set_attribute(cell, "hidden", True)
    assert render(cell) == '<td colspan="2" hidden="True"/>'


def test_text_escaping_is_decided_at_insertion():
    p = Node("p")
    append_text(p, "<b>\"q\"")
    append_text(p, "<i>", escape=False)
    assert render(p) == '<p>&lt;b&gt;"q"<i></p>'


def test_escaped_text_is_escaped_at_render_time():
    p = Node("p")
    leaf = append_text(p, "safe")
    leaf.data = "a & b"
    assert render(p) == "<p>a &amp; b</p>"


def test_nested_elements():
    div = Node("div")
    p = create_child(div, "p")
    append_text(p, "hi")
    create_child(div, "hr")
    assert render(div) == "<div><p>hi</p><hr/></div>"


def test_pretty_separates_two_or_more_children():
    div = Node("div")
    create_child(div, "p")
    create_child(div, "p")
    assert render(div, pretty=True) == "<div><p/>\n<p/></div>"


def test_pretty_leaves_single_child_alone():
    div = Node("div")
    append_text(create_child(div, "p"), "x")
    assert render(div, pretty=True) == "<div><p>x</p></div>"


def test_pretty_applies_at_every_level():
    ul = Node("ul")
    first = create_child(ul, "li")
    append_text(first, "a")
    append_text(first, "b")
    create_child(ul, "li")
    assert render(ul, pretty=True) == "<ul><li>a\nb</li>\n<li/></ul>"


def test_empty_document():
    assert render(create_document()) == "<!DOCTYPE html><html><head/><body/></html>"


def test_pretty_document():
    doc = create_document(title="foobar")
    assert render(doc, pretty=True) == \
        "<!DOCTYPE html>\n<html><head><title>foobar</title></head>\n<body/></html>"


def test_title_is_escaped():
    doc = create_document(title="Tom & Jerry")
    assert "<title>Tom &amp; Jerry</title>" in render(doc)


def test_node_id_is_rendered_after_attributes():
    p = Node("p", id="intro")
    set_attribute(p, "class", "lead")
    assert render(p) == '<p class="lead" id="intro"/>'


def test_id_attribute_wins_over_node_id():
    p = Node("p", id="generated")
    set_attribute(p, "id", "explicit")
    assert render(p) == '<p id="explicit"/>'


def test_render_is_idempotent():
    doc = create_document(title="t", dynamic=True)
    append_text(create_child(doc.body, "p"), "<hello>")
    assert render(doc) == render(doc)
    assert render(doc, pretty=True) == render(doc, pretty=True)


def test_outer_html(node):
    append_text(node, "x")
    assert node.outer_html == "<div>x</div>"


def test_pretty_default_comes_from_config(default_config):
    div = Node("div")
    create_child(div, "a")
    create_child(div, "b")
    assert render(div) == "<div><a/><b/></div>"
    default_config.set("render.pretty", True)
    assert render(div) == "<div><a/>\n<b/></div>"
    assert render(div, pretty=False) == "<div><a/><b/></div>"


def test_text_leaf_renders_on_its_own():
    p = Node("p")
    leaf = append_text(p, "1 < 2")
    assert render(leaf) == "1 &lt; 2"


def test_unsupported_objects_fail():
    div = Node("div")
    div.children.append(object())
    with pytest.raises(TypeError):
        render(div)
