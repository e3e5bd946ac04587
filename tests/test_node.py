import pytest

from html_tree import (
    EscapedText,
    MissingTagError,
    Node,
    RawText,
    append_text,
    clear_children,
    create_child,
    get_attribute,
    set_attribute,
)


@pytest.mark.parametrize("tag", ["", None])
def test_node_requires_a_tag(tag):
    with pytest.raises(MissingTagError):
        Node(tag)


def test_missing_tag_is_a_value_error():
    with pytest.raises(ValueError):
        Node("")


def test_create_child_rejects_empty_tag(node):
    with pytest.raises(MissingTagError):
        create_child(node, "")
    assert node.children == []


def test_children_keep_insertion_order(node):
    first = create_child(node, "p")
    second = create_child(node, "span")
    third = node.create_child("em")
    assert node.children == [first, second, third]
    assert [child.tag for child in node.child_elements] == ["p", "span", "em"]


def test_child_of_orphan_has_no_document(node):
    child = create_child(node, "p")
    assert child.owner_document is None
    assert child.id is None


def test_explicit_id_outside_dynamic_document_is_kept(node):
    child = create_child(node, "p", id="intro")
    assert child.id == "intro"


def test_set_attribute_appends_new_keys(node):
    set_attribute(node, "a", "1")
    set_attribute(node, "b", "2")
    assert list(node.attributes.items()) == [("a", "1"), ("b", "2")]


def test_overwriting_attribute_keeps_position(node):
    set_attribute(node, "a", "1")
    set_attribute(node, "b", "2")
    set_attribute(node, "a", "3")
    assert list(node.attributes.items()) == [("a", "3"), ("b", "2")]


def test_get_attribute_absent_key(node):
    assert get_attribute(node, "missing") is None
    assert node.get_attribute("missing", "fallback") == "fallback"


def test_get_attribute_present_key(node):
    node.set_attribute("href", "http://example.com")
    assert get_attribute(node, "href") == "http://example.com"


def test_append_text_adds_siblings(node):
    append_text(node, "one")
    append_text(node, "two")
    assert [leaf.data for leaf in node.children] == ["one", "two"]


def test_append_text_escape_mode(node):
    escaped = append_text(node, "<b>")
    raw = append_text(node, "<i>", escape=False)
    assert isinstance(escaped, EscapedText)
    assert isinstance(raw, RawText)


def test_append_text_replace_clears_first(node):
    create_child(node, "p")
    append_text(node, "old")
    leaf = append_text(node, "new", replace=True)
    assert node.children == [leaf]


def test_append_text_converts_non_strings(node):
    leaf = append_text(node, 7)
    assert leaf.data == "7"


def test_clear_children(node):
    create_child(node, "p")
    append_text(node, "text")
    clear_children(node)
    assert node.children == []
    assert not node.has_child_nodes()


def test_text_content_collects_descendants(node):
    p = create_child(node, "p")
    append_text(p, "Hello, ")
    append_text(create_child(p, "b"), "world")
    assert node.text_content == "Hello, world"


def test_get_elements_by_tag_name(node):
    outer = create_child(node, "p")
    inner = create_child(outer, "p")
    create_child(node, "span")
    assert node.get_elements_by_tag_name("p") == [outer, inner]
