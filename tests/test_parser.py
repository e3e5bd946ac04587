import pytest

from html_tree import (
    EscapedText,
    ParseError,
    RawText,
    Transaction,
    create_document,
    parse_document,
    parse_fragment,
    render,
)
from html_tree.parser import html_parser
from html_tree.parser.html_parser import HTMLParser


def test_parse_document_rebuilds_tree():
    doc = parse_document(
        '<html lang="en"><head><title>Hi &amp; bye</title></head>'
        '<body><p class="a b">x<br>y</p></body></html>'
    )
    assert doc.title == "Hi & bye"
    assert doc.get_attribute("lang") == "en"
    assert render(doc) == (
        '<!DOCTYPE html><html lang="en"><head><title>Hi &amp; bye</title></head>'
        '<body><p class="a b">x<br/>y</p></body></html>'
    )


def test_parsed_text_is_escaped_text():
    doc = parse_document("<body><p>1 &lt; 2</p></body>")
    leaf = doc.body.children[0].children[0]
    assert isinstance(leaf, EscapedText)
    assert leaf.data == "1 < 2"


def test_comments_are_dropped():
    doc = parse_document("<body><!-- note --><p>t</p></body>")
    assert [child.tag for child in doc.body.children] == ["p"]


def test_script_text_stays_raw():
    doc = parse_document("<body><script>if (a < b) { go(); }</script></body>")
    script = doc.body.children[0]
    assert isinstance(script.children[0], RawText)
    assert "<script>if (a < b) { go(); }</script>" in render(doc)


def test_whitespace_only_text_is_dropped():
    doc = parse_document("<body>\n  <p>a</p>\n</body>")
    assert [child.tag for child in doc.body.children] == ["p"]


def test_whitespace_can_be_kept():
    doc = HTMLParser(keep_whitespace=True).parse_document("<body> <p>a</p></body>")
    assert doc.body.children[0].data == " "


def test_keep_whitespace_from_config(default_config):
    default_config.set("parser.keep_whitespace", True)
    assert HTMLParser().keep_whitespace is True


def test_preformatted_whitespace_is_kept():
    doc = parse_document("<body><pre>   </pre></body>")
    assert render(doc.body) == "<body><pre>   </pre></body>"


def test_markup_ids_are_registered_in_dynamic_documents():
    doc = parse_document('<body><div id="main"><p id="main">x</p></div></body>', dynamic=True)
    main = doc.get_element_by_id("main")
    assert main.tag == "div"
    inner = main.children[0]
    assert inner.id != "main"
    assert inner.get_attribute("id") == "main"
    assert render(main) == '<div id="main"><p id="main">x</p></div>'


def test_parse_fragment_appends_under_parent():
    doc = create_document()
    imported = parse_fragment(doc.body, "<p>a</p><p>b</p>")
    assert [node.tag for node in imported] == ["p", "p"]
    assert render(doc.body) == "<body><p>a</p><p>b</p></body>"


def test_parse_fragment_can_be_rolled_back():
    doc = create_document()
    before = render(doc)
    with Transaction() as tx:
        parse_fragment(doc.body, '<ul><li class="x">one</li><li>two</li></ul>')
        assert render(doc) != before
        tx.rollback()
    assert render(doc) == before


def test_parse_failure_raises_parse_error(monkeypatch):
    def broken(*args, **kwargs):
        raise ValueError("bad markup")

    monkeypatch.setattr(html_parser, "BeautifulSoup", broken)
    with pytest.raises(ParseError):
        parse_document("<p>x</p>")
