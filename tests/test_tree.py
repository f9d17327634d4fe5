"""Tests for markup tree parsing and image placeholder normalization."""

from richtext.images import normalize_images
from richtext.tree import COMMENT, ELEMENT, FRAGMENT, TEXT, element, parse_markup, text_node


def test_parse_markup_builds_fragment():
    tree = parse_markup('a<b class="x y">bold</b>')
    assert tree.kind == ELEMENT
    assert tree.name == FRAGMENT
    assert [child.kind for child in tree.children] == [TEXT, ELEMENT]
    bold = tree.children[1]
    assert bold.name == "b"
    assert bold.get("class") == "x y"
    assert bold.text_content == "bold"


def test_text_content_decodes_entities():
    tree = parse_markup("a &amp; b &lt;c&gt;")
    assert tree.text_content == "a & b <c>"


def test_comments_are_kept_but_carry_no_text():
    tree = parse_markup("a<!-- note -->b")
    assert [child.kind for child in tree.children] == [TEXT, COMMENT, TEXT]
    assert tree.text_content == "ab"


def test_br_counts_as_line_break():
    assert parse_markup("a<br>b").text_content == "a\nb"


def test_attributes_are_read():
    tree = parse_markup('<pre data-language="js">x</pre>')
    assert tree.children[0].get("data-language") == "js"
    assert tree.children[0].get("missing") is None


def test_custom_emoji_keeps_reference_with_alt_text():
    tree = normalize_images(parse_markup('<img alt=":wave:" data-document-id="123">'))
    image = tree.children[0]
    assert image.name == "img"
    assert image.get("data-document-id") == "123"
    assert image.text_content == ":wave:"


def test_plain_image_is_replaced_by_alt_text():
    tree = normalize_images(parse_markup('a<img alt="😀" src="x.png">b'))
    assert [child.kind for child in tree.children] == [TEXT, TEXT, TEXT]
    assert tree.text_content == "a😀b"


def test_image_without_alt_becomes_empty_text():
    tree = normalize_images(parse_markup('<img src="x.png">'))
    assert tree.children == (text_node(""),)


def test_nested_images_are_normalized():
    tree = normalize_images(parse_markup('<b><img alt="x" data-document-id="1"></b>'))
    assert tree.text_content == "x"


def test_normalize_images_is_idempotent():
    tree = parse_markup('<i><img alt="a" data-document-id="1"><img alt="b"></i>')
    once = normalize_images(tree)
    assert normalize_images(once) == once


def test_normalize_leaves_other_nodes_alone():
    tree = element("#fragment", children=(element("b", children=(text_node("x"),)),))
    assert normalize_images(tree) == tree
