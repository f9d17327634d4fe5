"""End-to-end tests for markdown/markup -> formatted text."""

import pytest
from telegram.constants import MessageEntityType

from richtext.entities import Entity
from richtext.html_render import render_formatted_text_as_html
from richtext.parser import parse_html_as_formatted_text

SAMPLES = [
    "hello",
    "hello **world** and `code`",
    "**[site](example.com)**",
    "```py\nprint(1)\n```",
    "hi [:wave:](customEmoji:5) there",
    "||spoiler|| ~~gone~~ __it__",
    "a &amp; **b**",
    "<br>**a __b ~~c~~__** [x](x.io)\n\n`end`",
    "**a __b ~~c ||d <u>e</u>||~~__**",
]


def test_bold_link_scenario():
    formatted = parse_html_as_formatted_text("**[site](example.com)**", with_markdown_links=True)
    assert formatted.text == "site"
    assert formatted.entities == [
        Entity(MessageEntityType.BOLD, 0, 4),
        Entity(MessageEntityType.TEXT_LINK, 0, 4, url="https://example.com"),
    ]


def test_fenced_code_scenario():
    formatted = parse_html_as_formatted_text("```js\nconsole.log(1)\n```")
    assert formatted.text == "console.log(1)"
    assert formatted.entities == [Entity(MessageEntityType.PRE, 0, 14, language="js")]


def test_fenced_code_language_on_own_line():
    formatted = parse_html_as_formatted_text("```\njs\nconsole.log(1)\n```")
    assert formatted.text == "console.log(1)"
    assert formatted.entities == [Entity(MessageEntityType.PRE, 0, 14, language="js")]


def test_custom_emoji_scenario():
    formatted = parse_html_as_formatted_text("[:wave:](customEmoji:123)")
    assert formatted.text == ":wave:"
    assert formatted.entities == [
        Entity(MessageEntityType.CUSTOM_EMOJI, 0, 6, custom_emoji_id="123")
    ]


def test_custom_emoji_survives_link_pass():
    formatted = parse_html_as_formatted_text("[:wave:](customEmoji:123)", with_markdown_links=True)
    assert formatted.entities == [
        Entity(MessageEntityType.CUSTOM_EMOJI, 0, 6, custom_emoji_id="123")
    ]


def test_plain_text_scenario():
    formatted = parse_html_as_formatted_text("hello")
    assert formatted.text == "hello"
    assert formatted.entities == []
    assert formatted.to_dict() == {"text": "hello"}


def test_mailto_link_is_email():
    formatted = parse_html_as_formatted_text(
        '<a href="mailto:a@b.com">a@b.com</a>', skip_markdown=True
    )
    assert formatted.entities == [Entity(MessageEntityType.EMAIL, 0, 7)]


def test_mail_shorthand_is_email():
    formatted = parse_html_as_formatted_text("[a@b.com](a@b.com)", with_markdown_links=True)
    assert formatted.entities == [Entity(MessageEntityType.EMAIL, 0, 7)]


def test_links_are_left_alone_without_flag():
    formatted = parse_html_as_formatted_text("[site](example.com)")
    assert formatted.text == "[site](example.com)"
    assert formatted.entities == []


def test_skip_markdown_keeps_markers():
    formatted = parse_html_as_formatted_text("**x** <b>y</b>", skip_markdown=True)
    assert formatted.text == "**x** y"
    assert formatted.entities == [Entity(MessageEntityType.BOLD, 6, 1)]


def test_nesting_cap_through_markdown():
    formatted = parse_html_as_formatted_text("**a __b ~~c ||d <u>e</u>||~~__**")
    assert formatted.text == "a b c d e"
    assert [(e.type, e.offset, e.length) for e in formatted.entities] == [
        (MessageEntityType.BOLD, 0, 9),
        (MessageEntityType.ITALIC, 2, 7),
        (MessageEntityType.STRIKETHROUGH, 4, 5),
    ]


def test_to_dict_includes_payloads():
    formatted = parse_html_as_formatted_text("```js\nx\n```")
    assert formatted.to_dict() == {
        "text": "x",
        "entities": [{"type": "pre", "offset": 0, "length": 1, "language": "js"}],
    }


def test_negative_entity_span_is_rejected():
    with pytest.raises(ValueError):
        Entity(MessageEntityType.BOLD, -1, 2)


@pytest.mark.parametrize("sample", SAMPLES)
def test_offsets_stay_inside_text(sample):
    formatted = parse_html_as_formatted_text(sample, with_markdown_links=True)
    for entity in formatted.entities:
        assert 0 <= entity.offset
        assert entity.end <= len(formatted.text)


@pytest.mark.parametrize(
    "markup, covered",
    [
        ("hello **world** and `code`", ["world", "code"]),
        ("**a __b__**", ["a b", "b"]),
        ("```py\nprint(1)\n```", ["print(1)"]),
        ("** hello** world", ["hello"]),
        ("<b>\nhi</b> there", ["hi"]),
        ("say **bye **", ["bye"]),
        ("**a** \n__b__", ["a", "b"]),
        ("`x`\n", ["x"]),
    ],
)
def test_entities_cover_their_visible_text(markup, covered):
    formatted = parse_html_as_formatted_text(markup, with_markdown_links=True)
    text = formatted.text
    assert [text[entity.offset : entity.end] for entity in formatted.entities] == covered
    for entity in formatted.entities:
        assert 0 <= entity.offset
        assert entity.end <= len(text)


def test_bold_with_leading_space_scenario():
    formatted = parse_html_as_formatted_text("** hello** world")
    assert formatted.text == "hello world"
    assert formatted.entities == [Entity(MessageEntityType.BOLD, 0, 5)]


@pytest.mark.parametrize("sample", SAMPLES)
def test_round_trip_through_markup(sample):
    formatted = parse_html_as_formatted_text(sample, with_markdown_links=True)
    markup = render_formatted_text_as_html(formatted)
    again = parse_html_as_formatted_text(markup, skip_markdown=True)
    assert again.text == formatted.text
    assert again.entities == formatted.entities
