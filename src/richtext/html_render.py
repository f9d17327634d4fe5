"""FormattedText -> markup that the entity extractor reads back.

Each entity type is rendered as the tag the resolver maps to it, so
parse_html_as_formatted_text(render_formatted_text_as_html(x),
skip_markdown=True) gives back the same kinds and payloads.
"""

from html import escape

from telegram.constants import MessageEntityType

from richtext.entities import Entity, FormattedText
from richtext.resolver import DOCUMENT_ID_ATTR, ENTITY_TYPE_ATTR

SIMPLE_TAGS: dict[MessageEntityType, str] = {
    MessageEntityType.BOLD: "b",
    MessageEntityType.ITALIC: "i",
    MessageEntityType.UNDERLINE: "u",
    MessageEntityType.STRIKETHROUGH: "s",
    MessageEntityType.CODE: "code",
    MessageEntityType.BLOCKQUOTE: "blockquote",
}


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _opening_tag(entity: Entity, text: str) -> str:
    if entity.type in SIMPLE_TAGS:
        return f"<{SIMPLE_TAGS[entity.type]}>"

    covered = text[entity.offset : entity.end]
    if entity.type == MessageEntityType.PRE:
        if entity.language:
            return f'<pre data-language="{_attr(entity.language)}">'
        return "<pre>"
    if entity.type == MessageEntityType.TEXT_LINK:
        return f'<a href="{_attr(entity.url or "")}">'
    if entity.type == MessageEntityType.URL:
        return f'<a href="{_attr(covered)}">'
    if entity.type == MessageEntityType.EMAIL:
        return f'<a href="mailto:{_attr(covered)}">'
    if entity.type == MessageEntityType.PHONE_NUMBER:
        return f'<a href="tel:{_attr(covered)}">'
    if entity.type == MessageEntityType.TEXT_MENTION:
        return (
            f'<a {ENTITY_TYPE_ATTR}="{MessageEntityType.TEXT_MENTION.value}" '
            f'data-user-id="{_attr(entity.user_id or "")}">'
        )
    return f'<span {ENTITY_TYPE_ATTR}="{_attr(entity.type.value)}">'


def _closing_tag(entity: Entity) -> str:
    if entity.type in SIMPLE_TAGS:
        return f"</{SIMPLE_TAGS[entity.type]}>"
    if entity.type == MessageEntityType.PRE:
        return "</pre>"
    if entity.type in (
        MessageEntityType.TEXT_LINK,
        MessageEntityType.URL,
        MessageEntityType.EMAIL,
        MessageEntityType.PHONE_NUMBER,
        MessageEntityType.TEXT_MENTION,
    ):
        return "</a>"
    return "</span>"


def _custom_emoji_tag(entity: Entity, text: str) -> str:
    alt = text[entity.offset : entity.end]
    return f'<img alt="{_attr(alt)}" {DOCUMENT_ID_ATTR}="{_attr(entity.custom_emoji_id or "")}">'


def render_formatted_text_as_html(formatted: FormattedText) -> str:
    text = formatted.text
    # Outer entities first; ties keep their input order
    ordered = sorted(
        enumerate(formatted.entities),
        key=lambda item: (item[1].offset, -item[1].length, item[0]),
    )
    starts: dict[int, list[Entity]] = {}
    for _, entity in ordered:
        starts.setdefault(entity.offset, []).append(entity)

    parts: list[str] = []
    stack: list[Entity] = []
    skip_until = 0

    def close_until(position: int) -> None:
        reopen: list[Entity] = []
        while any(entity.end <= position for entity in stack):
            top = stack.pop()
            parts.append(_closing_tag(top))
            if top.end > position:
                reopen.append(top)
        for entity in reversed(reopen):
            parts.append(_opening_tag(entity, text))
            stack.append(entity)

    for position in range(len(text) + 1):
        close_until(position)
        for entity in starts.get(position, []):
            if entity.type == MessageEntityType.CUSTOM_EMOJI:
                parts.append(_custom_emoji_tag(entity, text))
                skip_until = max(skip_until, entity.end)
            elif entity.length == 0:
                parts.append(_opening_tag(entity, text) + _closing_tag(entity))
            else:
                parts.append(_opening_tag(entity, text))
                stack.append(entity)
        if position < len(text) and position >= skip_until:
            parts.append(escape(text[position], quote=False))

    return "".join(parts)
