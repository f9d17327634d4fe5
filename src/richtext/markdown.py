"""Inline markdown -> AST -> markup conversion.

Supports:
- ```lang\ncode``` or ```\nlang\ncode``` -> <pre data-language="lang">code</pre>
- `code` -> <code>code</code>
- [alt](customEmoji:id) -> <img alt="alt" data-document-id="id">
- **bold**, __italic__, ~~strike~~, ||spoiler|| (nestable)
- <br>, <div>, <p> -> line breaks

The input is markup already (as produced by a rich text input), so text
runs are passed through verbatim and other tags are left untouched.
"""

import re

from richtext.nodes import (
    Bold,
    Code,
    EmojiRef,
    Italic,
    Link,
    MarkupNode,
    Pre,
    Root,
    Spoiler,
    Strikethrough,
    Text,
)

FENCE = "```"
CUSTOM_EMOJI_PREFIX = "(customEmoji:"
MARKERS = {
    "**": Bold,
    "__": Italic,
    "~~": Strikethrough,
    "||": Spoiler,
}
# Marker content nested deeper than this stays plain text
MAX_MARKER_DEPTH = 32

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_LANGUAGE_RE = re.compile(r"[\w#+.-]+")
_BREAK_TAG_RE = re.compile(r"<br\b[^>]*>?", re.IGNORECASE)
_BLOCK_OPEN_RE = re.compile(r"<(?:div|p)\b[^>]*>", re.IGNORECASE)
_BLOCK_CLOSE_RE = re.compile(r"</(?:div|p)\s*>", re.IGNORECASE)
_OTHER_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")

_STYLE_TAGS: dict[type, tuple[str, str]] = {
    Bold: ("<b>", "</b>"),
    Italic: ("<i>", "</i>"),
    Strikethrough: ("<s>", "</s>"),
    Spoiler: ('<span data-entity-type="spoiler">', "</span>"),
}


def build_ast(text: str, depth: int = 0) -> Root:
    """Tokenize inline markdown into a Root node.

    Never raises: unterminated fences and markers take the rest of the input.
    """
    root = Root()
    pending: list[str] = []

    def flush() -> None:
        if pending:
            root.children.append(Text("".join(pending)))
            pending.clear()

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if text.startswith(FENCE, i):
            flush()
            node, i = _read_fence(text, i + len(FENCE))
            root.children.append(node)
            continue

        if char == "`" and not text.startswith("``", i):
            flush()
            end = text.find("`", i + 1)
            if end == -1:
                end = length
            root.children.append(Code(text[i + 1 : end]))
            i = end + 1
            continue

        if char == "[":
            emoji = _read_custom_emoji(text, i)
            if emoji:
                flush()
                node, i = emoji
                root.children.append(node)
                continue

        marker = text[i : i + 2]
        if marker in MARKERS:
            flush()
            content, i = _read_marked(text, i + len(marker), marker)
            if depth >= MAX_MARKER_DEPTH:
                children: list[MarkupNode] = [Text(content)] if content else []
            else:
                children = build_ast(content, depth + 1).children
            root.children.append(MARKERS[marker](children))
            continue

        if char == "<":
            match = _BREAK_TAG_RE.match(text, i) or _BLOCK_OPEN_RE.match(text, i)
            if match:
                flush()
                root.children.append(Text("\n"))
                i = match.end()
                continue
            match = _BLOCK_CLOSE_RE.match(text, i)
            if match:
                flush()
                i = match.end()
                continue
            match = _OTHER_TAG_RE.match(text, i)
            if match:
                pending.append(match.group(0))
                i = match.end()
                continue

        pending.append(char)
        i += 1

    flush()
    return root


def _read_fence(text: str, start: int) -> tuple[Pre, int]:
    i = start
    language = None
    closing = text.find(FENCE, i)
    line_break = _LINE_BREAK_RE.search(text, i)
    if line_break and (closing == -1 or line_break.start() < closing):
        token = text[i : line_break.start()].strip()
        if token and _LANGUAGE_RE.fullmatch(token):
            language = token
            i = line_break.start()
        elif line_break.start() == i:
            language, i = _read_language_line(text, line_break.end(), closing, i)

    closing = text.find(FENCE, i)
    if closing == -1:
        content, end = text[i:], len(text)
    else:
        content, end = text[i:closing], closing + len(FENCE)
    return Pre(content.strip("\r\n"), language), end


def _read_language_line(text: str, start: int, closing: int, fallback: int) -> tuple[str | None, int]:
    # A bare token on the line after the fence, with code below it
    line_break = _LINE_BREAK_RE.search(text, start)
    if not line_break or (closing != -1 and line_break.start() > closing):
        return None, fallback
    token = text[start : line_break.start()]
    end = closing if closing != -1 else len(text)
    if not _LANGUAGE_RE.fullmatch(token) or not text[line_break.end() : end].strip("\r\n"):
        return None, fallback
    return token, line_break.start()


def _read_custom_emoji(text: str, start: int) -> tuple[EmojiRef, int] | None:
    close = text.find("]", start + 1)
    if close == -1 or not text.startswith(CUSTOM_EMOJI_PREFIX, close + 1):
        return None
    id_start = close + 1 + len(CUSTOM_EMOJI_PREFIX)
    id_end = text.find(")", id_start)
    if id_end == -1:
        id_end = len(text)
    return EmojiRef(text[start + 1 : close], text[id_start:id_end]), id_end + 1


def _read_marked(text: str, start: int, marker: str) -> tuple[str, int]:
    """Collect content up to the balancing closing marker."""
    level = 1
    i = start
    while i < len(text):
        if text.startswith(marker, i):
            if _opens_nested(text, i, start, len(marker)):
                level += 1
            else:
                level -= 1
                if level == 0:
                    return text[start:i], i + len(marker)
            i += len(marker)
            continue
        i += 1
    return text[start:], len(text)


def _opens_nested(text: str, index: int, start: int, width: int) -> bool:
    # An opener sits after whitespace and right before a non-space character
    after = index + width
    return (
        index > start
        and text[index - 1].isspace()
        and after < len(text)
        and not text[after].isspace()
    )


def _quote(value: str) -> str:
    return value.replace('"', "&quot;")


def render_ast(node: MarkupNode) -> str:
    if isinstance(node, Root):
        return "".join(render_ast(child) for child in node.children)
    if isinstance(node, Text):
        return node.content
    if isinstance(node, Pre):
        if node.language:
            return f'<pre data-language="{_quote(node.language)}">{node.content}</pre>'
        return f"<pre>{node.content}</pre>"
    if isinstance(node, Code):
        return f"<code>{node.content}</code>"
    if isinstance(node, EmojiRef):
        return f'<img alt="{_quote(node.alt_text)}" data-document-id="{_quote(node.document_id)}">'
    if isinstance(node, Link):
        return f'<a href="{_quote(node.target)}">{node.label}</a>'

    tags = _STYLE_TAGS.get(type(node))
    if tags:
        opening, closing = tags
        return opening + "".join(render_ast(child) for child in node.children) + closing
    return ""


def parse_markdown(text: str) -> str:
    """Convert inline markdown to markup."""
    return render_ast(build_ast(text))
