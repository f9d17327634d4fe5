import logging

from telegram.constants import MessageEntityType

from richtext.tree import TreeNode

LOGGER = logging.getLogger(__name__)

ENTITY_TYPE_ATTR = "data-entity-type"
DOCUMENT_ID_ATTR = "data-document-id"

ENTITY_TYPE_BY_TAG: dict[str, MessageEntityType] = {
    "b": MessageEntityType.BOLD,
    "strong": MessageEntityType.BOLD,
    "i": MessageEntityType.ITALIC,
    "em": MessageEntityType.ITALIC,
    "ins": MessageEntityType.UNDERLINE,
    "u": MessageEntityType.UNDERLINE,
    "s": MessageEntityType.STRIKETHROUGH,
    "strike": MessageEntityType.STRIKETHROUGH,
    "del": MessageEntityType.STRIKETHROUGH,
    "code": MessageEntityType.CODE,
    "pre": MessageEntityType.PRE,
    "blockquote": MessageEntityType.BLOCKQUOTE,
}


def parse_entity_type(value: str | None) -> MessageEntityType | None:
    if not value:
        return None
    try:
        return MessageEntityType(value)
    except ValueError:
        LOGGER.debug(f"Ignoring unknown entity type: {value!r}")
        return None


def resolve_entity_type(node: TreeNode) -> MessageEntityType | None:
    """Map a markup tree node to the entity type it represents, if any."""
    if not node.is_element:
        return None

    # Spoiler spans, mention links and explicit url links carry their type
    explicit = parse_entity_type(node.get(ENTITY_TYPE_ATTR))
    if explicit:
        return explicit

    if node.name in ENTITY_TYPE_BY_TAG:
        return ENTITY_TYPE_BY_TAG[node.name]

    if node.name == "a":
        return _resolve_link_type(node)

    if node.name == "img" and node.get(DOCUMENT_ID_ATTR):
        return MessageEntityType.CUSTOM_EMOJI

    return None


def _resolve_link_type(node: TreeNode) -> MessageEntityType:
    href = node.get("href") or ""
    if href.startswith("mailto:"):
        return MessageEntityType.EMAIL
    if href.startswith("tel:"):
        return MessageEntityType.PHONE_NUMBER
    if href != node.text_content:
        return MessageEntityType.TEXT_LINK
    return MessageEntityType.URL
