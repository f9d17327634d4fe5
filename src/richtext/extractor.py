"""Markup tree -> plain text + entities.

The plain text is the tree's text content with zero-width spaces removed
and surrounding whitespace stripped. Entities are located by searching for
each node's text from a running cursor, which absorbs the drift caused by
trimming and by nodes whose text never reaches the output.
"""

import logging

from telegram.constants import MessageEntityType

from richtext.entities import Entity, FormattedText
from richtext.resolver import DOCUMENT_ID_ATTR, resolve_entity_type
from richtext.tree import TreeNode

LOGGER = logging.getLogger(__name__)

# Only nodes up to this depth below each top-level node produce entities
MAX_TAG_DEPTH = 3

ZERO_WIDTH_SPACE = "\u200b"


def visible_text(node: TreeNode) -> str:
    return node.text_content.replace(ZERO_WIDTH_SPACE, "")


def extract_entities(tree: TreeNode) -> FormattedText:
    full_text = visible_text(tree)
    text = full_text.strip()
    trim_shift = len(full_text) - len(full_text.lstrip())

    entities: list[Entity] = []
    text_index = -trim_shift

    def visit(node: TreeNode, depth: int) -> None:
        nonlocal text_index
        if node.is_comment:
            return

        entity_type = resolve_entity_type(node)
        node_text = visible_text(node)
        if entity_type and node_text:
            entity, text_index = _build_entity(node, entity_type, node_text, text, text_index)
            entities.append(entity)
        elif node_text and not node.children:
            # Stray leading line break
            if text_index == 0 and not node_text.strip():
                return
            text_index += len(node_text)

        if depth < MAX_TAG_DEPTH:
            for child in node.children:
                visit(child, depth + 1)
        elif node.children:
            # Skipped subtree still occupies its text
            text_index += len(node_text)

    for top_level in tree.children:
        visit(top_level, 1)

    LOGGER.debug(f"Extracted {len(entities)} entities from {len(text)} chars")
    return FormattedText(text=text, entities=entities)


def _build_entity(
    node: TreeNode,
    entity_type: MessageEntityType,
    node_text: str,
    text: str,
    text_index: int,
) -> tuple[Entity, int]:
    """Locate the node in the text and return its entity and the new cursor.

    Whitespace trimmed from either end of the text makes the search miss.
    The span then starts at the unclamped cursor, so a leading part that
    was trimmed away shortens the entity instead of shifting it.
    """
    index = text.find(node_text, min(max(text_index, 0), len(text)))
    if index == -1:
        index = text_index
    start = min(max(index, 0), len(text))
    length = len(text[start : max(index + len(node_text), 0)])
    return _with_payload(node, entity_type, start, length), index


def _with_payload(node: TreeNode, entity_type: MessageEntityType, index: int, length: int) -> Entity:
    if entity_type == MessageEntityType.TEXT_LINK:
        return Entity(entity_type, index, length, url=node.get("href"))
    if entity_type == MessageEntityType.TEXT_MENTION:
        return Entity(entity_type, index, length, user_id=node.get("data-user-id"))
    if entity_type == MessageEntityType.PRE:
        return Entity(entity_type, index, length, language=node.get("data-language"))
    if entity_type == MessageEntityType.CUSTOM_EMOJI:
        return Entity(entity_type, index, length, custom_emoji_id=node.get(DOCUMENT_ID_ATTR))
    return Entity(entity_type, index, length)
