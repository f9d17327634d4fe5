import logging
from collections.abc import Sequence

from telegram import MessageEntity, User
from telegram.constants import MessageEntityType

from richtext.entities import Entity, FormattedText
from richtext.parser import parse_html_as_formatted_text
from utils.text_utils import utf16_offset_to_index

LOGGER = logging.getLogger(__name__)


class FormattingService:
    def __init__(self, with_markdown_links: bool = True, skip_markdown: bool = False) -> None:
        self._with_markdown_links = with_markdown_links
        self._skip_markdown = skip_markdown

    def format(self, html: str) -> FormattedText:
        formatted = parse_html_as_formatted_text(
            html,
            with_markdown_links=self._with_markdown_links,
            skip_markdown=self._skip_markdown,
        )
        LOGGER.debug(
            f"Formatted {len(html)} chars into {len(formatted.text)} chars "
            f"with {len(formatted.entities)} entities"
        )
        return formatted

    def to_message_entities(self, formatted: FormattedText) -> Sequence[MessageEntity]:
        """Build Telegram entities with offsets in UTF-16 code units."""
        result: list[MessageEntity] = []
        for entity in formatted.entities:
            message_entity = self._to_message_entity(entity)
            if message_entity is not None:
                result.append(message_entity)
        return MessageEntity.adjust_message_entities_to_utf_16(formatted.text, result)

    def from_message_entities(
        self, text: str, entities: Sequence[MessageEntity]
    ) -> FormattedText:
        """Read Telegram entities (UTF-16 offsets) back into str offsets."""
        result: list[Entity] = []
        for message_entity in entities:
            try:
                entity_type = MessageEntityType(message_entity.type)
            except ValueError:
                LOGGER.debug(f"Skipping unknown entity type: {message_entity.type!r}")
                continue
            start = utf16_offset_to_index(text, message_entity.offset)
            end = utf16_offset_to_index(text, message_entity.offset + message_entity.length)
            result.append(
                Entity(
                    entity_type,
                    start,
                    end - start,
                    url=message_entity.url,
                    user_id=str(message_entity.user.id) if message_entity.user else None,
                    language=message_entity.language,
                    custom_emoji_id=message_entity.custom_emoji_id,
                )
            )
        return FormattedText(text=text, entities=result)

    def _to_message_entity(self, entity: Entity) -> MessageEntity | None:
        if entity.length == 0:
            return None
        user = None
        if entity.type == MessageEntityType.TEXT_MENTION:
            if not entity.user_id or not entity.user_id.isdigit():
                LOGGER.warning(f"Dropping mention with invalid user id: {entity.user_id!r}")
                return None
            user = User(id=int(entity.user_id), first_name="", is_bot=False)
        return MessageEntity(
            type=entity.type,
            offset=entity.offset,
            length=entity.length,
            url=entity.url,
            user=user,
            language=entity.language,
            custom_emoji_id=entity.custom_emoji_id,
        )
