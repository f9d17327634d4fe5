from dataclasses import dataclass, field
from typing import Any

from telegram.constants import MessageEntityType


@dataclass(frozen=True)
class Entity:
    type: MessageEntityType
    offset: int
    length: int
    url: str | None = None
    user_id: str | None = None
    language: str | None = None
    custom_emoji_id: str | None = None

    def __post_init__(self) -> None:
        if self.offset < 0 or self.length < 0:
            raise ValueError(f"Invalid entity span: offset={self.offset}, length={self.length}")

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "offset": self.offset,
            "length": self.length,
        }
        for key in ("url", "user_id", "language", "custom_emoji_id"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class FormattedText:
    """Plain text plus the entities positioned over it."""

    text: str
    entities: list[Entity] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text}
        if self.entities:
            data["entities"] = [entity.to_dict() for entity in self.entities]
        return data
