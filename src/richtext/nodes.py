"""AST node types produced by the markdown and link shorthand builders."""

from dataclasses import dataclass, field


@dataclass
class Root:
    children: list["MarkupNode"] = field(default_factory=list)


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Code:
    content: str


@dataclass(frozen=True)
class Pre:
    content: str
    language: str | None = None


@dataclass(frozen=True)
class EmojiRef:
    alt_text: str
    document_id: str


@dataclass(frozen=True)
class Link:
    label: str
    target: str


@dataclass
class Bold:
    children: list["MarkupNode"] = field(default_factory=list)


@dataclass
class Italic:
    children: list["MarkupNode"] = field(default_factory=list)


@dataclass
class Strikethrough:
    children: list["MarkupNode"] = field(default_factory=list)


@dataclass
class Spoiler:
    children: list["MarkupNode"] = field(default_factory=list)


StyleNode = Bold | Italic | Strikethrough | Spoiler
MarkupNode = Root | Text | Code | Pre | EmojiRef | Link | StyleNode


def normalize_link_target(target: str) -> str:
    """Infer a scheme for a shorthand link target.

    - contains "://" -> used verbatim
    - contains "@" -> mailto:
    - anything else -> https://
    """
    if "://" in target:
        return target
    if "@" in target:
        return f"mailto:{target}"
    return f"https://{target}"
