"""Immutable markup tree materialized from a markup string.

BeautifulSoup does the parsing; the result is copied into plain TreeNode
values so later passes can rebuild the tree instead of mutating it.
"""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

ELEMENT = "element"
TEXT = "text"
# Comments, doctypes and other declarations
COMMENT = "comment"

FRAGMENT = "#fragment"


@dataclass(frozen=True)
class TreeNode:
    kind: str
    name: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    children: tuple["TreeNode", ...] = ()
    content: str = ""

    @property
    def is_element(self) -> bool:
        return self.kind == ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    @property
    def is_comment(self) -> bool:
        return self.kind == COMMENT

    @property
    def text_content(self) -> str:
        """Descendant text in document order; <br> counts as a line break."""
        if self.kind == TEXT:
            return self.content
        if self.kind == COMMENT:
            return ""
        if self.name == "br":
            return "\n"
        return "".join(child.text_content for child in self.children)

    def get(self, attr: str, default: str | None = None) -> str | None:
        return self.attrs.get(attr, default)


def text_node(content: str) -> TreeNode:
    return TreeNode(kind=TEXT, content=content)


def element(
    name: str,
    attrs: dict[str, str] | None = None,
    children: tuple[TreeNode, ...] = (),
) -> TreeNode:
    return TreeNode(kind=ELEMENT, name=name, attrs=attrs or {}, children=children)


def parse_markup(markup: str) -> TreeNode:
    """Parse a markup string into a fragment node holding its top-level nodes."""
    soup = BeautifulSoup(markup, "html.parser")
    return element(FRAGMENT, children=tuple(_convert(child) for child in soup.children))


def _convert(node) -> TreeNode:
    if isinstance(node, Tag):
        attrs = {
            key: " ".join(value) if isinstance(value, list) else value
            for key, value in node.attrs.items()
        }
        return element(
            node.name.lower(),
            attrs,
            tuple(_convert(child) for child in node.children),
        )
    if isinstance(node, PreformattedString):
        return TreeNode(kind=COMMENT, content=str(node))
    return text_node(str(node))
