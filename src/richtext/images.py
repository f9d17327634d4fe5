from dataclasses import replace

from richtext.resolver import DOCUMENT_ID_ATTR
from richtext.tree import TreeNode, text_node


def normalize_images(node: TreeNode) -> TreeNode:
    """Give image placeholders their fallback text.

    Custom emoji (<img> with a document id) stay in place with their alt
    text as content; any other <img> is replaced by its alt text.
    Running it twice gives the same tree as running it once.
    """
    if not node.is_element:
        return node
    if node.name == "img":
        alt = node.get("alt") or ""
        if node.get(DOCUMENT_ID_ATTR):
            return replace(node, children=(text_node(alt),))
        return text_node(alt)
    return replace(node, children=tuple(normalize_images(child) for child in node.children))
