"""Link shorthand pass: [label](target) -> <a href="target">label</a>.

Runs before the markdown pass. Labels are not parsed further, and text
outside a recognized span is passed through unchanged.
"""

from richtext.nodes import Link, MarkupNode, Root, Text, normalize_link_target

# Left for the markdown pass, which turns these into custom emoji
CUSTOM_EMOJI_SCHEME = "customEmoji:"


def build_links_ast(text: str) -> Root:
    root = Root()
    pending: list[str] = []

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if char == "[":
            close = text.find("]", i + 1)
            if (
                close != -1
                and text.startswith("(", close + 1)
                and not text.startswith(CUSTOM_EMOJI_SCHEME, close + 2)
            ):
                if pending:
                    root.children.append(Text("".join(pending)))
                    pending.clear()
                target_end = text.find(")", close + 2)
                if target_end == -1:
                    target_end = length
                root.children.append(
                    Link(
                        label=text[i + 1 : close],
                        target=normalize_link_target(text[close + 2 : target_end]),
                    )
                )
                i = target_end + 1
                continue

        pending.append(char)
        i += 1

    if pending:
        root.children.append(Text("".join(pending)))
    return root


def render_links_ast(node: MarkupNode) -> str:
    if isinstance(node, Root):
        return "".join(render_links_ast(child) for child in node.children)
    if isinstance(node, Text):
        return node.content
    if isinstance(node, Link):
        target = node.target.replace('"', "&quot;")
        return f'<a href="{target}">{node.label}</a>'
    return ""


def expand_links(text: str) -> str:
    """Rewrite [label](target) spans as anchors."""
    return render_links_ast(build_links_ast(text))
