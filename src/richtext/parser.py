from richtext.entities import FormattedText
from richtext.extractor import extract_entities
from richtext.images import normalize_images
from richtext.links import expand_links
from richtext.markdown import parse_markdown
from richtext.tree import parse_markup


def parse_html_as_formatted_text(
    html: str,
    with_markdown_links: bool = False,
    skip_markdown: bool = False,
) -> FormattedText:
    """
    Convert rich text input into plain text plus entities.

    - with_markdown_links: expand [label](target) shorthands first
    - skip_markdown: treat the input as final markup
    """
    if skip_markdown:
        markup = html
    elif with_markdown_links:
        markup = parse_markdown(expand_links(html))
    else:
        markup = parse_markdown(html)

    tree = normalize_images(parse_markup(markup))
    return extract_entities(tree)
