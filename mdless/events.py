"""Turn Markdown source into mdless events.

Parsing is delegated to markdown-it-py; this module only translates its flat
token stream into the `Start`/`End`/`Text` vocabulary the renderer consumes.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .exceptions import UnsupportedConstructError
from .log import get_logger
from .models import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Header,
    Html,
    Image,
    InlineHtml,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    Text,
)

logger = get_logger(__name__)

# Container tokens that map one-to-one onto a tag without attributes
_SIMPLE_TAGS: dict[str, type] = {
    "paragraph": Paragraph,
    "blockquote": BlockQuote,
    "list_item": Item,
    "em": Emphasis,
    "strong": Strong,
    "table": Table,
    "thead": TableHead,
    "tbody": Table,
    "tr": TableRow,
    "th": TableCell,
    "td": TableCell,
}


def create_parser() -> MarkdownIt:
    """Create the CommonMark parser used by mdless.

    Tables are enabled so that they are recognised and rejected instead of
    being rendered as garbled paragraphs.
    """
    return MarkdownIt("commonmark").enable("table")


def parse_events(source: str, parser: MarkdownIt | None = None) -> Iterator[Event]:
    """Parse Markdown `source` into a stream of events.

    Args:
        source: Markdown text.
        parser: markdown-it parser to use; defaults to `create_parser()`.

    Yields:
        Event: Events in document order.

    Raises:
        UnsupportedConstructError: If markdown-it produces a token type that
            has no event equivalent.

    Examples:
        list(parse_events("*hi*"))
    """
    tokens = (parser or create_parser()).parse(source)
    logger.debug("Parsed %d block token(s)", len(tokens))
    yield from _translate(tokens)


def _translate(tokens: Sequence[Token]) -> Iterator[Event]:
    open_links: list[Tag] = []
    for position, token in enumerate(tokens):
        kind = token.type
        if kind == "inline":
            yield from _translate(token.children or [])
        elif kind == "text":
            yield Text(token.content)
        elif kind == "softbreak":
            yield SoftBreak()
        elif kind == "hardbreak":
            yield HardBreak()
        elif kind == "code_inline":
            yield Start(Code())
            yield Text(token.content)
            yield End(Code())
        elif kind in ("fence", "code_block"):
            tag = CodeBlock(token.info.strip())
            yield Start(tag)
            yield Text(token.content)
            yield End(tag)
        elif kind == "hr":
            yield Start(Rule())
            yield End(Rule())
        elif kind == "html_block":
            yield Html(token.content)
        elif kind == "html_inline":
            yield InlineHtml(token.content)
        elif kind == "image":
            tag = Image(str(token.attrGet("src") or ""), str(token.attrGet("title") or ""))
            yield Start(tag)
            yield End(tag)
        elif kind == "footnote_ref":
            yield FootnoteReference(str(token.meta.get("label", "")))
        elif kind == "link_open":
            tag = Link(_link_destination(tokens, position), str(token.attrGet("title") or ""))
            open_links.append(tag)
            yield Start(tag)
        elif kind == "link_close":
            yield End(open_links.pop())
        elif kind.endswith("_open") or kind.endswith("_close"):
            if token.hidden:
                # Paragraphs of tight list items
                continue
            tag = _container_tag(token)
            yield Start(tag) if token.nesting == 1 else End(tag)
        else:
            raise UnsupportedConstructError(f"{kind} tokens")


def _container_tag(token: Token) -> Tag:
    name = token.type.rsplit("_", 1)[0]
    if name == "heading":
        return Header(int(token.tag[1:]))
    if name == "bullet_list":
        return List(None)
    if name == "ordered_list":
        start = token.attrGet("start")
        return List(1 if start is None else int(start))
    if name.startswith("footnote"):
        return FootnoteDefinition(str(token.meta.get("label", "")) if token.meta else "")
    tag_type = _SIMPLE_TAGS.get(name)
    if tag_type is None:
        raise UnsupportedConstructError(f"{name} blocks")
    return tag_type()


def _link_destination(tokens: Sequence[Token], position: int) -> str:
    """Return the destination of the link opened at `position`.

    markdown-it percent-encodes `href`, while the visible text of an autolink
    is the URL as written. Autolinks take their destination from that text so
    the two compare equal.
    """
    token = tokens[position]
    if token.markup in ("autolink", "linkify") and position + 1 < len(tokens):
        following = tokens[position + 1]
        if following.type == "text":
            return following.content
    return str(token.attrGet("href") or "")
