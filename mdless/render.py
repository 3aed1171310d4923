"""Write Markdown events to a TTY.

Rendering is a single forward pass over the event stream. A `RenderContext`
tracks the active styles, list nesting, indentation and pending link
references while `write_event` routes every event to the tag handlers.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import TextIO

from .exceptions import ListStateError, UnsupportedConstructError
from .log import get_logger
from .models import (
    BlockLevel,
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
    ListItemKind,
    Paragraph,
    PendingLink,
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
from .styles import Styles

logger = get_logger(__name__)

RULE_CHAR = "─"
HEADER_LEVEL_CHAR = "┄"
BULLET = "•"

QUOTE_INDENT = 4
ORDERED_ITEM_INDENT = 4
UNORDERED_ITEM_INDENT = 2

_UNSUPPORTED_TAGS: dict[type, str] = {
    Table: "tables",
    TableHead: "tables",
    TableRow: "tables",
    TableCell: "tables",
    FootnoteDefinition: "footnotes",
    Image: "images",
}


def dump_events(writer: TextIO, events: Iterable[Event]) -> None:
    """Write the debug representation of each event, one per line.

    Args:
        writer: Text stream to write to.
        events: Markdown events.

    Examples:
        dump_events(sys.stdout, parse_events("*hi*"))
    """
    for event in events:
        writer.write(f"{event!r}\n")


def render(
    writer: TextIO,
    events: Iterable[Event],
    columns: int = 80,
    styles: Styles | None = None,
) -> None:
    """Write Markdown events formatted for a TTY.

    `columns` only sizes horizontal rules; long lines are not wrapped.
    Pending link references are written before each header and once more at
    the end of the stream.

    Args:
        writer: Text stream to write to.
        events: Markdown events, consumed once in order.
        columns: Advisory width of the terminal.
        styles: Style tokens; defaults to ANSI escape sequences.

    Raises:
        UnsupportedConstructError: If the stream contains HTML, footnotes,
            tables or images.
        ListStateError: If a list item occurs outside of a list.
        OSError: If writing to `writer` fails.

    Examples:
        render(sys.stdout, parse_events("# Hello"), columns=72)
    """
    context = RenderContext(writer, columns, styles or Styles.ansi())
    for event in events:
        write_event(context, event)
    # At the end, print any remaining links
    context.write_pending_links()


class RenderContext:
    """Mutable state of a single rendering pass.

    Attributes:
        writer: Text stream receiving all output.
        columns: Advisory terminal width used for rules.
        styles: Style tokens to request.
        active_styles: Styles applied to the current text, in the order they
            were enabled.
        emphasis_level: Nesting depth of emphasis; odd levels are italic.
        indent_level: Number of spaces to indent continuation lines with.
        block_level: Whether we are at block level or inline in a block.
        list_item_kind: Stack with one entry per open list.
        pending_links: Link references not yet written.
        next_link_index: Index the next link reference gets.
        last_text: Last text seen, used to omit references for autolinks.
    """

    def __init__(self, writer: TextIO, columns: int, styles: Styles):
        self.writer = writer
        self.columns = columns
        self.styles = styles
        self.active_styles: list[str] = []
        self.emphasis_level = 0
        self.indent_level = 0
        # We start inline; blocks must be started explicitly
        self.block_level = BlockLevel.INLINE
        self.list_item_kind: list[ListItemKind] = []
        self.pending_links: deque[PendingLink] = deque()
        self.next_link_index = 1
        self.last_text: str | None = None

    def write(self, text: str) -> None:
        """Write `text` verbatim."""
        self.writer.write(text)

    def start_inline_text(self) -> None:
        """Start inline text, separating it from a preceding block."""
        if self.block_level is BlockLevel.BLOCK:
            self.newline_and_indent()
        self.block_level = BlockLevel.INLINE

    def end_inline_text_with_margin(self) -> None:
        """Return to block level, ending inline text with a line break."""
        if self.block_level is BlockLevel.INLINE:
            self.newline()
        self.block_level = BlockLevel.BLOCK

    def flush_styles(self) -> None:
        """Write all active styles."""
        self.write("".join(self.active_styles))

    def newline(self) -> None:
        """Reset styling, break the line and enable all active styles again."""
        self.write(f"{self.styles.reset}\n")
        self.flush_styles()

    def newline_and_indent(self) -> None:
        """Break the line and indent the continuation."""
        self.newline()
        self.indent()

    def indent(self) -> None:
        """Indent according to the current indentation level."""
        self.write(" " * self.indent_level)

    def enable_style(self, style: str) -> None:
        """Push `style` onto the active styles and write it.

        To undo a style call `reset_last_style`, or pop `active_styles` and
        let the next `newline` restore the remaining styles.
        """
        self.active_styles.append(style)
        self.write(style)

    def reset_last_style(self) -> None:
        """Drop the last style and restore the remaining ones."""
        self.active_styles.pop()
        self.write(self.styles.reset)
        self.flush_styles()

    def enable_emphasis(self) -> None:
        """Alternate between italic and upright text with each nesting level."""
        self.emphasis_level += 1
        if self.emphasis_level % 2 == 1:
            self.enable_style(self.styles.italic)
        else:
            self.enable_style(self.styles.no_italic)

    def add_link(self, destination: str, title: str) -> int:
        """Queue a link reference and return its index."""
        index = self.next_link_index
        self.next_link_index += 1
        self.pending_links.append(PendingLink(index, destination, title))
        logger.debug("Queued link [%d] to %s", index, destination)
        return index

    def write_pending_links(self) -> None:
        """Write all pending link references and empty the queue."""
        if not self.pending_links:
            return
        logger.debug("Writing %d pending link(s)", len(self.pending_links))
        self.newline()
        self.enable_style(self.styles.link)
        while self.pending_links:
            link = self.pending_links.popleft()
            self.write(f"[{link.index}]: {link.destination} {link.title}")
            self.newline()
        self.reset_last_style()


def write_event(ctx: RenderContext, event: Event) -> None:
    """Write a single `event` in the given context."""
    if isinstance(event, Text):
        ctx.write(event.text)
        ctx.last_text = event.text
    elif isinstance(event, (SoftBreak, HardBreak)):
        ctx.newline_and_indent()
    elif isinstance(event, Start):
        start_tag(ctx, event.tag)
    elif isinstance(event, End):
        end_tag(ctx, event.tag)
    elif isinstance(event, Html):
        raise UnsupportedConstructError("HTML blocks")
    elif isinstance(event, InlineHtml):
        raise UnsupportedConstructError("inline HTML")
    elif isinstance(event, FootnoteReference):
        raise UnsupportedConstructError("footnotes")
    else:
        raise TypeError(f"Not a Markdown event: {event!r}")


def _reject_unsupported(tag: Tag) -> None:
    construct = _UNSUPPORTED_TAGS.get(type(tag))
    if construct is not None:
        raise UnsupportedConstructError(construct)


def start_tag(ctx: RenderContext, tag: Tag) -> None:
    """Write the start of `tag` in the given context."""
    _reject_unsupported(tag)
    styles = ctx.styles
    if isinstance(tag, Paragraph):
        ctx.start_inline_text()
    elif isinstance(tag, Rule):
        ctx.start_inline_text()
        ctx.enable_style(styles.dim)
        ctx.write(RULE_CHAR * ctx.columns)
    elif isinstance(tag, Header):
        # Write pending links first to keep them close to the text they
        # appeared in
        ctx.write_pending_links()
        ctx.start_inline_text()
        ctx.enable_style(styles.bold)
        ctx.enable_style(styles.accent)
        ctx.write(HEADER_LEVEL_CHAR * (tag.level - 1))
    elif isinstance(tag, BlockQuote):
        ctx.indent_level += QUOTE_INDENT
        ctx.start_inline_text()
        ctx.enable_style(styles.dim)
        ctx.enable_emphasis()
    elif isinstance(tag, CodeBlock):
        ctx.start_inline_text()
        ctx.enable_style(styles.code)
    elif isinstance(tag, List):
        ctx.list_item_kind.append(ListItemKind(tag.start))
        logger.debug("Opened list at depth %d", len(ctx.list_item_kind))
        ctx.newline()
    elif isinstance(tag, Item):
        _start_item(ctx)
    elif isinstance(tag, Emphasis):
        ctx.enable_emphasis()
    elif isinstance(tag, Strong):
        ctx.enable_style(styles.bold)
    elif isinstance(tag, Code):
        ctx.enable_style(styles.code)
    elif isinstance(tag, Link):
        # Links are rendered when closed, once their text is known
        pass
    else:
        raise TypeError(f"Not a Markdown tag: {tag!r}")


def _start_item(ctx: RenderContext) -> None:
    if not ctx.list_item_kind:
        raise ListStateError()
    ctx.indent()
    ctx.block_level = BlockLevel.INLINE
    kind = ctx.list_item_kind.pop()
    if kind.ordered:
        ctx.write(f"{kind.number:>2}. ")
        ctx.indent_level += ORDERED_ITEM_INDENT
    else:
        ctx.write(f"{BULLET} ")
        ctx.indent_level += UNORDERED_ITEM_INDENT
    ctx.list_item_kind.append(kind.advance())


def end_tag(ctx: RenderContext, tag: Tag) -> None:
    """Write the end of `tag` in the given context."""
    _reject_unsupported(tag)
    if isinstance(tag, Paragraph):
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, Rule):
        ctx.active_styles.pop()
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, Header):
        ctx.active_styles.pop()
        ctx.active_styles.pop()
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, BlockQuote):
        ctx.indent_level -= QUOTE_INDENT
        ctx.emphasis_level -= 1
        ctx.active_styles.pop()
        ctx.reset_last_style()
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, CodeBlock):
        ctx.reset_last_style()
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, List):
        if not ctx.list_item_kind:
            raise ListStateError("List end without an open list")
        ctx.list_item_kind.pop()
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, Item):
        # Reset indent level according to list item kind
        if ctx.list_item_kind:
            if ctx.list_item_kind[-1].ordered:
                ctx.indent_level -= ORDERED_ITEM_INDENT
            else:
                ctx.indent_level -= UNORDERED_ITEM_INDENT
        ctx.end_inline_text_with_margin()
    elif isinstance(tag, Emphasis):
        ctx.reset_last_style()
        ctx.emphasis_level -= 1
    elif isinstance(tag, (Strong, Code)):
        ctx.reset_last_style()
    elif isinstance(tag, Link):
        _end_link(ctx, tag)
    else:
        raise TypeError(f"Not a Markdown tag: {tag!r}")


def _end_link(ctx: RenderContext, link: Link) -> None:
    if ctx.last_text == link.destination:
        # The link text already shows the destination, e.g. an autolink
        return
    index = ctx.add_link(link.destination, link.title)
    ctx.enable_style(ctx.styles.link)
    ctx.write(f"[{index}]")
    ctx.reset_last_style()
