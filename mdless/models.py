"""Data models for mdless.

The event vocabulary mirrors a pull parser: a flat stream of ``Start`` and
``End`` events delimiting tags, interleaved with text and line breaks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


# Tags


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class Header:
    level: int


@dataclass(frozen=True)
class BlockQuote:
    pass


@dataclass(frozen=True)
class CodeBlock:
    info: str = ""


@dataclass(frozen=True)
class List:
    """A list; `start` is the first number of an ordered list, None otherwise."""

    start: int | None = None


@dataclass(frozen=True)
class Item:
    pass


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Code:
    """Inline code span."""


@dataclass(frozen=True)
class Link:
    destination: str
    title: str = ""


@dataclass(frozen=True)
class Image:
    destination: str
    title: str = ""


@dataclass(frozen=True)
class Table:
    pass


@dataclass(frozen=True)
class TableHead:
    pass


@dataclass(frozen=True)
class TableRow:
    pass


@dataclass(frozen=True)
class TableCell:
    pass


@dataclass(frozen=True)
class FootnoteDefinition:
    label: str


Tag = Union[
    Paragraph,
    Rule,
    Header,
    BlockQuote,
    CodeBlock,
    List,
    Item,
    Emphasis,
    Strong,
    Code,
    Link,
    Image,
    Table,
    TableHead,
    TableRow,
    TableCell,
    FootnoteDefinition,
]


# Events


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Html:
    html: str


@dataclass(frozen=True)
class InlineHtml:
    html: str


@dataclass(frozen=True)
class FootnoteReference:
    label: str


Event = Union[Text, SoftBreak, HardBreak, Start, End, Html, InlineHtml, FootnoteReference]


# Rendering state


class BlockLevel(Enum):
    """The level the current event occurs at.

    Attributes:
        BLOCK: The next text must start on a fresh line.
        INLINE: Text continues on the current line.
    """

    BLOCK = auto()
    INLINE = auto()


@dataclass(frozen=True)
class ListItemKind:
    """Kind of the items of an open list.

    Attributes:
        number: Number of the next item of an ordered list, or None for an
            unordered list.
    """

    number: int | None = None

    @property
    def ordered(self) -> bool:
        return self.number is not None

    def advance(self) -> ListItemKind:
        if self.number is None:
            return self
        return ListItemKind(self.number + 1)


@dataclass(frozen=True)
class PendingLink:
    """A link reference waiting to be written below the text.

    Attributes:
        index: One-based index shown inline as ``[index]``.
        destination: Link destination.
        title: Link title, possibly empty.
    """

    index: int
    destination: str
    title: str
