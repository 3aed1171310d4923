"""Terminal style tokens.

The renderer never interprets these tokens; it writes them verbatim and keeps
track of which ones are active.
"""

from __future__ import annotations

from dataclasses import dataclass

import click


def _sgr(**attributes: object) -> str:
    return click.style("", reset=False, **attributes)


@dataclass(frozen=True)
class Styles:
    """Opaque style tokens requested by the renderer.

    Attributes:
        bold: Enables bold text (strong emphasis, headers).
        italic: Enables italic text (odd emphasis levels).
        no_italic: Disables italic text (even emphasis levels).
        dim: Low-emphasis colour for rules and block quotes.
        accent: Header colour.
        code: Colour for code blocks and inline code.
        link: Colour for link indices and link references.
        reset: Clears all styling.
    """

    bold: str = ""
    italic: str = ""
    no_italic: str = ""
    dim: str = ""
    accent: str = ""
    code: str = ""
    link: str = ""
    reset: str = ""

    @classmethod
    def ansi(cls) -> Styles:
        """Build ANSI escape sequences for a colour terminal."""
        return cls(
            bold=_sgr(bold=True),
            italic=_sgr(italic=True),
            no_italic=_sgr(italic=False),
            dim=_sgr(fg="bright_black"),
            accent=_sgr(fg="blue"),
            code=_sgr(fg="yellow"),
            link=_sgr(fg="blue"),
            reset=click.style("", reset=True),
        )

    @classmethod
    def plain(cls) -> Styles:
        """Build empty tokens for uncoloured output."""
        return cls()
