"""
mdless: render Markdown for the terminal.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdless README.md

Library Usage:
    import sys
    from mdless import parse_events, render

    render(sys.stdout, parse_events("# Hello *world*"), columns=80)
"""

from .events import parse_events
from .exceptions import ListStateError, RenderError, UnsupportedConstructError
from .render import dump_events, render
from .styles import Styles

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render",
    "dump_events",
    "parse_events",
    # Styling
    "Styles",
    # Exceptions
    "RenderError",
    "UnsupportedConstructError",
    "ListStateError",
    # Version
    "__version__",
]
