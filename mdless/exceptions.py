"""Package-specific exception types."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for rendering-related errors.

    Represents input the renderer refuses to process. Failures of the output
    stream are not wrapped and surface as `OSError`.
    """


class UnsupportedConstructError(RenderError):
    """Raised when the event stream contains a construct mdless cannot render.

    Args:
        construct: Human-readable name of the construct, e.g. ``"tables"``.
    """

    def __init__(self, construct: str):
        self.construct = construct
        super().__init__(f"mdless does not support {self.construct}")


class ListStateError(RenderError):
    """Raised when list events are not nested inside an open list."""

    def __init__(self, message: str = "List item without list item kind"):
        super().__init__(message)
