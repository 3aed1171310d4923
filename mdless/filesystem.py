"""Reading Markdown input."""

from __future__ import annotations

from pathlib import Path


def read_source(filepath: Path, max_size: int) -> str:
    """Read a Markdown file as UTF-8 text.

    Args:
        filepath: Path to the file.
        max_size: Maximum file size in bytes.

    Returns:
        str: Contents of the file.

    Raises:
        IOError: If the file is missing, inaccessible, not a regular file,
            larger than `max_size`, or not valid UTF-8.

    Examples:
        source = read_source(Path("README.md"), max_size=1024 * 1024)
    """
    try:
        size = filepath.stat().st_size
        if size > max_size:
            raise IOError(
                f"File {filepath} is too large ({size} bytes, limit is {max_size} bytes)"
            )
        with open(filepath, "r", encoding="UTF-8") as handle:
            return handle.read()
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
        UnicodeDecodeError,
    ) as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
