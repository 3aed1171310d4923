"""Configuration loading and management."""

from __future__ import annotations

import os
import shutil
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from .log import get_logger

logger = get_logger(__name__)

COLOR_MODES = ("auto", "always", "never")
MAX_FILE_SIZE_ENV_VAR = "MDLESS_MAX_FILE_SIZE"


@dataclass
class MdlessConfig:
    """Configuration for rendering Markdown to a terminal.

    Attributes:
        columns: Width used to size horizontal rules, or None to use the
            width of the terminal.
        color: Colour mode: ``"auto"`` colours output only when writing to a
            terminal, ``"always"`` and ``"never"`` force it on or off.
        max_file_size: Maximum size in bytes of a Markdown file to render.

    Examples:
        MdlessConfig(columns=72, color="never")
    """

    columns: int | None = None
    color: str = "auto"
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`columns` must be a positive integer")
    """


def load_config(search_path: Path) -> MdlessConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.mdless]`` table from `pyproject.toml` and the ``[mdless]`` or
    ``[tool.mdless]`` table from `.mdless.toml` when present. TOML files that
    cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        MdlessConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If a matching table is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "mdless")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".mdless.toml",
            table_paths=[("mdless",), ("tool", "mdless")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return MdlessConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> MdlessConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> MdlessConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return MdlessConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: MdlessConfig) -> None:
    """Validate a `MdlessConfig` instance.

    Raises:
        ConfigError: If `columns` or `max_file_size` is not a positive integer
            or `color` is not a known mode.
    """
    if config.columns is not None:
        _ensure_positive_integer("columns", config.columns)
    _ensure_positive_integer("max_file_size", config.max_file_size)
    if config.color not in COLOR_MODES:
        raise ConfigError("`color` must be one of: " + ", ".join(COLOR_MODES))


def apply_overrides(config: MdlessConfig, **overrides: object) -> MdlessConfig:
    """Apply override values to a `MdlessConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        MdlessConfig: New configuration with the overrides applied, or `config`
        itself when there is nothing to change.

    Raises:
        TypeError: If an override name is not defined on `MdlessConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def environment_overrides() -> dict[str, object]:
    """Read overrides from environment variables.

    `MDLESS_MAX_FILE_SIZE` replaces the configured `max_file_size`.

    Raises:
        ConfigError: If the variable is not an integer.
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return {}
    try:
        return {"max_file_size": int(env_value)}
    except ValueError as error:
        raise ConfigError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        ) from error


def build_config(search_path: Path, **overrides: object) -> MdlessConfig:
    """Load, override, and validate configuration.

    Environment variables take precedence over config files; `overrides`
    take precedence over both.

    Examples:
        config = build_config(Path.cwd(), columns=72)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **environment_overrides())
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def resolve_columns(config: MdlessConfig) -> int:
    """Return the configured width, falling back to the terminal width."""
    if config.columns is not None:
        return config.columns
    return shutil.get_terminal_size().columns


def _ensure_positive_integer(key: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"`{key}` must be an integer")
    if value <= 0:
        raise ConfigError(f"`{key}` must be a positive integer")
