from __future__ import annotations

import textwrap
from pathlib import Path

from mdless.cli import cli
from mdless.styles import Styles


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_renders_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "doc.md",
        """
        # Title

        See [site](http://example.com).
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "Title\n\nSee site[1].\n\n[1]: http://example.com \n"


def test_cli_reads_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="- a\n- b\n")

    assert result.exit_code == 0
    assert result.output == "\n• a\n• b\n"


def test_cli_columns_option_sizes_rules(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "rule.md", "---\n")

    result = cli_runner.invoke(cli, ["--columns", "12", str(target)])

    assert result.exit_code == 0
    assert result.output == "─" * 12 + "\n"


def test_cli_reads_columns_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mdless]
        columns = 7
        """,
    )
    target = _write(tmp_path, "rule.md", "---\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "─" * 7 + "\n"


def test_cli_color_forces_escape_sequences(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "bold.md", "**bold**\n")

    result = cli_runner.invoke(cli, ["--color", "always", str(target)])

    assert result.exit_code == 0
    assert Styles.ansi().bold + "bold" in result.output


def test_cli_output_is_plain_when_not_a_terminal(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "bold.md", "**bold**\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "bold\n"
    assert "\x1b[" not in result.output


def test_cli_color_never_overrides_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(tmp_path, '[tool.mdless]\ncolor = "always"\n')
    target = _write(tmp_path, "bold.md", "**bold**\n")

    result = cli_runner.invoke(cli, ["--color", "never", str(target)])

    assert result.exit_code == 0
    assert "\x1b[" not in result.output


def test_cli_dump_events(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "hi\n")

    result = cli_runner.invoke(cli, ["--dump-events", str(target)])

    assert result.exit_code == 0
    assert result.output == "Start(tag=Paragraph())\nText(text='hi')\nEnd(tag=Paragraph())\n"


def test_cli_rejects_tables(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "table.md",
        """
        Intro

        | a | b |
        |---|---|
        | 1 | 2 |
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "mdless does not support tables" in result.output
    assert "| a |" not in result.output


def test_cli_rejects_invalid_columns(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "hi\n")

    result = cli_runner.invoke(cli, ["--columns", "0", str(target)])

    assert result.exit_code == 2
    assert "`columns` must be a positive integer" in result.output


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(tmp_path, "[tool.mdless]\nwidth = 3\n")
    target = _write(tmp_path, "doc.md", "hi\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "Invalid `[tool.mdless]` settings" in result.output


def test_cli_reports_missing_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code == 1
    assert "Error accessing" in result.output


def test_cli_enforces_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDLESS_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "doc.md", "a long paragraph\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "too large" in result.output


def test_cli_rejects_invalid_max_file_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDLESS_MAX_FILE_SIZE", "lots")
    target = _write(tmp_path, "doc.md", "hi\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "Invalid value for MDLESS_MAX_FILE_SIZE" in result.output
