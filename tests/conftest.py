import io

import pytest
from click.testing import CliRunner

from mdless.styles import Styles


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def tag_styles() -> Styles:
    """Readable stand-ins for escape sequences."""
    return Styles(
        bold="<b>",
        italic="<i>",
        no_italic="<ni>",
        dim="<dim>",
        accent="<acc>",
        code="<code>",
        link="<link>",
        reset="<r>",
    )


@pytest.fixture()
def buffer() -> io.StringIO:
    return io.StringIO()
