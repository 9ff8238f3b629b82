"""
Shared fixtures for CLI tests.

Commands are run through click's CliRunner with the fake HTTP client from
the top level conftest injected via ``ctx.obj``.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from verifyctl.cli.main import cli


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def run(cli_runner, fake_http):
    """Invoke verifyctl with the fake HTTP client."""

    def invoke(*args):
        return cli_runner.invoke(cli, list(args), obj={"http_client": fake_http})

    return invoke


@pytest.fixture
def write_file(tmp_path):
    """Write a resource file as YAML or JSON depending on its extension."""

    def write(name, content):
        path = tmp_path / name
        if isinstance(content, (dict, list)):
            if path.suffix == ".json":
                content = json.dumps(content)
            else:
                content = yaml.safe_dump(content)
        path.write_text(content)
        return str(path)

    return write
