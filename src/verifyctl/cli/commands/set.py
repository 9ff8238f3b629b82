"""Set commands: upload content such as theme templates to the tenant."""

import logging
from pathlib import Path
from typing import Optional

import click

from verifyctl.api.themes import ThemeClient, zip_directory
from verifyctl.cli.common import (
    echo_entitlements,
    entitlements_option,
    file_option,
    get_auth,
    get_http_client,
    handle_errors,
)
from verifyctl.errors import InvalidInputError, ResourceFileError
from verifyctl.models.registry import THEME

logger = logging.getLogger(__name__)


def read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ResourceFileError(str(path), e.strerror or str(e)) from e


@click.group(name="set", short_help="Upload content to the tenant.")
def set_cmd() -> None:
    """
    Upload content such as theme templates.

    Examples:
        verifyctl set theme --id mytheme --dir ./mytheme
        verifyctl set theme --id mytheme --path templates/en/login.html -f login.html
    """


@set_cmd.command(name=THEME.name, short_help="Upload a theme or one of its template files.")
@click.option("--id", "theme_id", default=None, help="Identifier of the theme.")
@click.option(
    "--path",
    "template_path",
    default=None,
    help="Template file path including the locale. Only used when updating a single file.",
)
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the unpacked theme; it is compressed and uploaded.",
)
@file_option
@entitlements_option
@click.pass_context
@handle_errors
def set_theme(
    ctx: click.Context,
    theme_id: Optional[str],
    template_path: Optional[str],
    directory: Optional[Path],
    file_path: Optional[Path],
    entitlements: bool,
) -> None:
    """
    Replace a theme with a zip archive or directory, or replace one template file.

    With --path, -f names the template file to upload. Otherwise -f names a
    theme zip archive, or --dir a directory to compress.
    """
    if entitlements:
        echo_entitlements(THEME)
        return
    if not theme_id:
        raise InvalidInputError("'id' flag is required.")
    if template_path and not file_path:
        raise InvalidInputError("'file' flag is required.")
    if not directory and not file_path:
        raise InvalidInputError("Either 'dir' or 'file' flag is required.")

    if template_path:
        content = read_bytes(file_path)
        client = ThemeClient(get_auth(ctx), get_http_client(ctx))
        client.update_file(theme_id, template_path, content)
        logger.info(f"Uploaded {file_path} as {template_path} of theme {theme_id}")
    else:
        archive = zip_directory(directory) if directory else read_bytes(file_path)
        client = ThemeClient(get_auth(ctx), get_http_client(ctx))
        client.update_theme(theme_id, archive)
        logger.info(f"Uploaded theme {theme_id} ({len(archive)} bytes)")

    click.echo("Resource updated")
