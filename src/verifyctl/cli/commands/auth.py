"""
Login command.

Obtains an OAuth 2.0 access token for a tenant and stores it in the config
file so the other commands can use it.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from verifyctl.auth.login import acquire_token
from verifyctl.cli.common import (
    boilerplate_option,
    file_option,
    get_config_path,
    get_http_client,
    handle_errors,
)
from verifyctl.cli.formatters import dump_yaml
from verifyctl.config.config import AuthConfig, CLIConfig
from verifyctl.errors import InvalidInputError
from verifyctl.models.auth import AuthResource
from verifyctl.models.registry import parse_resource
from verifyctl.models.resource import AUTH_KIND, ResourceObject, load_from_file, normalize_kind

logger = logging.getLogger(__name__)

DEPRECATION_NOTICE = "(deprecated) Use the '-f' argument to provide auth properties"


def read_auth_resource(path: Path) -> AuthResource:
    """Read the login properties from an ``IBMVerifyAuth`` file."""
    document = load_from_file(path)
    if normalize_kind(document.get("kind")) != AUTH_KIND:
        raise InvalidInputError("invalid resource kind")
    return parse_resource(document).data


@click.command(short_help="Log in to your tenant and save the connection for subsequent use.")
@click.argument("tenant", required=False)
@click.option("--user", "-u", is_flag=True, help="Initiate a user login with the device flow.")
@click.option(
    "--clientId",
    "client_id",
    default=None,
    help="Client ID of the API client or application enabled with the grant type.",
)
@click.option(
    "--clientSecret",
    "client_secret",
    default=None,
    help="Client secret of the client. Optional for public clients.",
)
@file_option
@click.option(
    "--print",
    "print_only",
    is_flag=True,
    help="Only display the access token; nothing is persisted.",
)
@boilerplate_option
@click.pass_context
@handle_errors
def auth(
    ctx: click.Context,
    tenant: Optional[str],
    user: bool,
    client_id: Optional[str],
    client_secret: Optional[str],
    file_path: Optional[Path],
    print_only: bool,
    boilerplate: bool,
) -> None:
    """
    Log in to TENANT and save the access token.

    A user login uses the device flow and prints a URL to open in a browser.
    Otherwise the client credentials grant is used.

    Examples:
        verifyctl auth abc.verify.ibm.com -f auth.yaml
        verifyctl auth abc.verify.ibm.com -u --clientId=cli_user_client
    """
    if boilerplate:
        envelope = ResourceObject(kind=AUTH_KIND, api_version="1.0", data=AuthResource.boilerplate())
        click.echo(dump_yaml(envelope).rstrip("\n"))
        return

    if not tenant:
        raise InvalidInputError("Tenant is required.")
    if not client_id and not file_path:
        raise InvalidInputError("'clientId' is required.")

    if file_path:
        resource = read_auth_resource(file_path)
    else:
        click.echo(DEPRECATION_NOTICE)
        resource = AuthResource(client_id=client_id, client_secret=client_secret, user=user)

    token = acquire_token(
        tenant,
        resource,
        notify=click.echo,
        http_client=get_http_client(ctx),
    )

    if print_only:
        click.echo(token.access_token)
        return

    config_path = get_config_path(ctx)
    config = CLIConfig.load(config_path)
    config.add_auth(
        AuthConfig(tenant=tenant, token=token.access_token, is_user=user or resource.user)
    )
    config.set_current_tenant(tenant)
    config.persist(config_path)
    logger.info(f"Stored the login session for {tenant}")

    click.echo("Login succeeded.")
