"""
Create commands.

``verifyctl create -f FILE`` picks the resource type from the ``kind`` in the
file; ``verifyctl create <type>`` works on one type and can also print the
entitlements it needs or an empty resource file.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from verifyctl.api.access_policies import AccessPolicyClient
from verifyctl.api.api_clients import APIClientClient
from verifyctl.api.applications import ApplicationClient
from verifyctl.api.attributes import AttributeClient
from verifyctl.api.certificates import PersonalCertClient, SignerCertClient
from verifyctl.api.groups import GroupClient
from verifyctl.api.identity_agents import IdentityAgentClient
from verifyctl.api.identity_sources import IdentitySourceClient
from verifyctl.api.password_policies import PasswordPolicyClient
from verifyctl.api.users import UserClient
from verifyctl.cli.common import (
    boilerplate_option,
    echo_boilerplate,
    echo_entitlements,
    entitlements_option,
    file_option,
    get_auth,
    get_http_client,
    handle_errors,
    read_resource_data,
    require_file,
)
from verifyctl.errors import InvalidInputError
from verifyctl.models.application import APPLICATION_TYPES, Application
from verifyctl.models.registry import (
    ACCESS_POLICY,
    API_CLIENT,
    APPLICATION,
    ATTRIBUTE,
    GROUP,
    IDENTITY_AGENT,
    IDENTITY_SOURCE,
    PASSWORD_POLICY,
    PERSONAL_CERT,
    SIGNER_CERT,
    USER,
    ResourceType,
    parse_resource,
    resource_type_for_kind,
)
from verifyctl.models.resource import load_from_file

logger = logging.getLogger(__name__)

# kind -> (client class, create method)
CREATORS = {
    USER.kind: (UserClient, "create_user"),
    GROUP.kind: (GroupClient, "create_group"),
    APPLICATION.kind: (ApplicationClient, "create_application"),
    API_CLIENT.kind: (APIClientClient, "create_api_client"),
    ACCESS_POLICY.kind: (AccessPolicyClient, "create_access_policy"),
    IDENTITY_SOURCE.kind: (IdentitySourceClient, "create_identity_source"),
    IDENTITY_AGENT.kind: (IdentityAgentClient, "create_identity_agent"),
    PERSONAL_CERT.kind: (PersonalCertClient, "create_personal_cert"),
    SIGNER_CERT.kind: (SignerCertClient, "create_signer_cert"),
    PASSWORD_POLICY.kind: (PasswordPolicyClient, "create_password_policy"),
    ATTRIBUTE.kind: (AttributeClient, "create_attribute"),
}


def create_resource(ctx: click.Context, resource_type: ResourceType, data: Any) -> None:
    """Log in, create the resource and print its URI."""
    auth = get_auth(ctx)
    client_class, method = CREATORS[resource_type.kind]
    client = client_class(auth, get_http_client(ctx))
    uri = getattr(client, method)(data)
    logger.info(f"Created {resource_type.name} at {uri}")
    click.echo(f"Resource created: {uri}")


@click.group(invoke_without_command=True, short_help="Create a resource.")
@file_option
@click.pass_context
@handle_errors
def create(ctx: click.Context, file_path: Optional[Path]) -> None:
    """
    Create a resource from a file, or use a subcommand for one resource type.

    Examples:
        verifyctl create -f user.yaml
        verifyctl create apiclient --boilerplate
    """
    if ctx.invoked_subcommand is not None:
        return

    if not file_path:
        raise InvalidInputError("'file' option is required")

    document = load_from_file(file_path)
    kind = document.get("kind")
    if not kind:
        raise InvalidInputError("No 'kind' defined. Resource type cannot be identified.")

    resource_type = resource_type_for_kind(kind)
    if resource_type is None or resource_type.kind not in CREATORS:
        raise InvalidInputError(f"unsupported resource kind '{kind}'")

    resource = parse_resource(document)
    create_resource(ctx, resource_type, resource.data)


def _resource_command(resource_type: ResourceType, short_help: str) -> click.Command:
    @click.command(name=resource_type.name, short_help=short_help)
    @file_option
    @entitlements_option
    @boilerplate_option
    @click.pass_context
    @handle_errors
    def command(
        ctx: click.Context,
        file_path: Optional[Path],
        entitlements: bool,
        boilerplate: bool,
    ) -> None:
        if entitlements:
            echo_entitlements(resource_type)
            return
        if boilerplate:
            echo_boilerplate(resource_type, resource_type.model.boilerplate())
            return

        data = read_resource_data(require_file(file_path), resource_type)
        create_resource(ctx, resource_type, data)

    command.help = (
        f"{short_help}\n\nThe file holds an {resource_type.kind} resource or just its data."
    )
    return command


@click.command(name=APPLICATION.name, short_help="Create an application.")
@file_option
@entitlements_option
@boilerplate_option
@click.option(
    "--applicationType",
    "-t",
    "application_type",
    type=click.Choice(APPLICATION_TYPES, case_sensitive=False),
    default=None,
    help="Preset the boilerplate for a sign-on protocol.",
)
@click.pass_context
@handle_errors
def create_application(
    ctx: click.Context,
    file_path: Optional[Path],
    entitlements: bool,
    boilerplate: bool,
    application_type: Optional[str],
) -> None:
    """
    Create an application.

    Examples:
        verifyctl create application --boilerplate -t oidc > app.yaml
        verifyctl create application -f app.yaml
    """
    if entitlements:
        echo_entitlements(APPLICATION)
        return
    if boilerplate:
        echo_boilerplate(APPLICATION, Application.boilerplate(application_type or ""))
        return

    data = read_resource_data(require_file(file_path), APPLICATION)
    create_resource(ctx, APPLICATION, data)


create.add_command(_resource_command(USER, "Create a user."))
create.add_command(_resource_command(GROUP, "Create a group."))
create.add_command(create_application)
create.add_command(_resource_command(API_CLIENT, "Create an API client."))
create.add_command(_resource_command(ACCESS_POLICY, "Create an access policy."))
create.add_command(_resource_command(IDENTITY_SOURCE, "Create an identity source."))
create.add_command(_resource_command(IDENTITY_AGENT, "Create an identity agent."))
create.add_command(_resource_command(PERSONAL_CERT, "Create a personal certificate."))
create.add_command(_resource_command(SIGNER_CERT, "Create a signer certificate."))
create.add_command(_resource_command(PASSWORD_POLICY, "Create a password policy."))
create.add_command(_resource_command(ATTRIBUTE, "Create an attribute."))
