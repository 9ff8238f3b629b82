"""
Replace commands.

Users and groups are updated with SCIM patch operations; every other type is
replaced with the full resource read from the file.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import click

from verifyctl.api.access_policies import AccessPolicyClient
from verifyctl.api.api_clients import APIClientClient
from verifyctl.api.applications import ApplicationClient
from verifyctl.api.attributes import AttributeClient
from verifyctl.api.certificates import PersonalCertClient
from verifyctl.api.groups import GroupClient
from verifyctl.api.http_client import HttpClient
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
from verifyctl.config.config import AuthConfig
from verifyctl.errors import InvalidInputError
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
    USER,
    ResourceType,
    parse_update_resource,
    resource_type_for_kind,
)
from verifyctl.models.resource import load_from_file

logger = logging.getLogger(__name__)

Updater = Callable[[AuthConfig, HttpClient, Any], None]


def _update_user(auth: AuthConfig, http: HttpClient, request: Any) -> None:
    UserClient(auth, http).update_user(request.user_name, request.scim_patch.operations)


def _update_group(auth: AuthConfig, http: HttpClient, request: Any) -> None:
    GroupClient(auth, http).update_group(request.display_name, request.scim_patch.operations)


def _updater(client_class, method: str) -> Updater:
    def update(auth: AuthConfig, http: HttpClient, data: Any) -> None:
        getattr(client_class(auth, http), method)(data)

    return update


# kind -> (updater, success message)
UPDATERS: Dict[str, Tuple[Updater, str]] = {
    USER.kind: (_update_user, "User updated successfully"),
    GROUP.kind: (_update_group, "Group updated successfully"),
    APPLICATION.kind: (
        _updater(ApplicationClient, "update_application"),
        "Application updated successfully",
    ),
    API_CLIENT.kind: (
        _updater(APIClientClient, "update_api_client"),
        "API client updated successfully",
    ),
    ACCESS_POLICY.kind: (
        _updater(AccessPolicyClient, "update_access_policy"),
        "Access Policy updated successfully",
    ),
    IDENTITY_SOURCE.kind: (
        _updater(IdentitySourceClient, "update_identity_source"),
        "IdentitySource updated successfully",
    ),
    IDENTITY_AGENT.kind: (
        _updater(IdentityAgentClient, "update_identity_agent"),
        "Identity Agent updated successfully",
    ),
    PERSONAL_CERT.kind: (
        _updater(PersonalCertClient, "update_personal_cert"),
        "Personal Certificate updated successfully",
    ),
    PASSWORD_POLICY.kind: (
        _updater(PasswordPolicyClient, "update_password_policy"),
        "Password Policy updated successfully",
    ),
    ATTRIBUTE.kind: (_updater(AttributeClient, "update_attribute"), "Resource updated"),
}


def replace_resource(ctx: click.Context, resource_type: ResourceType, data: Any) -> None:
    """Log in, send the update and print the success message."""
    auth = get_auth(ctx)
    update, message = UPDATERS[resource_type.kind]
    update(auth, get_http_client(ctx), data)
    logger.info(f"Updated {resource_type.name}")
    click.echo(message)


@click.group(invoke_without_command=True, short_help="Replace a resource.")
@file_option
@click.pass_context
@handle_errors
def replace(ctx: click.Context, file_path: Optional[Path]) -> None:
    """
    Replace a resource from a file, or use a subcommand for one resource type.

    Examples:
        verifyctl replace -f apiclient.yaml
        verifyctl replace user --boilerplate
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
    if resource_type is None or resource_type.kind not in UPDATERS:
        raise InvalidInputError(f"unsupported resource kind '{kind}'")

    resource = parse_update_resource(document)
    replace_resource(ctx, resource_type, resource.data)


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
            echo_boilerplate(resource_type, resource_type.update_model.boilerplate())
            return

        data = read_resource_data(require_file(file_path), resource_type, update=True)
        replace_resource(ctx, resource_type, data)

    command.help = short_help
    return command


replace.add_command(_resource_command(USER, "Apply SCIM patch operations to a user."))
replace.add_command(_resource_command(GROUP, "Apply SCIM patch operations to a group."))
replace.add_command(_resource_command(APPLICATION, "Replace an application."))
replace.add_command(_resource_command(API_CLIENT, "Replace an API client."))
replace.add_command(_resource_command(ACCESS_POLICY, "Replace an access policy."))
replace.add_command(_resource_command(IDENTITY_SOURCE, "Replace an identity source."))
replace.add_command(_resource_command(IDENTITY_AGENT, "Replace an identity agent."))
replace.add_command(_resource_command(PERSONAL_CERT, "Replace a personal certificate."))
replace.add_command(_resource_command(PASSWORD_POLICY, "Replace a password policy."))
replace.add_command(_resource_command(ATTRIBUTE, "Replace an attribute."))
