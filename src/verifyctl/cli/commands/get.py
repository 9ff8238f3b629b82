"""
Get commands.

Every resource type is registered under its singular name, which fetches one
resource and requires an identifier flag, and its plural name, which lists
resources unless an identifier is given.
"""

import base64
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

import click

from verifyctl.api.access_policies import AccessPolicyClient
from verifyctl.api.api_clients import APIClientClient
from verifyctl.api.applications import ApplicationClient
from verifyctl.api.attributes import AttributeClient
from verifyctl.api.base import ListPage
from verifyctl.api.certificates import PersonalCertClient, SignerCertClient
from verifyctl.api.groups import GroupClient
from verifyctl.api.identity_agents import IdentityAgentClient
from verifyctl.api.identity_sources import IdentitySourceClient
from verifyctl.api.password_policies import PasswordPolicyClient
from verifyctl.api.themes import ThemeClient, unpack_zip
from verifyctl.api.users import UserClient
from verifyctl.cli.common import (
    echo_entitlements,
    entitlements_option,
    get_auth,
    get_http_client,
    handle_errors,
    identifier_requested,
    output_options,
)
from verifyctl.cli.formatters import OutputFormatter
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
    SIGNER_CERT,
    THEME,
    USER,
    ResourceType,
)
from verifyctl.models.resource import THEME_FILE_KIND, ResourceObject, ResourceObjectList

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def describe(resource_type: ResourceType, item: Any) -> Tuple[Optional[str], Optional[str]]:
    """UID and display name of a resource for the envelope metadata."""
    if resource_type is USER:
        return item.id, item.user_name
    if resource_type is GROUP:
        return item.id, item.display_name
    if resource_type is APPLICATION:
        return item.application_id, item.name
    if resource_type is API_CLIENT:
        return item.id or item.client_id, item.client_name
    if resource_type is IDENTITY_SOURCE:
        return item.id, item.instance_name
    if resource_type in (PERSONAL_CERT, SIGNER_CERT):
        return item.label, item.label
    if resource_type is PASSWORD_POLICY:
        return item.id, item.policy_name
    return _text(getattr(item, "id", None)), getattr(item, "name", None)


def output_resource(
    formatter: OutputFormatter, resource_type: ResourceType, item: Any, uri: str
) -> None:
    uid, name = describe(resource_type, item)
    envelope = resource_type.envelope(
        item, metadata={"UID": _text(uid), "name": name, "resourceUri": uri}
    )
    formatter.output(envelope, raw=item.to_dict())


def output_list(formatter: OutputFormatter, resource_type: ResourceType, page: ListPage) -> None:
    items = []
    for item in page.items:
        uid, name = describe(resource_type, item)
        items.append(resource_type.envelope(item, metadata={"UID": _text(uid), "name": name}))

    resource_list = ResourceObjectList(
        api_version=resource_type.api_version,
        metadata={
            "resourceUri": page.uri,
            "total": page.total,
            "limit": page.limit,
            "page": page.page,
            "count": page.count,
        },
        items=items,
    )
    formatter.output(resource_list, raw=page.raw)


def get_options(func):
    """Output and entitlement flags shared by every get command."""
    return entitlements_option(output_options(func))


sort_option = click.option("--sort", default=None, help="Sort expression passed to the API.")
search_option = click.option("--search", default=None, help="Search expression passed to the API.")
filter_option = click.option(
    "--filter", "filter_", default=None, help="SCIM filter expression passed to the API."
)
count_option = click.option("--count", default=None, help="Maximum number of results.")
page_option = click.option("--page", type=int, default=None, help="Page to return.")
limit_option = click.option("--limit", type=int, default=None, help="Results per page.")


@click.group(short_help="Get one resource or a list of resources.")
def get() -> None:
    """
    Display one or many resources.

    Examples:
        verifyctl get users --count 10
        verifyctl get user --userName bob -o json
        verifyctl get apiclient --clientName myclient --outfile client.yaml
    """


@click.command(short_help="Get a user or list users.")
@click.option("--userName", "user_name", default=None, help="userName of the user to get.")
@click.option("--sortBy", "sort_by", default=None, help="Attribute to sort the list by.")
@count_option
@filter_option
@click.option("--attributes", default=None, help="Comma separated attributes to return.")
@get_options
@click.pass_context
@handle_errors
def users(ctx, user_name, sort_by, count, filter_, attributes, output, outfile, entitlements) -> None:
    """Get a user by userName or list users."""
    if entitlements:
        echo_entitlements(USER)
        return
    single = identifier_requested(ctx, USER, userName=user_name)

    client = UserClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        user, uri = client.get_user(user_name)
        output_resource(formatter, USER, user, uri)
    else:
        page = client.list_users(sort_by=sort_by, count=count, filter=filter_, attributes=attributes)
        output_list(formatter, USER, page)


@click.command(short_help="Get a group or list groups.")
@click.option("--displayName", "display_name", default=None, help="displayName of the group to get.")
@click.option("--sortBy", "sort_by", default=None, help="Attribute to sort the list by.")
@count_option
@filter_option
@get_options
@click.pass_context
@handle_errors
def groups(ctx, display_name, sort_by, count, filter_, output, outfile, entitlements) -> None:
    """Get a group by displayName or list groups."""
    if entitlements:
        echo_entitlements(GROUP)
        return
    single = identifier_requested(ctx, GROUP, displayName=display_name)

    client = GroupClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        group, uri = client.get_group(display_name)
        output_resource(formatter, GROUP, group, uri)
    else:
        output_list(formatter, GROUP, client.list_groups(sort_by=sort_by, count=count, filter=filter_))


@click.command(short_help="Get an application or list applications.")
@click.option("--name", default=None, help="Name of the application to get.")
@search_option
@sort_option
@page_option
@limit_option
@get_options
@click.pass_context
@handle_errors
def applications(ctx, name, search, sort, page, limit, output, outfile, entitlements) -> None:
    """Get an application by name or list applications."""
    if entitlements:
        echo_entitlements(APPLICATION)
        return
    single = identifier_requested(ctx, APPLICATION, name=name)

    client = ApplicationClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        application, uri = client.get_application(name)
        output_resource(formatter, APPLICATION, application, uri)
    else:
        result = client.list_applications(search=search, sort=sort, page=page, limit=limit)
        output_list(formatter, APPLICATION, result)


@click.command(short_help="Get an API client or list API clients.")
@click.option("--clientName", "client_name", default=None, help="clientName to get details.")
@click.option("--clientID", "client_id", default=None, help="clientID to get details.")
@search_option
@sort_option
@page_option
@limit_option
@get_options
@click.pass_context
@handle_errors
def apiclients(ctx, client_name, client_id, search, sort, page, limit, output, outfile, entitlements) -> None:
    """Get an API client by name or ID, or list API clients."""
    if entitlements:
        echo_entitlements(API_CLIENT)
        return
    single = identifier_requested(ctx, API_CLIENT, clientName=client_name, clientID=client_id)

    client = APIClientClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        if client_id:
            api_client, uri = client.get_api_client_by_id(client_id)
        else:
            api_client, uri = client.get_api_client(client_name)
        output_resource(formatter, API_CLIENT, api_client, uri)
    else:
        result = client.list_api_clients(search=search, sort=sort, page=page, limit=limit)
        output_list(formatter, API_CLIENT, result)


@click.command(short_help="Get an access policy or list access policies.")
@click.option("--accesspolicyName", "policy_name", default=None, help="Name of the access policy to get.")
@click.option("--accessPolicyID", "policy_id", default=None, help="ID of the access policy to get.")
@search_option
@sort_option
@get_options
@click.pass_context
@handle_errors
def accesspolicies(ctx, policy_name, policy_id, search, sort, output, outfile, entitlements) -> None:
    """Get an access policy by name or ID, or list access policies."""
    if entitlements:
        echo_entitlements(ACCESS_POLICY)
        return
    single = identifier_requested(
        ctx, ACCESS_POLICY, accesspolicyName=policy_name, accessPolicyID=policy_id
    )

    client = AccessPolicyClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        if policy_id:
            policy, uri = client.get_access_policy_by_id(policy_id)
        else:
            policy, uri = client.get_access_policy(policy_name)
        output_resource(formatter, ACCESS_POLICY, policy, uri)
    else:
        output_list(formatter, ACCESS_POLICY, client.list_access_policies(search=search, sort=sort))


@click.command(short_help="Get an identity source or list identity sources.")
@click.option("--instanceName", "instance_name", default=None, help="instanceName of the identity source.")
@search_option
@sort_option
@count_option
@get_options
@click.pass_context
@handle_errors
def identitysources(ctx, instance_name, search, sort, count, output, outfile, entitlements) -> None:
    """Get an identity source by instanceName or list identity sources."""
    if entitlements:
        echo_entitlements(IDENTITY_SOURCE)
        return
    single = identifier_requested(ctx, IDENTITY_SOURCE, instanceName=instance_name)

    client = IdentitySourceClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        source, uri = client.get_identity_source(instance_name)
        output_resource(formatter, IDENTITY_SOURCE, source, uri)
    else:
        result = client.list_identity_sources(search=search, sort=sort, count=count)
        output_list(formatter, IDENTITY_SOURCE, result)


@click.command(short_help="Get an identity agent or list identity agents.")
@click.option("--identityAgentID", "agent_id", default=None, help="ID of the identity agent.")
@search_option
@sort_option
@count_option
@page_option
@limit_option
@get_options
@click.pass_context
@handle_errors
def identityagents(
    ctx, agent_id, search, sort, count, page, limit, output, outfile, entitlements
) -> None:
    """Get an identity agent by ID or list identity agents."""
    if entitlements:
        echo_entitlements(IDENTITY_AGENT)
        return
    single = identifier_requested(ctx, IDENTITY_AGENT, identityAgentID=agent_id)

    client = IdentityAgentClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        agent, uri = client.get_identity_agent(agent_id)
        output_resource(formatter, IDENTITY_AGENT, agent, uri)
    else:
        result = client.list_identity_agents(
            search=search, sort=sort, count=count, page=page, limit=limit
        )
        output_list(formatter, IDENTITY_AGENT, result)


@click.command(short_help="Get a personal certificate or list personal certificates.")
@click.option("--personalCertLabel", "label", default=None, help="Label of the certificate.")
@search_option
@sort_option
@get_options
@click.pass_context
@handle_errors
def personalcerts(ctx, label, search, sort, output, outfile, entitlements) -> None:
    """Get a personal certificate by label or list personal certificates."""
    if entitlements:
        echo_entitlements(PERSONAL_CERT)
        return
    single = identifier_requested(ctx, PERSONAL_CERT, personalCertLabel=label)

    client = PersonalCertClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        cert, uri = client.get_personal_cert(label)
        output_resource(formatter, PERSONAL_CERT, cert, uri)
    else:
        output_list(formatter, PERSONAL_CERT, client.list_personal_certs(search=search, sort=sort))


@click.command(short_help="Get a signer certificate or list signer certificates.")
@click.option("--signerCertLabel", "label", default=None, help="Label of the certificate.")
@search_option
@sort_option
@get_options
@click.pass_context
@handle_errors
def signercerts(ctx, label, search, sort, output, outfile, entitlements) -> None:
    """Get a signer certificate by label or list signer certificates."""
    if entitlements:
        echo_entitlements(SIGNER_CERT)
        return
    single = identifier_requested(ctx, SIGNER_CERT, signerCertLabel=label)

    client = SignerCertClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        cert, uri = client.get_signer_cert(label)
        output_resource(formatter, SIGNER_CERT, cert, uri)
    else:
        output_list(formatter, SIGNER_CERT, client.list_signer_certs(search=search, sort=sort))


@click.command(short_help="Get a password policy or list password policies.")
@click.option("--passwordPolicyID", "policy_id", default=None, help="ID of the password policy.")
@filter_option
@sort_option
@count_option
@get_options
@click.pass_context
@handle_errors
def passwordpolicies(ctx, policy_id, filter_, sort, count, output, outfile, entitlements) -> None:
    """Get a password policy by ID or list password policies."""
    if entitlements:
        echo_entitlements(PASSWORD_POLICY)
        return
    single = identifier_requested(ctx, PASSWORD_POLICY, passwordPolicyID=policy_id)

    client = PasswordPolicyClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        policy, uri = client.get_password_policy(policy_id)
        output_resource(formatter, PASSWORD_POLICY, policy, uri)
    else:
        result = client.list_password_policies(filter=filter_, sort=sort, count=count)
        output_list(formatter, PASSWORD_POLICY, result)


@click.command(short_help="Get an attribute or list attributes.")
@click.option("--id", "attribute_id", default=None, help="ID of the attribute to get.")
@search_option
@sort_option
@page_option
@limit_option
@get_options
@click.pass_context
@handle_errors
def attributes(ctx, attribute_id, search, sort, page, limit, output, outfile, entitlements) -> None:
    """Get an attribute by ID or list attributes."""
    if entitlements:
        echo_entitlements(ATTRIBUTE)
        return
    single = identifier_requested(ctx, ATTRIBUTE, id=attribute_id)

    client = AttributeClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if single:
        attribute, uri = client.get_attribute(attribute_id)
        output_resource(formatter, ATTRIBUTE, attribute, uri)
    else:
        result = client.list_attributes(search=search, sort=sort, page=page, limit=limit)
        output_list(formatter, ATTRIBUTE, result)


@click.command(short_help="Get a theme, one template file, or list themes.")
@click.option("--id", "theme_id", default=None, help="ID of the theme to get.")
@click.option(
    "--customizedOnly",
    "customized_only",
    is_flag=True,
    help="Only include customized template files in a theme download.",
)
@click.option("--unpack", is_flag=True, help="Uncompress the downloaded theme into --dir.")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory the theme is unpacked into.",
)
@click.option(
    "--template",
    "-T",
    "template",
    default=None,
    help="Template path including the locale, for example "
    "'authentication/oidc/consent/default/user_consent.html'.",
)
@count_option
@page_option
@limit_option
@get_options
@click.pass_context
@handle_errors
def themes(
    ctx,
    theme_id,
    customized_only,
    unpack,
    directory,
    template,
    count,
    page,
    limit,
    output,
    outfile,
    entitlements,
) -> None:
    """
    Get a theme or list themes.

    A single theme is downloaded as a zip archive. In yaml and json output the
    archive is base64 encoded; raw output writes the bytes unchanged.
    """
    if entitlements:
        echo_entitlements(THEME)
        return
    single = identifier_requested(ctx, THEME, id=theme_id)
    if single and unpack and not directory:
        raise InvalidInputError("'dir' flag is required when 'unpack' flag is used.")

    client = ThemeClient(get_auth(ctx), get_http_client(ctx))
    formatter = OutputFormatter(output, outfile)
    if not single:
        output_list(formatter, THEME, client.list_themes(count=count, page=page, limit=limit))
        return

    kind = THEME.kind
    if template:
        content, uri = client.get_file(theme_id, template)
        kind = THEME_FILE_KIND
    else:
        content, uri = client.get_theme(theme_id, customized_only=customized_only)
        if unpack:
            unpack_zip(content, directory)
            logger.info(f"Theme {theme_id} unpacked into {directory}")
            return

    if formatter.raw:
        formatter.output_bytes(content)
        return

    envelope = ResourceObject(
        kind=kind,
        api_version=THEME.api_version,
        metadata={"UID": theme_id, "resourceUri": uri},
        data=base64.b64encode(content).decode("ascii"),
    )
    formatter.output(envelope)


for _resource_type, _command in (
    (USER, users),
    (GROUP, groups),
    (APPLICATION, applications),
    (API_CLIENT, apiclients),
    (ACCESS_POLICY, accesspolicies),
    (IDENTITY_SOURCE, identitysources),
    (IDENTITY_AGENT, identityagents),
    (PERSONAL_CERT, personalcerts),
    (SIGNER_CERT, signercerts),
    (PASSWORD_POLICY, passwordpolicies),
    (ATTRIBUTE, attributes),
    (THEME, themes),
):
    get.add_command(_command, name=_resource_type.name)
    get.add_command(_command, name=_resource_type.plural)
