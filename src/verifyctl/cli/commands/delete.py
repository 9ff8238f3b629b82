"""Delete commands, one per resource type, each taking the identifier flag of its type."""

import logging
from typing import Optional

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
    echo_entitlements,
    entitlements_option,
    get_auth,
    get_http_client,
    handle_errors,
    identifier_requested,
)
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
)

logger = logging.getLogger(__name__)


def deleted(identifier: str) -> None:
    logger.info(f"Deleted {identifier}")
    click.echo(f"Resource deleted: {identifier}")


@click.group(short_help="Delete a resource.")
def delete() -> None:
    """
    Delete a resource identified by its name, label or ID.

    Examples:
        verifyctl delete user --userName bob
        verifyctl delete apiclient --clientID 1234
    """


@delete.command(name=USER.name, short_help="Delete a user.")
@click.option("--userName", "user_name", default=None, help="userName of the user to delete.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_user(ctx: click.Context, user_name: Optional[str], entitlements: bool) -> None:
    """Delete a user by userName."""
    if entitlements:
        echo_entitlements(USER)
        return
    identifier_requested(ctx, USER, userName=user_name)
    UserClient(get_auth(ctx), get_http_client(ctx)).delete_user(user_name)
    deleted(user_name)


@delete.command(name=GROUP.name, short_help="Delete a group.")
@click.option("--displayName", "display_name", default=None, help="displayName of the group.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_group(ctx: click.Context, display_name: Optional[str], entitlements: bool) -> None:
    """Delete a group by displayName."""
    if entitlements:
        echo_entitlements(GROUP)
        return
    identifier_requested(ctx, GROUP, displayName=display_name)
    GroupClient(get_auth(ctx), get_http_client(ctx)).delete_group(display_name)
    deleted(display_name)


@delete.command(name=APPLICATION.name, short_help="Delete an application.")
@click.option("--name", default=None, help="Name of the application.")
@click.option("--applicationID", "application_id", default=None, help="ID of the application.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_application(
    ctx: click.Context, name: Optional[str], application_id: Optional[str], entitlements: bool
) -> None:
    """Delete an application by name or ID."""
    if entitlements:
        echo_entitlements(APPLICATION)
        return
    identifier_requested(ctx, APPLICATION, name=name, applicationID=application_id)
    client = ApplicationClient(get_auth(ctx), get_http_client(ctx))
    client.delete_application(application_id or client.get_application_id(name))
    deleted(application_id or name)


@delete.command(name=API_CLIENT.name, short_help="Delete an API client.")
@click.option("--clientName", "client_name", default=None, help="clientName of the API client.")
@click.option("--clientID", "client_id", default=None, help="ID of the API client.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_api_client(
    ctx: click.Context, client_name: Optional[str], client_id: Optional[str], entitlements: bool
) -> None:
    """Delete an API client by clientName or ID."""
    if entitlements:
        echo_entitlements(API_CLIENT)
        return
    identifier_requested(ctx, API_CLIENT, clientName=client_name, clientID=client_id)
    client = APIClientClient(get_auth(ctx), get_http_client(ctx))
    if client_id:
        client.delete_api_client_by_id(client_id)
    else:
        client.delete_api_client(client_name)
    deleted(client_id or client_name)


@delete.command(name=ACCESS_POLICY.name, short_help="Delete an access policy.")
@click.option("--accesspolicyName", "policy_name", default=None, help="Name of the access policy.")
@click.option("--accessPolicyID", "policy_id", default=None, help="ID of the access policy.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_access_policy(
    ctx: click.Context, policy_name: Optional[str], policy_id: Optional[str], entitlements: bool
) -> None:
    """Delete an access policy by name or ID."""
    if entitlements:
        echo_entitlements(ACCESS_POLICY)
        return
    identifier_requested(
        ctx, ACCESS_POLICY, accesspolicyName=policy_name, accessPolicyID=policy_id
    )
    client = AccessPolicyClient(get_auth(ctx), get_http_client(ctx))
    if policy_id:
        client.delete_access_policy_by_id(policy_id)
    else:
        client.delete_access_policy(policy_name)
    deleted(policy_id or policy_name)


@delete.command(name=IDENTITY_SOURCE.name, short_help="Delete an identity source.")
@click.option("--instanceName", "instance_name", default=None, help="instanceName of the source.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_identity_source(
    ctx: click.Context, instance_name: Optional[str], entitlements: bool
) -> None:
    """Delete an identity source by instanceName."""
    if entitlements:
        echo_entitlements(IDENTITY_SOURCE)
        return
    identifier_requested(ctx, IDENTITY_SOURCE, instanceName=instance_name)
    IdentitySourceClient(get_auth(ctx), get_http_client(ctx)).delete_identity_source(instance_name)
    deleted(instance_name)


@delete.command(name=IDENTITY_AGENT.name, short_help="Delete an identity agent.")
@click.option("--identityAgentID", "agent_id", default=None, help="ID of the identity agent.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_identity_agent(ctx: click.Context, agent_id: Optional[str], entitlements: bool) -> None:
    if entitlements:
        echo_entitlements(IDENTITY_AGENT)
        return
    identifier_requested(ctx, IDENTITY_AGENT, identityAgentID=agent_id)
    IdentityAgentClient(get_auth(ctx), get_http_client(ctx)).delete_identity_agent(agent_id)
    deleted(agent_id)


@delete.command(name=PERSONAL_CERT.name, short_help="Delete a personal certificate.")
@click.option("--personalCertLabel", "label", default=None, help="Label of the certificate.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_personal_cert(ctx: click.Context, label: Optional[str], entitlements: bool) -> None:
    if entitlements:
        echo_entitlements(PERSONAL_CERT)
        return
    identifier_requested(ctx, PERSONAL_CERT, personalCertLabel=label)
    PersonalCertClient(get_auth(ctx), get_http_client(ctx)).delete_personal_cert(label)
    deleted(label)


@delete.command(name=SIGNER_CERT.name, short_help="Delete a signer certificate.")
@click.option("--signerCertLabel", "label", default=None, help="Label of the certificate.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_signer_cert(ctx: click.Context, label: Optional[str], entitlements: bool) -> None:
    if entitlements:
        echo_entitlements(SIGNER_CERT)
        return
    identifier_requested(ctx, SIGNER_CERT, signerCertLabel=label)
    SignerCertClient(get_auth(ctx), get_http_client(ctx)).delete_signer_cert(label)
    deleted(label)


@delete.command(name=PASSWORD_POLICY.name, short_help="Delete a password policy.")
@click.option("--passwordPolicyID", "policy_id", default=None, help="ID of the password policy.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_password_policy(ctx: click.Context, policy_id: Optional[str], entitlements: bool) -> None:
    if entitlements:
        echo_entitlements(PASSWORD_POLICY)
        return
    identifier_requested(ctx, PASSWORD_POLICY, passwordPolicyID=policy_id)
    PasswordPolicyClient(get_auth(ctx), get_http_client(ctx)).delete_password_policy(policy_id)
    deleted(policy_id)


@delete.command(name=ATTRIBUTE.name, short_help="Delete an attribute.")
@click.option("--id", "attribute_id", default=None, help="ID of the attribute.")
@entitlements_option
@click.pass_context
@handle_errors
def delete_attribute(ctx: click.Context, attribute_id: Optional[str], entitlements: bool) -> None:
    if entitlements:
        echo_entitlements(ATTRIBUTE)
        return
    identifier_requested(ctx, ATTRIBUTE, id=attribute_id)
    AttributeClient(get_auth(ctx), get_http_client(ctx)).delete_attribute(attribute_id)
    deleted(attribute_id)
