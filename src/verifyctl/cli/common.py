"""
Helpers shared by the verifyctl commands.

Commands never talk to ``CLIConfig`` or ``HttpClient`` directly; they go
through ``get_auth`` and ``get_http_client`` so tests can inject fakes via
``ctx.obj``.
"""

import functools
import logging
from pathlib import Path
from typing import Any, Optional

import click
from pydantic import BaseModel, ValidationError

from verifyctl.api.http_client import HttpClient
from verifyctl.cli.formatters import FORMATS, dump_yaml
from verifyctl.config.config import AuthConfig, CLIConfig, get_settings
from verifyctl.errors import InvalidInputError, VerifyCtlError
from verifyctl.models.common import FILE_CONTEXT
from verifyctl.models.registry import ResourceType, parse_resource, parse_update_resource
from verifyctl.models.resource import load_from_file, normalize_kind

logger = logging.getLogger(__name__)


class CommandError(click.UsageError):
    """Reports a failed command with its usage and exits with status 1."""

    exit_code = 1

    def __init__(self, message: str, ctx: Optional[click.Context] = None):
        super().__init__(message, ctx or click.get_current_context(silent=True))


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors using the field names found in resource files."""
    messages = []
    for item in error.errors():
        loc = [str(part) for part in item.get("loc", ())]
        if "data" in loc:
            loc = loc[loc.index("data") + 1 :]
        field = ".".join(loc)
        if item.get("type") == "missing":
            messages.append(f"'{field}' is required")
            continue
        message = item.get("msg", "")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages)


def handle_errors(func):
    """Turn verifyctl and validation errors into a usage error on stderr."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except VerifyCtlError as e:
            logger.debug(f"Command failed: {e!r}")
            raise CommandError(str(e)) from e
        except ValidationError as e:
            raise CommandError(format_validation_error(e)) from e

    return wrapper


def get_config_path(ctx: click.Context) -> Path:
    path = ctx.obj.get("config_path") if ctx.obj else None
    return Path(path) if path else get_settings().config_path


def load_config(ctx: click.Context) -> CLIConfig:
    return CLIConfig.load(get_config_path(ctx))


def get_auth(ctx: click.Context) -> AuthConfig:
    """Token of the current tenant; raises ``NoLoginSessionError`` when there is none."""
    return load_config(ctx).get_current_auth()


def get_http_client(ctx: click.Context) -> HttpClient:
    """HTTP client for this invocation, honouring ``VERIFY_HTTP_TIMEOUT``."""
    obj = ctx.obj or {}
    if obj.get("http_client") is not None:
        return obj["http_client"]
    settings = obj.get("settings") or get_settings()
    client = HttpClient(timeout=settings.http_timeout)
    ctx.ensure_object(dict)["http_client"] = client
    return client


def read_resource_data(path: Path, resource_type: ResourceType, update: bool = False) -> Any:
    """
    Read the payload of a resource file for one resource type.

    The file may hold a full envelope, whose ``kind`` must match the type, or
    just the resource data.

    Args:
        path: Resource file
        resource_type: Type the command works on
        update: Validate against the update model used by ``replace``

    Returns:
        The validated model
    """
    document = load_from_file(path)
    kind = document.get("kind")
    if kind is None:
        model = resource_type.update_model if update else resource_type.model
        return model.model_validate(document, context=FILE_CONTEXT)

    if normalize_kind(kind) != resource_type.kind:
        raise InvalidInputError(
            f"invalid resource kind '{kind}'; expected '{resource_type.kind}'"
        )
    parse = parse_update_resource if update else parse_resource
    return parse(document).data


def identifier_requested(
    ctx: click.Context, resource_type: ResourceType, **flags: Optional[str]
) -> bool:
    """
    Validate the identifier flags and decide between a single resource and a list.

    Args:
        ctx: Command context; invoking the singular command name requires an identifier
        resource_type: Type the command works on
        flags: Identifier flag values by their command line name

    Returns:
        True when a single resource is addressed
    """
    provided = [name for name, value in flags.items() if value]
    if len(provided) > 1:
        names = " or ".join(f"'{name}'" for name in flags)
        raise InvalidInputError(f"only one of {names} can be provided")

    single = ctx.info_name == resource_type.name
    if single and not provided:
        if len(flags) == 1:
            raise InvalidInputError(f"'{next(iter(flags))}' flag is required.")
        names = " or ".join(f"'{name}'" for name in flags)
        raise InvalidInputError(f"either {names} flag is required.")
    return single or bool(provided)


def echo_entitlements(resource_type: ResourceType) -> None:
    click.echo(resource_type.entitlements_message())


def echo_boilerplate(resource_type: ResourceType, data: BaseModel) -> None:
    click.echo(dump_yaml(resource_type.envelope(data)).rstrip("\n"))


def require_file(file_path: Optional[Path]) -> Path:
    if not file_path:
        raise InvalidInputError("The 'file' option is required if no other options are used.")
    return file_path


file_option = click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the file that contains the input data. JSON and YAML formats are "
    "supported; the file extension (json, yml or yaml) selects the parser.",
)

entitlements_option = click.option(
    "--entitlements",
    is_flag=True,
    help="List the entitlements needed on the login client for this resource. "
    "Other flags are ignored.",
)

boilerplate_option = click.option(
    "--boilerplate",
    is_flag=True,
    help="Print an empty resource file in YAML format.",
)


def output_options(func):
    """Add ``--output/-o`` and ``--outfile`` to a command."""
    func = click.option(
        "--outfile",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write the output to this file. The format follows the extension unless -o is given.",
    )(func)
    func = click.option(
        "--output",
        "-o",
        type=click.Choice(FORMATS, case_sensitive=False),
        default=None,
        help="Output format: yaml (default), json or raw.",
    )(func)
    return func
