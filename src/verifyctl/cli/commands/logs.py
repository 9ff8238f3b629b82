"""Print tenant logs, optionally following new entries as they arrive."""

import logging
from typing import Iterable, Optional

import click

from verifyctl.api.logs import LogsClient
from verifyctl.cli.common import entitlements_option, get_auth, get_http_client, handle_errors
from verifyctl.models.log import LogEntry, LogFilter
from verifyctl.models.registry import ENTITLEMENTS_MESSAGE

logger = logging.getLogger(__name__)

LOGS_ENTITLEMENTS = "Read trace logs (readTraceLogs)"
HEADER = ("Timestamp", "Trace ID", "Span ID", "Message", "Severity")


def _row(values: Iterable[Optional[object]]) -> str:
    return "\t".join("" if value is None else str(value) for value in values)


def echo_entries(entries: Iterable[LogEntry]) -> None:
    for entry in entries:
        click.echo(
            _row((entry.timestamp, entry.trace_id, entry.span_id, entry.message, entry.severity))
        )


@click.command(short_help="Print logs from your Verify tenant.")
@click.option(
    "--follow",
    "-f",
    is_flag=True,
    help="Keep printing new logs until the process is stopped, for example with Ctrl-C.",
)
@click.option("--filter", "filter_", default=None, help="Extra matches as 'key=value&key2=value2'.")
@click.option("--span", "span_id", default=None, help="spanID to match.")
@click.option("--trace", "trace_id", default=None, help="traceID to match.")
@click.option("--severity", "-s", default=None, help="Severity to match.")
@entitlements_option
@click.pass_context
@handle_errors
def logs(
    ctx: click.Context,
    follow: bool,
    filter_: Optional[str],
    span_id: Optional[str],
    trace_id: Optional[str],
    severity: Optional[str],
    entitlements: bool,
) -> None:
    """
    Print the logs of the last 30 minutes as tab separated columns.

    Examples:
        verifyctl logs --severity error
        verifyctl logs --trace 4bf92f3577b34da6 -f
        verifyctl logs --filter "component=oidc&tenantId=abc"
    """
    if entitlements:
        click.echo(f"{ENTITLEMENTS_MESSAGE}  {LOGS_ENTITLEMENTS}")
        return

    log_filter = LogFilter.build(
        trace_id=trace_id, span_id=span_id, severity=severity, custom=filter_
    )
    client = LogsClient(get_auth(ctx), get_http_client(ctx))

    printed = 0
    for entries in client.tail(log_filter, follow=follow):
        if not printed:
            click.echo(_row(HEADER))
        echo_entries(entries)
        printed += len(entries)
    logger.debug(f"Printed {printed} log entries")
