"""Request and response bodies of the tenant log query API."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from verifyctl.errors import InvalidInputError
from verifyctl.models.common import VerifyModel


class LogMatch(VerifyModel):
    key: str
    op: str = "eq"
    value: str


class LogFilter(VerifyModel):
    op: str = "AND"
    match: List[LogMatch] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        trace_id: Optional[str] = None,
        span_id: Optional[str] = None,
        severity: Optional[str] = None,
        custom: Optional[str] = None,
    ) -> "LogFilter":
        """
        Combine the filter flags into one AND filter.

        Args:
            trace_id: Match on ``traceID``
            span_id: Match on ``spanID``
            severity: Match on ``severity``
            custom: Extra matches written as ``key=value&key2=value2``

        Raises:
            InvalidInputError: when a custom pair is not a single ``key=value``
        """
        matches = []
        for key, value in (("traceID", trace_id), ("spanID", span_id), ("severity", severity)):
            if value:
                matches.append(LogMatch(key=key, value=value))

        if custom:
            for pair in custom.split("&"):
                parts = pair.split("=")
                if len(parts) != 2:
                    raise InvalidInputError("custom filter string is invalid.")
                matches.append(LogMatch(key=parts[0], value=parts[1]))

        return cls(match=matches)


class LogQuery(VerifyModel):
    """Body of ``POST /v1.0/logs/query``; times are epoch milliseconds."""

    limit: int = 500
    start: int
    end: int
    sort: str = "asc"
    filter: LogFilter = Field(default_factory=LogFilter)


class LogEntry(VerifyModel):
    timestamp: int
    trace_id: Optional[str] = Field(None, alias="traceID")
    span_id: Optional[str] = Field(None, alias="spanID")
    message: Optional[str] = None
    severity: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None


class LogQueryResult(VerifyModel):
    count: Optional[int] = None
    start: Optional[int] = None
    end: Optional[int] = None
    logs: List[LogEntry] = Field(default_factory=list)
