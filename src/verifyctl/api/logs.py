"""
Client for the tenant log query API.

Logs are read in ascending time order. A follow session keeps polling and
moves the window start past the last entry already returned.
"""

import logging
import time
from typing import Iterator, List, Optional

from verifyctl.api.base import JSON, ResourceClient
from verifyctl.errors import TransportError
from verifyctl.models.log import LogEntry, LogFilter, LogQuery, LogQueryResult

logger = logging.getLogger(__name__)

POLL_INTERVAL = 10
WINDOW_MS = 30 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


class LogsClient(ResourceClient):
    path = "v1.0/logs/query"

    def query_logs(self, query: LogQuery) -> LogQueryResult:
        """Run one log query."""
        response = self.http.post(
            self.base_url,
            headers=self._headers(content_type=JSON),
            body=self._dump(query),
        )
        self._check(response, "get logs")
        return self._parse_model(self._json(response, "get logs"), LogQueryResult)

    def tail(
        self,
        log_filter: Optional[LogFilter] = None,
        follow: bool = False,
        interval: float = POLL_INTERVAL,
        max_polls: Optional[int] = None,
    ) -> Iterator[List[LogEntry]]:
        """
        Yield batches of log entries, starting with the last 30 minutes.

        Args:
            log_filter: Matches applied to every query
            follow: Keep polling every ``interval`` seconds
            interval: Seconds between polls when following
            max_polls: Stop following after this many queries

        Yields:
            Non-empty lists of entries in ascending time order
        """
        end = now_ms()
        query = LogQuery(start=end - WINDOW_MS, end=end, filter=log_filter or LogFilter())
        polls = 0
        while True:
            polls += 1
            entries: List[LogEntry] = []
            try:
                entries = self.query_logs(query).logs
            except TransportError as e:
                if not follow:
                    raise
                logger.warning(f"unable to get logs; err={e}")

            if entries:
                yield entries
                query.start = entries[-1].timestamp + 1

            if not follow or (max_polls is not None and polls >= max_polls):
                return
            time.sleep(interval)
            query.end = now_ms()
