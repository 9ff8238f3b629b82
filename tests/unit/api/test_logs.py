"""Tests for the log query client and filter building."""

from unittest.mock import patch

import pytest

from verifyctl.api.logs import WINDOW_MS, LogsClient
from verifyctl.errors import InvalidInputError, LoginRequiredError, TransportError
from verifyctl.models.log import LogEntry, LogFilter, LogQueryResult

LOGS_URL = "https://abc.verify.ibm.com/v1.0/logs/query"
NOW = 1_700_000_000_000


def log_page(*timestamps):
    return {
        "count": len(timestamps),
        "logs": [
            {
                "timestamp": ts,
                "traceID": "t1",
                "spanID": "s1",
                "message": f"m{ts}",
                "severity": "info",
            }
            for ts in timestamps
        ],
    }


class TestLogFilter:
    def test_flags_in_order(self):
        log_filter = LogFilter.build(trace_id="t", span_id="s", severity="error")

        assert log_filter.to_dict() == {
            "op": "AND",
            "match": [
                {"key": "traceID", "op": "eq", "value": "t"},
                {"key": "spanID", "op": "eq", "value": "s"},
                {"key": "severity", "op": "eq", "value": "error"},
            ],
        }

    def test_custom_pairs_follow_flags(self):
        log_filter = LogFilter.build(severity="warn", custom="component=oidc&tenant=abc")

        assert [(m.key, m.value) for m in log_filter.match] == [
            ("severity", "warn"),
            ("component", "oidc"),
            ("tenant", "abc"),
        ]

    def test_empty_value_is_allowed(self):
        assert LogFilter.build(custom="component=").match[0].value == ""

    @pytest.mark.parametrize("custom", ["component", "a=b=c", "a=b&", "a=b&&c=d"])
    def test_invalid_custom_filter(self, custom):
        with pytest.raises(InvalidInputError, match="custom filter string is invalid."):
            LogFilter.build(custom=custom)

    def test_no_matches(self):
        assert LogFilter.build().to_dict() == {"op": "AND", "match": []}


class TestLogsClient:
    def test_query_body_and_headers(self, auth_config, fake_http):
        fake_http.queue(200, log_page(5, 6))

        with patch("verifyctl.api.logs.now_ms", return_value=NOW):
            batches = list(LogsClient(auth_config, fake_http).tail(LogFilter.build(severity="error")))

        call = fake_http.calls[0]
        assert call.method == "POST"
        assert call.url == LOGS_URL
        assert call.headers["Authorization"] == "Bearer token-123"
        assert call.headers["Accept"] == "application/json"
        assert call.json == {
            "limit": 500,
            "start": NOW - WINDOW_MS,
            "end": NOW,
            "sort": "asc",
            "filter": {"op": "AND", "match": [{"key": "severity", "op": "eq", "value": "error"}]},
        }
        assert [[entry.timestamp for entry in batch] for batch in batches] == [[5, 6]]
        assert batches[0][0].trace_id == "t1"

    def test_without_follow_queries_once(self, auth_config, fake_http):
        fake_http.queue(200, {"count": 0, "logs": []})

        with patch("verifyctl.api.logs.time.sleep") as sleep:
            batches = list(LogsClient(auth_config, fake_http).tail())

        assert batches == []
        assert len(fake_http.calls) == 1
        sleep.assert_not_called()

    def test_follow_moves_the_window(self, auth_config, fake_http):
        fake_http.queue(200, log_page(100, 200))
        fake_http.queue(200, {"logs": []})
        fake_http.queue(200, log_page(300))

        with patch("verifyctl.api.logs.time.sleep") as sleep, patch(
            "verifyctl.api.logs.now_ms", side_effect=[NOW, NOW + 10, NOW + 20]
        ):
            batches = list(
                LogsClient(auth_config, fake_http).tail(follow=True, interval=10, max_polls=3)
            )

        assert [[entry.timestamp for entry in batch] for batch in batches] == [[100, 200], [300]]
        assert [call.json["start"] for call in fake_http.calls] == [NOW - WINDOW_MS, 201, 201]
        assert [call.json["end"] for call in fake_http.calls] == [NOW, NOW + 10, NOW + 20]
        assert sleep.call_count == 2
        sleep.assert_called_with(10)

    def test_follow_survives_transport_errors(self, auth_config, fake_http):
        client = LogsClient(auth_config, fake_http)
        results = [
            TransportError("connection reset"),
            LogQueryResult(logs=[LogEntry(timestamp=7)]),
        ]

        with patch.object(client, "query_logs", side_effect=results), patch(
            "verifyctl.api.logs.time.sleep"
        ):
            batches = list(client.tail(follow=True, max_polls=2))

        assert [entry.timestamp for entry in batches[0]] == [7]

    def test_transport_error_without_follow(self, auth_config, fake_http):
        client = LogsClient(auth_config, fake_http)

        with patch.object(client, "query_logs", side_effect=TransportError("down")):
            with pytest.raises(TransportError):
                list(client.tail())

    def test_api_errors_stop_following(self, auth_config, fake_http):
        fake_http.queue(401)

        with patch("verifyctl.api.logs.time.sleep"):
            with pytest.raises(LoginRequiredError):
                list(LogsClient(auth_config, fake_http).tail(follow=True))
