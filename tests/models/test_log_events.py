import pytest
from pydantic import TypeAdapter, ValidationError
from txn_studio.models import ApiCallEvent, LogEvent, Severity, log_events


def _api_event(response):
    return ApiCallEvent(timestamp="2024-01-01T00:00:00+00:00", method="GET", url="/x", request={}, response=response)


@pytest.mark.parametrize(
    "response, expected",
    [
        ({"status": 200}, Severity.SUCCESS),
        ({"status": 204}, Severity.SUCCESS),
        ({"status": 302}, Severity.CAUTION),
        ({"status": 404}, Severity.ERROR),
        ({"status": 503}, Severity.ERROR),
        ({"status": 100}, Severity.NEUTRAL),
        ({"status": 600}, Severity.NEUTRAL),
        ({"status": "200"}, Severity.NEUTRAL),
        ({"status": True}, Severity.NEUTRAL),
        ({}, Severity.NEUTRAL),
        (None, Severity.NEUTRAL),
    ],
)
def test_api_call_severity(response, expected):
    assert _api_event(response).severity == expected


def test_api_call_event_is_frozen():
    event = _api_event({"status": 200})
    with pytest.raises(ValidationError):
        event.url = "/y"


def test_log_event_union_discriminates_on_kind():
    adapter = TypeAdapter(LogEvent)

    api = adapter.validate_python({"kind": "api_call", "timestamp": "t", "method": "GET", "url": "/a"})
    test = adapter.validate_python(
        {
            "kind": "test_run",
            "timestamp": "t",
            "scenario_id": "s",
            "scenario_run_id": "r",
            "content": "✓ step",
            "status": "running",
            "color": "#4caf50",
        }
    )

    assert isinstance(api, ApiCallEvent)
    assert isinstance(test, log_events.TestRunEvent)


def test_test_run_status_is_restricted():
    with pytest.raises(ValidationError):
        log_events.TestRunEvent(
            timestamp="t", scenario_id="s", scenario_run_id="r", content="c", status="passed", color="#fff"
        )


def test_details_summary_lines():
    details = log_events.TestRunDetails(
        error="status mismatch", expected=200, actual=404, suggestion="Check the path"
    )
    assert details.summary_lines() == [
        "Error: status mismatch",
        "Expected: 200",
        "Actual: 404",
        "Suggestion: Check the path",
    ]


def test_details_summary_skips_expected_without_actual():
    details = log_events.TestRunDetails(expected={"a": 1})
    assert details.summary_lines() == []
