import json

import httpx
import pytest

from services.valuation import (
    FormValidationError,
    ValuationAPIError,
    ValuationClient,
    to_request_payload,
)

API_URL = "https://valuation.example.test/analysis"


def _client(handler):
    return ValuationClient(API_URL, timeout=5, transport=httpx.MockTransport(handler))


def test_payload_divides_percentages_only():
    payload = to_request_payload(
        {"gross_yield": 8, "interest_rate": 2.5, "total_price": 100000000, "structure": "木造(W)", "sale_expenses": None}
    )

    assert payload == {
        "gross_yield": pytest.approx(0.08),
        "interest_rate": pytest.approx(0.025),
        "total_price": 100000000,
        "structure": "木造(W)",
    }


def test_submit_posts_wire_payload_and_echoes_conditions(sample_values):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"internal_rate_of_return": 0.051, "payback_period": 12.5})

    result = _client(handler).submit(sample_values)

    body = captured["body"]
    assert captured["url"] == API_URL
    assert body["gross_yield"] == pytest.approx(0.08)
    assert body["vacancy_rate"] == pytest.approx(0.05)
    assert body["expected_rate_of_return"] == pytest.approx(0.03)
    assert body["total_price"] == 100000000
    assert body["purchase_date"] == "2025-01-01"
    assert body["owner_type"] == "個人"
    assert result["conditions"] == body
    assert result["internal_rate_of_return"] == pytest.approx(0.051)


def test_invalid_form_is_not_sent(sample_values):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    del sample_values["total_price"]

    with pytest.raises(FormValidationError) as excinfo:
        _client(handler).submit(sample_values)

    assert calls == []
    assert any(issue.field == "total_price" for issue in excinfo.value.issues)


def test_http_error_status_is_reported(sample_values):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(ValuationAPIError) as excinfo:
        _client(handler).submit(sample_values)

    assert str(excinfo.value) == "API Error: 500 - Internal Server Error"
    assert excinfo.value.status_code == 500


def test_network_error_is_reported(sample_values):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ValuationAPIError, match="Network Error"):
        _client(handler).submit(sample_values)


def test_non_json_body_is_reported(sample_values):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(ValuationAPIError, match="Failed to analyze real estate data"):
        _client(handler).submit(sample_values)
