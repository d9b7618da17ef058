"""Records outbound httpx calls into an EventAggregator."""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .aggregator import EventAggregator

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "api-key"}


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Replace the values of credential-bearing headers with [REDACTED]."""
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def decode_body(content: bytes) -> Optional[Any]:
    """Parse a body as JSON if possible, otherwise return it as text.

    Bytes that are not valid UTF-8 become U+FFFD replacement characters.
    """
    if not content:
        return None
    text = content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class ApiCallRecorder:
    """An httpx response hook that logs every completed call.

    Error responses are ordinary data here: a 404 is recorded with status 404
    and does not raise.

    Typical usage:
        client = ApiCallRecorder(aggregator).attach(httpx.Client(base_url=...))
        client.get("/systems")  # logged and surfaces the API tab
    """

    def __init__(self, aggregator: EventAggregator) -> None:
        self.aggregator = aggregator

    def attach(self, client: httpx.Client) -> httpx.Client:
        hooks = client.event_hooks
        hooks["response"] = [*hooks.get("response", []), self.on_response]
        client.event_hooks = hooks
        return client

    def on_response(self, response: httpx.Response) -> None:
        request = response.request
        response.read()
        request_payload = {
            "method": request.method,
            "headers": redact_headers(request.headers),
            "body": decode_body(request.content),
        }
        response_payload = {
            "status": response.status_code,
            "headers": redact_headers(response.headers),
            "body": decode_body(response.content),
        }
        self.aggregator.record_api_call(request.method, str(request.url), request_payload, response_payload)
