import json

import httpx
import pytest

from quotebuilder.mailer.domain.exceptions import EmailSendingException
from quotebuilder.mailer.infrastructure.function_client import HttpOrderEmailFunction

pytestmark = pytest.mark.asyncio

FUNCTION_URL = "https://functions.test/send-order-email"


def _function(handler) -> HttpOrderEmailFunction:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpOrderEmailFunction(FUNCTION_URL, client=client)


async def test_posts_camel_case_payload(casement_window):
    received = {}

    def handler(request: httpx.Request) -> httpx.Response:
        received.update(json.loads(request.content))
        return httpx.Response(200, json={"success": True})

    sent = await _function(handler).send_order("user-1", "builder@example.com", "Acme", "Job", [casement_window])

    assert sent is True
    assert received["userId"] == "user-1"
    assert received["userEmail"] == "builder@example.com"
    assert received["builderName"] == "Acme"
    assert received["items"][0]["subOption"] == "left"
    assert "openingPhoto" not in received["items"][0]


async def test_error_payload_returns_false(casement_window):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Server configuration error"})

    assert await _function(handler).send_order(None, "builder@example.com", "Acme", "Job", [casement_window]) is False


async def test_network_error_raises(casement_window):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(EmailSendingException):
        await _function(handler).send_order("user-1", "builder@example.com", "Acme", "Job", [casement_window])
