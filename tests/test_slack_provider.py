import httpx
import pytest

from vibemerge.errors import SlackAPIError
from vibemerge.providers.slack import SlackProvider


def make_provider(handler):
    return SlackProvider(
        "xoxb-test",
        api_url="https://slack.test/api/",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_conversation_history_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True, "messages": [{"ts": "1.0"}]})

    provider = make_provider(handler)
    try:
        messages = await provider.conversation_history("C0123", "1.0")
    finally:
        await provider.aclose()

    assert messages == [{"ts": "1.0"}]
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/conversations.history"
    assert request.headers["Authorization"] == "Bearer xoxb-test"
    assert dict(request.url.params) == {
        "channel": "C0123",
        "latest": "1.0",
        "limit": "1",
        "inclusive": "true",
        "include_all_metadata": "true",
    }


@pytest.mark.asyncio
async def test_missing_messages_key_is_empty_list():
    provider = make_provider(lambda request: httpx.Response(200, json={"ok": True}))
    try:
        assert await provider.conversation_history("C1", "1.0") == []
    finally:
        await provider.aclose()


@pytest.mark.asyncio
async def test_not_ok_response_raises_slack_error():
    provider = make_provider(
        lambda request: httpx.Response(200, json={"ok": False, "error": "not_in_channel"})
    )
    try:
        with pytest.raises(SlackAPIError) as exc_info:
            await provider.conversation_history("C1", "1.0")
    finally:
        await provider.aclose()
    assert exc_info.value.error == "not_in_channel"


@pytest.mark.asyncio
async def test_rate_limited_response_raises_http_error():
    provider = make_provider(
        lambda request: httpx.Response(429, headers={"Retry-After": "30"})
    )
    try:
        with pytest.raises(httpx.HTTPStatusError):
            await provider.conversation_history("C1", "1.0")
    finally:
        await provider.aclose()
