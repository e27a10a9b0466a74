import logging

import httpx

from vibemerge.errors import SlackAPIError
from vibemerge.providers.base import ChatProvider

logger = logging.getLogger(__name__)


class SlackProvider(ChatProvider):
    API = "https://slack.com/api"

    def __init__(
        self,
        token: str,
        api_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = (api_url or self.API).rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        # one client for the whole process, closed on shutdown
        self.client = httpx.AsyncClient(
            headers=self.headers,
            timeout=timeout,
            transport=transport,
        )

    async def conversation_history(
        self, channel, latest, limit=1, inclusive=True, include_all_metadata=True
    ):
        params = {
            "channel": channel,
            "latest": latest,
            "limit": limit,
            "inclusive": "true" if inclusive else "false",
            "include_all_metadata": "true" if include_all_metadata else "false",
        }
        url = f"{self.api_url}/conversations.history"
        logger.debug(f"GET {url} channel={channel} latest={latest}")

        r = await self.client.get(url, params=params)
        r.raise_for_status()
        data = r.json()

        if not data.get("ok"):
            raise SlackAPIError("conversations.history", data.get("error", "unknown_error"))

        return data.get("messages") or []

    async def aclose(self):
        await self.client.aclose()
