import asyncio
import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from vibemerge.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # keep the developer's environment and .env out of the tests
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    logging.getLogger("vibemerge").setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    return Settings(SLACK_BOT_TOKEN="xoxb-test", _env_file=None)


def reaction_payload(reaction="heart_eyes_cat", channel="C0123", ts="1700000000.000100"):
    return json.dumps({
        "token": "verification",
        "team_id": "T01",
        "context_enterprise_id": None,
        "api_app_id": "A01",
        "event": {
            "type": "reaction_added",
            "user": "U01",
            "reaction": reaction,
            "item": {"type": "message", "channel": channel, "ts": ts},
            "item_user": "U02",
            "event_ts": "1700000001.000200",
        },
        "type": "event_callback",
        "event_id": "Ev01",
        "event_time": 1700000001,
        "authorizations": [
            {"enterprise_id": None, "team_id": "T01", "user_id": "U03", "is_bot": True}
        ],
    })


def pr_message(pr_number=42, repository="org/repo", event_action="opened", **extra):
    payload = {
        "pr_number": pr_number,
        "repository": repository,
        "pr_url": f"https://github.com/{repository}/pull/{pr_number}",
        "author": "octocat",
        "branch": "feature/thing",
        "event_action": event_action,
        **extra,
    }
    return {
        "type": "message",
        "ts": "1700000000.000100",
        "text": "PR opened",
        "metadata": {"event_type": "github_pr", "event_payload": payload},
    }


def pubsub_message(data):
    return {"type": "message", "pattern": None, "channel": "slack-relay-reaction-added", "data": data}


class FakeProvider:
    def __init__(self, messages=None, error=None):
        self.messages = messages if messages is not None else [pr_message()]
        self.error = error
        self.calls = []

    async def conversation_history(
        self, channel, latest, limit=1, inclusive=True, include_all_metadata=True
    ):
        self.calls.append((channel, latest, limit, inclusive, include_all_metadata))
        if self.error is not None:
            raise self.error
        return self.messages

    async def aclose(self):
        pass


def make_redis(received=()):
    """
    Redis client mock whose pub/sub yields ``received`` and is then cancelled.

    Items may be message dicts, None, or exceptions to raise from get_message.
    """
    pubsub = MagicMock()
    pubsub.subscribe = AsyncMock(return_value=None)
    pubsub.aclose = AsyncMock(return_value=None)
    pubsub.get_message = AsyncMock(side_effect=[*received, asyncio.CancelledError()])

    client = MagicMock()
    client.pubsub = MagicMock(return_value=pubsub)
    client.ping = AsyncMock(return_value=True)
    client.rpush = AsyncMock(return_value=1)
    client.publish = AsyncMock(return_value=1)
    client.aclose = AsyncMock(return_value=None)
    return client
