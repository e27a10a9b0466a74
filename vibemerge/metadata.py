import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from vibemerge.errors import MetadataFetchError
from vibemerge.models import PRMetadata
from vibemerge.providers.base import ChatProvider

logger = logging.getLogger(__name__)


async def get_message_metadata(
    provider: ChatProvider, channel: str, ts: str
) -> Optional[PRMetadata]:
    """
    Look up the message at ``ts`` and return its PR metadata.

    Returns None when the message carries no metadata, or metadata without
    a PR number and repository. Raises MetadataFetchError when Slack cannot
    be reached, the message is gone, or the payload has the wrong shape.
    """
    try:
        messages = await provider.conversation_history(
            channel,
            ts,
            limit=1,
            inclusive=True,
            include_all_metadata=True,
        )
    except (httpx.HTTPError, ValueError) as e:
        raise MetadataFetchError(f"failed to get conversation history: {e}") from e

    if not messages:
        raise MetadataFetchError(f"no message found at timestamp {ts}")

    metadata = messages[0].get("metadata") or {}
    if not metadata.get("event_type"):
        return None

    payload = metadata.get("event_payload")
    if payload is None:
        payload = {}

    try:
        pr = PRMetadata.model_validate(payload)
    except ValidationError as e:
        raise MetadataFetchError(f"failed to decode PR metadata: {e}") from e

    if not pr.is_actionable():
        return None

    return pr
