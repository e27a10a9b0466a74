import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from vibemerge.builders import build_cleanup_request, build_command_payload
from vibemerge.config import Settings
from vibemerge.errors import PublishError, VibeMergeError
from vibemerge.events import decode_reaction_event
from vibemerge.metadata import get_message_metadata
from vibemerge.providers.base import ChatProvider


class ReactionRelay:
    """
    Turns reactions on PR notification messages into merge commands.

    Messages from the reaction channel are handled one at a time, in the
    order Redis delivers them. A failure only drops the message at hand.
    """

    def __init__(
        self,
        redis_client: Redis,
        provider: ChatProvider,
        settings: Settings,
        logger: Optional[logging.Logger] = None,
    ):
        self.redis = redis_client
        self.provider = provider
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)

    async def run(self):
        channel = self.settings.REACTION_CHANNEL
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(channel)
            self.logger.info(f"Subscribed to {channel} channel")

            while True:
                try:
                    message = await pubsub.get_message(
                        ignore_subscribe_messages=True, timeout=None
                    )
                except RedisError as e:
                    self.logger.error(f"Error receiving message: {e}")
                    continue

                if message is None or message.get("type") != "message":
                    continue

                await self.process(message["data"])
        finally:
            await pubsub.aclose()
            self.logger.info(f"Unsubscribed from {channel} channel")

    async def process(self, payload) -> bool:
        try:
            return await self.handle_reaction_message(payload)
        except VibeMergeError as e:
            self.logger.error(f"Error handling reaction message: {e}")
        except Exception:
            self.logger.exception("Unexpected error handling reaction message")
        return False

    async def handle_reaction_message(self, payload) -> bool:
        event = decode_reaction_event(payload)

        if event.reaction != self.settings.TARGET_EMOJI:
            self.logger.debug(f"Ignoring reaction: {event.reaction}")
            return False

        self.logger.info(
            f"Processing {self.settings.TARGET_EMOJI} reaction on message "
            f"{event.ts} in channel {event.channel}"
        )

        metadata = await get_message_metadata(self.provider, event.channel, event.ts)
        if metadata is None:
            self.logger.debug("No PR metadata found in message, ignoring")
            return False

        self.logger.info(
            f"Found PR metadata: repo={metadata.repository}, pr={metadata.pr_number}"
        )

        command = build_command_payload(
            metadata,
            branch=self.settings.TARGET_BRANCH,
            work_dir=self.settings.WORK_DIR,
        )
        queue = self.settings.POPPIT_QUEUE
        try:
            await self.redis.rpush(queue, command.model_dump_json())
        except RedisError as e:
            raise PublishError(f"failed to push to {queue}: {e}") from e

        self.logger.info(
            f"Successfully queued merge command for PR {metadata.pr_number} "
            f"in {metadata.repository}"
        )

        try:
            await self.publish_cleanup(event.channel, event.ts)
        except PublishError as e:
            # the merge command is already queued
            self.logger.warning(f"Failed to set TTL on message: {e}")

        return True

    async def publish_cleanup(self, channel: str, ts: str):
        request = build_cleanup_request(channel, ts, self.settings.TIMEBOMB_TTL)
        target = self.settings.TIMEBOMB_CHANNEL
        try:
            await self.redis.publish(target, request.model_dump_json())
        except RedisError as e:
            raise PublishError(f"failed to publish to {target}: {e}") from e

        self.logger.info(
            f"Successfully set TTL of {request.ttl} seconds on message {ts} "
            f"in channel {channel}"
        )
