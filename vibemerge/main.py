import asyncio
import logging
import signal
import sys
from typing import Optional

from redis.exceptions import RedisError

from vibemerge.config import Settings, load_settings
from vibemerge.deps import create_redis_client
from vibemerge.errors import ConfigurationError
from vibemerge.logging_config import configure_logging
from vibemerge.providers.slack import SlackProvider
from vibemerge.relay import ReactionRelay

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def serve(
    settings: Settings,
    logger: logging.Logger,
    stop: Optional[asyncio.Event] = None,
) -> int:
    """Run the relay until a shutdown signal arrives. Returns the exit code."""
    try:
        redis_client = create_redis_client(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    try:
        await redis_client.ping()
    except (RedisError, OSError) as e:
        logger.error(f"Failed to connect to Redis: {e}")
        await redis_client.aclose()
        return 1
    logger.info("Connected to Redis successfully")

    provider = SlackProvider(
        settings.SLACK_BOT_TOKEN,
        api_url=settings.SLACK_API_URL,
        timeout=settings.SLACK_TIMEOUT,
    )
    relay = ReactionRelay(redis_client, provider, settings, logger=logger)

    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in SHUTDOWN_SIGNALS:
        loop.add_signal_handler(sig, stop.set)

    relay_task = asyncio.create_task(relay.run(), name="reaction-relay")
    stop_task = asyncio.create_task(stop.wait(), name="shutdown-signal")
    exit_code = 0
    try:
        done, _ = await asyncio.wait(
            {relay_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if relay_task in done:
            exit_code = 1
            error = relay_task.exception()
            if error is not None:
                logger.error(f"Reaction relay stopped: {error!r}")
            else:
                logger.error("Reaction relay stopped unexpectedly")
        else:
            logger.info("Shutdown signal received, exiting...")
    finally:
        for sig in SHUTDOWN_SIGNALS:
            loop.remove_signal_handler(sig)
        for task in (relay_task, stop_task):
            task.cancel()
        await asyncio.gather(relay_task, stop_task, return_exceptions=True)
        await provider.aclose()
        await redis_client.aclose()

    return exit_code


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging().error(str(e))
        return 1

    logger = configure_logging(settings.LOG_LEVEL)
    return asyncio.run(serve(settings, logger))


if __name__ == "__main__":
    sys.exit(main())
