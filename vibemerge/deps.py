import redis.asyncio as redis

from vibemerge.config import Settings
from vibemerge.errors import ConfigurationError

DEFAULT_REDIS_PORT = 6379


def parse_redis_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.strip().rpartition(":")
    if not sep:
        return port or "localhost", DEFAULT_REDIS_PORT
    if not port:
        return host or "localhost", DEFAULT_REDIS_PORT
    try:
        return host or "localhost", int(port)
    except ValueError:
        raise ConfigurationError(f"invalid REDIS_ADDR: {addr}") from None


def create_redis_client(settings: Settings) -> redis.Redis:
    host, port = parse_redis_addr(settings.REDIS_ADDR)
    return redis.Redis(
        host=host,
        port=port,
        password=settings.REDIS_PASSWORD or None,
        db=settings.REDIS_DB,
        decode_responses=True,
        # undecodable bytes become U+FFFD and fail later as a bad event
        encoding_errors="replace",
    )
