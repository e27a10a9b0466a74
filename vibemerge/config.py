import logging

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vibemerge.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    SLACK_BOT_TOKEN: str
    REDIS_ADDR: str = "localhost:6379"
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    WORK_DIR: str = "/tmp/vibemerge"
    TARGET_EMOJI: str = "heart_eyes_cat"
    TARGET_BRANCH: str = "refs/heads/main"
    POPPIT_QUEUE: str = "poppit-commands"
    TIMEBOMB_CHANNEL: str = "timebomb-messages"
    TIMEBOMB_TTL: int = 86400  # 24h
    REACTION_CHANNEL: str = "slack-relay-reaction-added"
    SLACK_API_URL: str = "https://slack.com/api"
    SLACK_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("SLACK_BOT_TOKEN")
    @classmethod
    def token_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("REDIS_DB", "TIMEBOMB_TTL", "SLACK_TIMEOUT", mode="before")
    @classmethod
    def fallback_on_bad_number(cls, value, info):
        default = cls.model_fields[info.field_name].default
        if isinstance(value, str):
            caster = float if isinstance(default, float) else int
            try:
                return caster(value.strip())
            except ValueError:
                # logging may not be configured yet; the last-resort handler still prints warnings
                logger.warning(
                    f"invalid value for {info.field_name}: {value}, using default: {default}"
                )
                return default
        return value


def load_settings(**overrides) -> Settings:
    try:
        return Settings(**overrides)
    except ValidationError as e:
        if any(err["loc"] == ("SLACK_BOT_TOKEN",) for err in e.errors()):
            raise ConfigurationError(
                "SLACK_BOT_TOKEN environment variable is required"
            ) from e
        raise ConfigurationError(f"invalid configuration: {e}") from e
