from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ReactionItem(BaseModel):
    type: str = ""
    channel: str = ""
    ts: str = ""


class ReactionDetails(BaseModel):
    type: str = ""
    user: str = ""
    reaction: str = ""
    item: ReactionItem = ReactionItem()
    item_user: str = ""
    event_ts: str = ""


class Authorization(BaseModel):
    # passed through untouched, never inspected
    enterprise_id: Optional[Any] = None
    team_id: str = ""
    user_id: str = ""
    is_bot: bool = False
    is_enterprise_install: bool = False


class ReactionEvent(BaseModel):
    """Envelope relayed from the Slack Events API for ``reaction_added``."""

    token: str = ""
    team_id: str = ""
    context_team_id: str = ""
    context_enterprise_id: Optional[Any] = None
    api_app_id: str = ""
    event: ReactionDetails = ReactionDetails()
    type: str = ""
    event_id: str = ""
    event_time: int = 0
    authorizations: List[Authorization] = []
    is_ext_shared_channel: bool = False
    event_context: str = ""

    @property
    def reaction(self) -> str:
        return self.event.reaction

    @property
    def channel(self) -> str:
        return self.event.item.channel

    @property
    def ts(self) -> str:
        return self.event.item.ts


class PRMetadata(BaseModel):
    pr_number: int = 0
    repository: str = ""
    pr_url: str = ""
    author: str = ""
    branch: str = ""
    event_action: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("pr_number", mode="before")
    @classmethod
    def pr_number_is_json_number(cls, value):
        # "42" and true are not PR numbers; 42.0 is
        if isinstance(value, (bool, str)):
            raise ValueError("pr_number must be a number")
        return value

    def is_actionable(self) -> bool:
        return self.pr_number != 0 and self.repository != ""


class CommandPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    repo: str
    branch: str
    type: str
    dir: str
    commands: List[str]


class CleanupRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str
    ts: str
    ttl: int
