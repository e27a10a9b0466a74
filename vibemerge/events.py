from typing import Union

from pydantic import ValidationError

from vibemerge.errors import EventDecodeError
from vibemerge.models import ReactionEvent


def decode_reaction_event(payload: Union[str, bytes]) -> ReactionEvent:
    """
    Parse a relayed ``reaction_added`` envelope.

    Unknown fields are ignored and missing ones take empty defaults; only
    malformed JSON or a field of the wrong shape is rejected.
    """
    try:
        return ReactionEvent.model_validate_json(payload)
    except ValidationError as e:
        raise EventDecodeError(f"failed to decode reaction event: {e}") from e
