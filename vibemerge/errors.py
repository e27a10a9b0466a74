class VibeMergeError(Exception):
    """Base class for errors raised while relaying a reaction."""


class ConfigurationError(VibeMergeError):
    pass


class EventDecodeError(VibeMergeError):
    pass


class MetadataFetchError(VibeMergeError):
    pass


class SlackAPIError(MetadataFetchError):
    def __init__(self, method: str, error: str):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {error}")


class PublishError(VibeMergeError):
    pass
