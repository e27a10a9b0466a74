class ChatProvider:
    async def conversation_history(
        self, channel, latest, limit=1, inclusive=True, include_all_metadata=True
    ):
        raise NotImplementedError

    async def aclose(self):
        raise NotImplementedError
