"""Application-level errors raised by use cases."""


class BoardDataUnavailableError(RuntimeError):
    """One of the board's input collections could not be fetched."""

    def __init__(self, collection: str):
        super().__init__(f"Failed to fetch {collection}")
        self.collection = collection
