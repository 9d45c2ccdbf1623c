class StoreError(RuntimeError):
    pass


class ConnectionFailure(StoreError):
    """
    The database file could not be created or opened.
    The message stays generic; the real reason is logged and chained.
    """

    def __init__(self, message: str = "Database connection failed. Please contact the administrator."):
        super().__init__(message)


class TransactionFailure(StoreError):
    """A statement inside a save failed and the whole transaction was rolled back."""
