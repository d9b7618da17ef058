class TxnStudioException(Exception):
    """Base exception for all txn_studio errors."""

    pass


class StorageConfigurationError(TxnStudioException):
    """Exception raised when the storage backend configuration is invalid."""

    pass


class StoreError(TxnStudioException):
    """Base exception for transaction store errors."""

    pass


class DuplicateIdError(StoreError):
    """Exception raised when appending a snapshot whose id is already stored."""

    def __init__(self, snapshot_id: str):
        super().__init__(f"Transaction snapshot with id '{snapshot_id}' already exists")
        self.snapshot_id = snapshot_id


class MalformedSnapshotError(StoreError):
    """Exception raised when a persisted collection cannot be decoded.

    The store recovers from this locally by treating the collection as empty.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class ScenarioStateError(TxnStudioException):
    """Exception raised when a scenario run is reported out of order."""

    pass
