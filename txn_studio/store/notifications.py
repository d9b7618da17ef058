"""Same-session change notification for persisted collections."""

from txn_studio.core.generic_events import Event

STORAGE_CHANGED = "storage_changed"


class ChangeChannel(Event[str]):
    """Broadcasts the key of a persisted collection whenever it is rewritten.

    Readers attached to the same storage register here and re-fetch when they
    see their key. Delivery is synchronous and best effort: a failing listener
    is logged and skipped. The channel gives no atomicity across writers; two
    writers that interleave read-modify-write cycles still overwrite each
    other (last write wins).
    """

    def __init__(self) -> None:
        super().__init__(STORAGE_CHANGED)

    def publish(self, key: str) -> None:
        self.dispatch(key)
