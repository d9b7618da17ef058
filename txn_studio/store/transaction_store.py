import json
import logging
import uuid
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from txn_studio.exceptions import DuplicateIdError, MalformedSnapshotError
from txn_studio.models import TransactionSnapshot
from txn_studio.settings import DEFAULT_TRANSACTIONS_KEY

from .notifications import ChangeChannel
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

_snapshot_list_adapter = TypeAdapter(List[TransactionSnapshot])


def decode_collection(document: Optional[str], key: str = DEFAULT_TRANSACTIONS_KEY) -> List[TransactionSnapshot]:
    """Parse a persisted collection document.

    A missing document decodes to an empty list.

    Raises:
        MalformedSnapshotError: If the document is not a JSON list of valid snapshot records.
    """
    if document is None or not document.strip():
        return []
    try:
        raw = json.loads(document)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError(f"Collection '{key}' is not valid JSON: {e}", key=key) from e
    if not isinstance(raw, list):
        raise MalformedSnapshotError(
            f"Collection '{key}' must be a JSON list, got {type(raw).__name__}", key=key
        )
    try:
        return _snapshot_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise MalformedSnapshotError(
            f"Collection '{key}' contains invalid records: {e.error_count()} error(s)", key=key
        ) from e


def encode_collection(snapshots: Sequence[TransactionSnapshot]) -> str:
    """Serialize the whole collection as one JSON document."""
    return json.dumps([snapshot.to_document() for snapshot in snapshots])


class TransactionStore:
    """The ordered collection of saved transaction snapshots.

    Every mutation re-reads the persisted collection, rewrites it in full and
    publishes the collection key on the change channel. Other stores attached
    to the same storage and channel reload when they see the key. Concurrent
    writers are last-write-wins.

    Args:
        storage: Where the collection document lives.
        channel: Change channel shared by every reader of `storage`.
        key: Storage key of the collection.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        channel: ChangeChannel,
        key: str = DEFAULT_TRANSACTIONS_KEY,
    ) -> None:
        self._storage = storage
        self._channel = channel
        self._key = key
        self._listener_name = f"transaction_store:{uuid.uuid4().hex}"
        self._snapshots: List[TransactionSnapshot] = self._load()
        self._channel.register(self._listener_name, self._on_storage_changed)
        self._closed = False

    @property
    def key(self) -> str:
        return self._key

    def _load(self) -> List[TransactionSnapshot]:
        try:
            return decode_collection(self._storage.get(self._key), key=self._key)
        except MalformedSnapshotError as e:
            logger.warning(f"Treating collection '{self._key}' as empty: {e}")
            return []

    def _persist(self, snapshots: List[TransactionSnapshot]) -> None:
        self._storage.set(self._key, encode_collection(snapshots))
        self._snapshots = snapshots
        self._channel.publish(self._key)

    def _on_storage_changed(self, event_type: str, key: str) -> None:
        if key == self._key:
            self.reload()

    def reload(self) -> None:
        """Re-read the collection from storage."""
        self._snapshots = self._load()
        logger.debug(f"Reloaded collection '{self._key}': {len(self._snapshots)} snapshot(s)")

    def append(self, snapshot: TransactionSnapshot) -> None:
        """Add a snapshot at the end of the collection.

        Raises:
            DuplicateIdError: If a snapshot with the same id is already stored.
        """
        snapshots = self._load()
        if any(existing.id == snapshot.id for existing in snapshots):
            raise DuplicateIdError(snapshot.id)
        self._persist(snapshots + [snapshot])
        logger.info(f"Saved transaction {snapshot.id} ({snapshot.request.method} {snapshot.request.path})")

    def list(self) -> List[TransactionSnapshot]:
        """Return all snapshots in insertion order."""
        return list(self._snapshots)

    def get(self, snapshot_id: str) -> Optional[TransactionSnapshot]:
        for snapshot in self._snapshots:
            if snapshot.id == snapshot_id:
                return snapshot
        return None

    def delete(self, snapshot_id: str) -> None:
        """Remove the snapshot with `snapshot_id`; unknown ids are ignored."""
        snapshots = self._load()
        remaining = [snapshot for snapshot in snapshots if snapshot.id != snapshot_id]
        if len(remaining) == len(snapshots):
            logger.debug(f"Delete ignored: no transaction with id {snapshot_id}")
            return
        self._persist(remaining)
        logger.info(f"Deleted transaction {snapshot_id}")

    def close(self) -> None:
        """Stop listening for change notifications."""
        if self._closed:
            return
        self._channel.unregister(self._listener_name)
        self._closed = True
