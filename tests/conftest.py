import os
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

import pytest
from txn_studio.event_log import EventAggregator
from txn_studio.models import TransactionSnapshot
from txn_studio.store import ChangeChannel, InMemoryStorage, TransactionStore


@pytest.fixture(autouse=True)
def restore_environment():
    """AUTOUSE: Restores os.environ after each test so settings getters see a clean environment."""
    original_environ = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_environ)


class FixedClock:
    """A clock that advances one second per call, starting at a fixed instant."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def aggregator(clock: FixedClock) -> EventAggregator:
    return EventAggregator(clock=clock)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def channel() -> ChangeChannel:
    return ChangeChannel()


@pytest.fixture
def store(storage: InMemoryStorage, channel: ChangeChannel):
    transaction_store = TransactionStore(storage, channel)
    yield transaction_store
    transaction_store.close()


def snapshot_document(
    snapshot_id: str = "tx-0001",
    edges: Optional[List[Dict[str, Any]]] = None,
    nodes: Optional[List[Dict[str, Any]]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """A saved transaction in the editor's camelCase document form."""
    document: Dict[str, Any] = {
        "id": snapshot_id,
        "transactionId": f"logical-{snapshot_id}",
        "sourceNode": "Gateway",
        "targetNode": "Billing",
        "status": "success",
        "timestamp": "2024-05-01T10:00:00.000Z",
        "request": {"method": "POST", "path": "/invoices", "headers": {"Content-Type": "application/json"}},
        "response": {"status": 201, "headers": {}, "body": {"id": 7}},
    }
    if edges is not None:
        node_list = nodes if nodes is not None else []
        document["selectedElements"] = {
            "nodeIds": [node["id"] for node in node_list],
            "edgeIds": [edge["id"] for edge in edges],
            "nodes": node_list,
            "edges": edges,
        }
    document.update(overrides)
    return document


@pytest.fixture
def make_snapshot() -> Callable[..., TransactionSnapshot]:
    def _make(snapshot_id: str = "tx-0001", **kwargs: Any) -> TransactionSnapshot:
        return TransactionSnapshot.model_validate(snapshot_document(snapshot_id, **kwargs))

    return _make


@pytest.fixture
def make_document() -> Callable[..., Dict[str, Any]]:
    return snapshot_document
