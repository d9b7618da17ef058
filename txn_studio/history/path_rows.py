"""Per-edge "path" rows derived from a saved transaction's graph snapshot."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from txn_studio.models import GraphEdge, SelectedElements, Severity, TransactionSnapshot

logger = logging.getLogger(__name__)

_STATUS_SEVERITIES = {
    "success": Severity.SUCCESS,
    "failed": Severity.ERROR,
    "error": Severity.ERROR,
    "pending": Severity.CAUTION,
    "running": Severity.INFO,
}


@dataclass(frozen=True)
class PathRow:
    """One display row of a transaction's traversal.

    Attributes:
        id: `<transaction id>-<edge id>`, or `<transaction id>-single` for the synthetic row.
        source: Source node label, or the raw node id when it cannot be resolved.
        target: Target node label, or the raw node id when it cannot be resolved.
        method: Edge operation, else the transaction's request method.
        path: Edge path, else the transaction's request path.
        status: Edge status, else the transaction status.
        timestamp: Edge timestamp, else the transaction timestamp.
        is_first_row: True only for the first row of the transaction.
        is_last_row: True only for the last row of the transaction.
        transaction_id: Id of the owning snapshot.
    """

    id: str
    source: str
    target: str
    method: str
    path: str
    status: str
    timestamp: str
    is_first_row: bool
    is_last_row: bool
    transaction_id: str


def _resolve_label(elements: SelectedElements, node_id: str, snapshot_id: str) -> str:
    node = elements.find_node(node_id)
    if node is not None and node.label:
        return node.label
    logger.debug(f"Transaction {snapshot_id}: edge endpoint '{node_id}' has no labelled node, showing raw id")
    return node_id


def _edge_row(snapshot: TransactionSnapshot, edge: GraphEdge, index: int, count: int) -> PathRow:
    elements = snapshot.selected_elements
    data = edge.data
    operation: Optional[str] = data.operation if data else None
    path: Optional[str] = data.path if data else None
    status: Optional[str] = data.status if data else None
    timestamp: Optional[str] = data.timestamp if data else None
    return PathRow(
        id=f"{snapshot.id}-{edge.id}",
        source=_resolve_label(elements, edge.source, snapshot.id),
        target=_resolve_label(elements, edge.target, snapshot.id),
        # Empty overrides fall back to the transaction-level value.
        method=operation or snapshot.request.method,
        path=path or snapshot.request.path,
        status=status or snapshot.status,
        timestamp=timestamp or snapshot.timestamp,
        is_first_row=index == 0,
        is_last_row=index == count - 1,
        transaction_id=snapshot.id,
    )


def reconstruct_paths(snapshot: TransactionSnapshot) -> List[PathRow]:
    """Build the ordered path rows for one saved transaction.

    Without a graph snapshot (or with no edges in it) a single synthetic row
    carries the transaction-level values. Otherwise there is one row per edge,
    in edge order. The result depends only on `snapshot`.
    """
    elements = snapshot.selected_elements
    if elements is None or not elements.edges:
        return [
            PathRow(
                id=f"{snapshot.id}-single",
                source=snapshot.source_node,
                target=snapshot.target_node,
                method=snapshot.request.method,
                path=snapshot.request.path,
                status=snapshot.status,
                timestamp=snapshot.timestamp,
                is_first_row=True,
                is_last_row=True,
                transaction_id=snapshot.id,
            )
        ]
    count = len(elements.edges)
    return [_edge_row(snapshot, edge, index, count) for index, edge in enumerate(elements.edges)]


def reconstruct_history(snapshots: Iterable[TransactionSnapshot]) -> List[PathRow]:
    """Concatenate the path rows of every snapshot, keeping snapshot order."""
    rows: List[PathRow] = []
    for snapshot in snapshots:
        rows.extend(reconstruct_paths(snapshot))
    return rows


def severity_for_status(status: Optional[str]) -> Severity:
    """Map a transaction or edge status to the severity of its badge."""
    if not status:
        return Severity.NEUTRAL
    return _STATUS_SEVERITIES.get(status.lower(), Severity.NEUTRAL)
