from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Base for persisted records: frozen, snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the JSON-compatible form written to storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RequestDescriptor(SnapshotModel):
    """The HTTP request a transaction sends."""

    method: str = Field()
    path: str = Field()
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = Field(default=None)


class ResponseDescriptor(SnapshotModel):
    """The HTTP response recorded for a transaction."""

    status: int = Field()
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = Field(default=None)


class TestDescriptor(SnapshotModel):
    """A test script attached to a transaction and its last result."""

    script: str = Field()
    enabled: bool = Field(default=True)
    result: Optional[str] = Field(default=None)


class NodeData(SnapshotModel):
    model_config = ConfigDict(extra="allow")

    label: str = Field(default="")
    type: Optional[str] = Field(default=None)


class GraphNode(SnapshotModel):
    """A system node captured from the editor canvas."""

    # Editor properties (position, style, ...) are kept so a rewrite does not drop them.
    model_config = ConfigDict(extra="allow")

    id: str = Field()
    data: NodeData = Field(default_factory=NodeData)

    @property
    def label(self) -> Optional[str]:
        return self.data.label or None


class EdgeData(SnapshotModel):
    """Per-edge overrides of the transaction-level request and status."""

    model_config = ConfigDict(extra="allow")

    transaction_id: Optional[str] = Field(default=None)
    operation: Optional[str] = Field(default=None)
    path: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None)
    test_status: Optional[str] = Field(default=None)
    timestamp: Optional[str] = Field(default=None)


class GraphEdge(SnapshotModel):
    """A directed transaction edge between two system nodes."""

    model_config = ConfigDict(extra="allow")

    id: str = Field()
    source: str = Field()
    target: str = Field()
    data: Optional[EdgeData] = Field(default=None)


class SelectedElements(SnapshotModel):
    """The frozen subgraph captured when a transaction was saved."""

    node_ids: List[str] = Field(default_factory=list)
    edge_ids: List[str] = Field(default_factory=list)
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    def find_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


class TransactionSnapshot(SnapshotModel):
    """A saved, immutable record of one simulated transaction.

    Attributes:
        id: Unique record identifier within the store.
        transaction_id: Logical transaction identifier; may differ from `id`.
        source_node: Label of the calling system.
        target_node: Label of the called system.
        status: Free-form status string (e.g. "success", "failed", "not run").
        timestamp: ISO-8601 timestamp of when the transaction was saved.
        request: The request descriptor; always present.
        response: The recorded response, if the transaction was run.
        test: The attached test script, if any.
        selected_elements: The graph snapshot traversed by this transaction, if any.
    """

    id: str = Field()
    transaction_id: str = Field()
    source_node: str = Field()
    target_node: str = Field()
    status: str = Field()
    timestamp: str = Field()
    request: RequestDescriptor = Field()
    response: Optional[ResponseDescriptor] = Field(default=None)
    test: Optional[TestDescriptor] = Field(default=None)
    selected_elements: Optional[SelectedElements] = Field(default=None)

    @property
    def short_id(self) -> str:
        """The display form of `id` used by the history table."""
        return self.id[:8].upper()
