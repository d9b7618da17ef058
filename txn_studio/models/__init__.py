from .log_events import ApiCallEvent, LogEvent, TestRunDetails, TestRunEvent, TestRunStatus
from .severity import Severity
from .transaction import (
    EdgeData,
    GraphEdge,
    GraphNode,
    NodeData,
    RequestDescriptor,
    ResponseDescriptor,
    SelectedElements,
    TestDescriptor,
    TransactionSnapshot,
)

__all__ = [
    "ApiCallEvent",
    "EdgeData",
    "GraphEdge",
    "GraphNode",
    "LogEvent",
    "NodeData",
    "RequestDescriptor",
    "ResponseDescriptor",
    "SelectedElements",
    "Severity",
    "TestDescriptor",
    "TestRunDetails",
    "TestRunEvent",
    "TestRunStatus",
    "TransactionSnapshot",
]
