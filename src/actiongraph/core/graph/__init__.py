"""Graph package initialization.

Exposes core graph components and helpers for building workflows.
"""

from actiongraph.core.graph.state import (
    ExecutionRecord,
    Traversal,
    NodeStatus,
    FlowStatus,
)
from actiongraph.core.graph.nodes import (
    BaseNode,
    Node,
    BatchNode,
    ParallelBatchNode,
    ConditionalTransition,
    DEFAULT_ACTION,
)
from actiongraph.core.graph.flow import Flow, chain
from actiongraph.core.graph.batch import BatchFlow, ParallelBatchFlow

__all__ = [
    # Core classes
    "BaseNode",
    "Node",
    "BatchNode",
    "ParallelBatchNode",
    "Flow",
    "BatchFlow",
    "ParallelBatchFlow",

    # Per-run state
    "ExecutionRecord",
    "Traversal",
    "NodeStatus",
    "FlowStatus",

    # Wiring helpers
    "ConditionalTransition",
    "DEFAULT_ACTION",
    "chain",
]
