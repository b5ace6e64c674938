"""Node package initialization.

Exposes node types and helpers for building workflows.
"""

from actiongraph.core.graph.nodes.base.node import (
    BaseNode,
    Node,
    ConditionalTransition,
    DEFAULT_ACTION,
)
from actiongraph.core.graph.nodes.batch import BatchNode, ParallelBatchNode

__all__ = [
    # Base node types
    "BaseNode",
    "Node",

    # Batch strategies
    "BatchNode",
    "ParallelBatchNode",

    # Wiring helpers
    "ConditionalTransition",
    "DEFAULT_ACTION",
]
