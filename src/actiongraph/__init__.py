"""actiongraph - labeled-transition orchestration for async units of work."""

from actiongraph.core import (
    ActionGraphError,
    FlowError,
    FlowExecutionError,
    FlowConfigurationError,
    configure_logging,
    LoggingConfig,
    LogLevel,
    LogComponent,
)
from actiongraph.core.graph import (
    BaseNode,
    Node,
    BatchNode,
    ParallelBatchNode,
    Flow,
    BatchFlow,
    ParallelBatchFlow,
    DEFAULT_ACTION,
    chain,
)

__all__ = [
    'BaseNode',
    'Node',
    'BatchNode',
    'ParallelBatchNode',
    'Flow',
    'BatchFlow',
    'ParallelBatchFlow',
    'DEFAULT_ACTION',
    'chain',
    'ActionGraphError',
    'FlowError',
    'FlowExecutionError',
    'FlowConfigurationError',
    'configure_logging',
    'LoggingConfig',
    'LogLevel',
    'LogComponent'
]
