"""actiongraph exception hierarchy."""

from __future__ import annotations


class ActionGraphError(Exception):
    """Base exception for all actiongraph errors."""


class FlowError(ActionGraphError):
    """Error raised by a flow orchestrator."""


class FlowExecutionError(FlowError):
    """``execute`` was invoked on a flow, which only orchestrates."""

    def __init__(self, flow_id: str) -> None:
        self.flow_id = flow_id
        super().__init__(f"Flow {flow_id} can't execute; run it instead")


class FlowConfigurationError(FlowError):
    """A flow was run without a start node."""

    def __init__(self, flow_id: str, reason: str = "no start node") -> None:
        self.flow_id = flow_id
        self.reason = reason
        super().__init__(f"Flow {flow_id} is misconfigured: {reason}")
