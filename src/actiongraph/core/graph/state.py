"""Per-run state for the graph system.

This module provides:
1. NodeStatus: An enumeration of node execution statuses
2. FlowStatus: The ready/running/terminal states of one flow traversal
3. ExecutionRecord: The mutable fields of a node for one traversal step
4. Traversal: Bookkeeping for one walk through a flow
5. bind_record/current_record: Publishing records to the running task

Node definitions are shared between runs and never mutated while a flow
walks them. Everything a run is allowed to change (parameters, the attempt
counter, status) lives in an ``ExecutionRecord`` instead. Records are kept
in a context variable holding an immutable mapping keyed by node identity,
so every asyncio task spawned by a parallel strategy sees its own bindings.
"""

import contextvars
import uuid
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, Field

class NodeStatus(str, Enum):
    """Node execution status."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"

class FlowStatus(str, Enum):
    """Flow traversal status."""
    READY = "ready"
    RUNNING = "running"
    TERMINAL = "terminal"

def new_run_id() -> str:
    """Return a fresh identifier for one top-level run or traversal."""
    return uuid.uuid4().hex

class ExecutionRecord(BaseModel):
    """
    Mutable per-run fields of a node.

    Attributes:
        run_id: Identifier of the traversal this record belongs to
        node_id: Id of the node definition the record is bound to
        params: Parameter set visible to the node's hooks
        cur_retry: Zero-based index of the attempt in progress
        status: Execution status of this step
    """
    run_id: str
    node_id: str
    params: Dict[str, Any] = Field(default_factory=dict)
    cur_retry: int = Field(default=0)
    status: NodeStatus = Field(default=NodeStatus.PENDING)

    def mark_status(self, status: NodeStatus) -> None:
        """Mark the step's execution status."""
        self.status = status

class Traversal(BaseModel):
    """
    Bookkeeping for one walk through a flow.

    Attributes:
        run_id: Identifier shared by every record of this walk
        flow_id: Id of the flow being walked
        status: Ready, running or terminal
        path: Ids of the nodes visited, in order
        last_action: Action produced by the most recent node
        started_at: Time the walk began
        finished_at: Time the walk reached a terminal state
    """
    run_id: str = Field(default_factory=new_run_id)
    flow_id: str
    status: FlowStatus = Field(default=FlowStatus.READY)
    path: List[str] = Field(default_factory=list)
    last_action: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def steps(self) -> int:
        """Number of node lifecycles executed so far."""
        return len(self.path)

    def start(self) -> None:
        self.status = FlowStatus.RUNNING
        self.started_at = datetime.now()

    def record_step(self, node_id: str, action: Optional[str]) -> None:
        self.path.append(node_id)
        self.last_action = action

    def finish(self) -> None:
        self.status = FlowStatus.TERMINAL
        self.finished_at = datetime.now()

_EMPTY: Mapping[int, ExecutionRecord] = MappingProxyType({})

_records: contextvars.ContextVar[Mapping[int, ExecutionRecord]] = contextvars.ContextVar(
    "actiongraph_execution_records", default=_EMPTY
)

def current_record(node: Any) -> Optional[ExecutionRecord]:
    """Return the record bound to ``node`` in the running context, if any."""
    return _records.get().get(id(node))

@contextmanager
def bind_record(node: Any, record: ExecutionRecord) -> Iterator[ExecutionRecord]:
    """Bind ``record`` to ``node`` until the block exits.

    The mapping is replaced, never mutated, so bindings made here are
    invisible to sibling tasks and are undone on exit.
    """
    bound = dict(_records.get())
    bound[id(node)] = record
    token = _records.set(MappingProxyType(bound))
    try:
        yield record
    finally:
        _records.reset(token)
