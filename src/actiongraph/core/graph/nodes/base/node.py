"""Base node classes for the graph system.

This module defines the Node abstraction for actiongraph. A node is an
individual unit of work with a three-phase asynchronous lifecycle:

    prepare(shared) -> prep_res
    execute(prep_res) -> exec_res
    finalize(shared, prep_res, exec_res) -> action | None

The action returned by ``finalize`` selects which successor a Flow visits
next. Nodes are validated via Pydantic; retry configuration is checked at
construction time.

Typical Usage:
    - Create a subclass of Node
    - Override any of the async hooks (all default to no-ops)
    - Wire successors with ``connect``, ``on(...).to(...)`` or ``>>``
"""

import asyncio
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from actiongraph.core.graph.state import (
    ExecutionRecord,
    NodeStatus,
    bind_record,
    current_record,
    new_run_id,
)
from actiongraph.core.logging import get_logger, LogComponent

# Wiring diagnostics go to the graph logger, lifecycle messages to nodes
graph_logger = get_logger(LogComponent.GRAPH)
logger = get_logger(LogComponent.NODES)

DEFAULT_ACTION = "default"

class BaseNode(BaseModel):
    """
    Unit of work with a prepare/execute/finalize lifecycle.

    The definition (id, configuration, successors) is shared by every run
    and is not modified while a flow walks it. Parameters are read through
    ``self.params``, which resolves to the execution record bound for the
    current run, or to the definition's defaults outside of any run.

    Attributes:
        id: Identifier used in logs; generated from the class name if omitted
        default_params: Parameters used when no run has bound its own
            (constructor keyword ``params``)
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: str = Field(default="", description="Identifier for this node")
    default_params: Dict[str, Any] = Field(default_factory=dict, alias="params")
    _successors: Dict[str, "BaseNode"] = PrivateAttr(default_factory=dict)

    @model_validator(mode='after')
    def assign_id(self) -> 'BaseNode':
        """Generate an id when none was given."""
        if not self.id:
            self.id = f"{type(self).__name__}-{uuid.uuid4().hex[:8]}"
        return self

    @property
    def params(self) -> Dict[str, Any]:
        """Parameters visible to the running hooks."""
        record = current_record(self)
        return record.params if record is not None else self.default_params

    @property
    def successors(self) -> Dict[str, "BaseNode"]:
        """Transition table mapping action labels to successor nodes."""
        return self._successors

    def set_params(self, params: Dict[str, Any]) -> None:
        """Replace the definition's default parameters."""
        self.default_params = params

    # Graph wiring
    def connect(self, node: "BaseNode", action: str = DEFAULT_ACTION) -> "BaseNode":
        """Register ``node`` as the successor for ``action``.

        Args:
            node: Successor to visit when this node produces ``action``
            action: Action label, ``"default"`` unless given

        Returns:
            The successor, so calls can be chained

        Raises:
            TypeError: If ``action`` is not a string or ``node`` is not a node
        """
        if not isinstance(action, str):
            raise TypeError(f"Action must be a string, got {type(action).__name__}")
        if not isinstance(node, BaseNode):
            raise TypeError(f"Successor must be a node, got {type(node).__name__}")
        if action in self._successors:
            graph_logger.warning(
                f"Node {self.id}: overwriting successor for action '{action}' "
                f"({self._successors[action].id} -> {node.id})"
            )
        self._successors[action] = node
        return node

    def on(self, action: str) -> "ConditionalTransition":
        """Start a two-step transition: ``node.on("ok").to(next_node)``."""
        if not isinstance(action, str):
            raise TypeError(f"Action must be a string, got {type(action).__name__}")
        return ConditionalTransition(self, action)

    def __rshift__(self, other: "BaseNode") -> "BaseNode":
        return self.connect(other)

    def __sub__(self, action: str) -> "ConditionalTransition":
        return self.on(action)

    # Lifecycle hooks
    async def prepare(self, shared: Any) -> Any:
        """Read what ``execute`` needs from the shared store."""
        return None

    async def execute(self, prep_res: Any) -> Any:
        """Do the work. May raise; subclasses with retries handle that."""
        return None

    async def finalize(self, shared: Any, prep_res: Any, exec_res: Any) -> Optional[str]:
        """Write results back and return the action label (``None`` = default)."""
        return None

    # Execution
    def _new_record(self, params: Dict[str, Any], run_id: Optional[str] = None) -> ExecutionRecord:
        return ExecutionRecord(
            run_id=run_id or new_run_id(),
            node_id=self.id,
            params=dict(params),
        )

    @contextmanager
    def _execution_scope(self) -> Iterator[ExecutionRecord]:
        """Yield the bound record, binding a fresh one if the node has none."""
        record = current_record(self)
        if record is not None:
            yield record
        else:
            with bind_record(self, self._new_record(self.default_params)) as record:
                yield record

    async def _exec(self, prep_res: Any) -> Any:
        return await self.execute(prep_res)

    async def _run_lifecycle(self, shared: Any) -> Optional[str]:
        prep_res = await self.prepare(shared)
        exec_res = await self._exec(prep_res)
        return await self.finalize(shared, prep_res, exec_res)

    async def _run(self, shared: Any) -> Optional[str]:
        """Run the lifecycle once inside this node's execution record."""
        with self._execution_scope() as record:
            record.mark_status(NodeStatus.RUNNING)
            try:
                action = await self._run_lifecycle(shared)
            except Exception:
                record.mark_status(NodeStatus.ERROR)
                raise
            record.mark_status(NodeStatus.COMPLETED)
            return action

    async def run(self, shared: Any) -> Optional[str]:
        """Run this node alone and return its action.

        Successors are never visited; wrap the node in a Flow for that.
        """
        if self._successors:
            graph_logger.warning(f"Node {self.id} won't run successors. Use Flow.")
        with bind_record(self, self._new_record(self.default_params)):
            return await self._run(shared)

class ConditionalTransition:
    """Pending edge created by ``node.on(action)`` or ``node - action``."""

    def __init__(self, src: BaseNode, action: str):
        self.src = src
        self.action = action

    def to(self, target: BaseNode) -> BaseNode:
        """Register ``target`` as the successor for the pending action."""
        return self.src.connect(target, self.action)

    def __rshift__(self, target: BaseNode) -> BaseNode:
        return self.to(target)

class Node(BaseNode):
    """
    Node whose ``execute`` phase is retried.

    ``execute`` is attempted up to ``max_retries`` times, sleeping ``wait``
    seconds between attempts. When the last attempt fails, ``fallback`` is
    called once with the error; by default it re-raises.

    Attributes:
        max_retries: Maximum number of attempts (at least 1)
        wait: Seconds to sleep between attempts (0 disables the delay)
    """
    max_retries: int = Field(default=1, ge=1, description="Maximum number of attempts")
    wait: float = Field(default=0, ge=0, description="Delay in seconds between attempts")

    @property
    def cur_retry(self) -> int:
        """Zero-based index of the attempt in progress for the current run."""
        record = current_record(self)
        return record.cur_retry if record is not None else 0

    async def fallback(self, prep_res: Any, exc: Exception) -> Any:
        """Recover from the final failed attempt. Re-raises unless overridden."""
        raise exc

    async def _exec(self, prep_res: Any) -> Any:
        with self._execution_scope() as record:
            for record.cur_retry in range(self.max_retries):
                try:
                    return await self.execute(prep_res)
                except Exception as e:
                    attempt = record.cur_retry + 1
                    if attempt == self.max_retries:
                        logger.warning(
                            f"Node {self.id}: attempt {attempt}/{self.max_retries} failed "
                            f"({e!r}), invoking fallback"
                        )
                        return await self.fallback(prep_res, e)
                    logger.warning(
                        f"Node {self.id}: attempt {attempt}/{self.max_retries} failed "
                        f"({e!r}), retrying"
                    )
                    if self.wait > 0:
                        await asyncio.sleep(self.wait)
