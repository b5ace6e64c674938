"""Flow orchestrator.

A Flow walks the transition tables of its nodes, starting from ``start``:
it runs the current node's lifecycle, looks up the successor registered for
the action that node produced, and repeats until no successor matches.
A Flow is itself a node, so it can be wired into another flow.

Example:
    ```python
    check = CheckNode()
    add = AddNode(amount=10)
    subtract = AddNode(amount=-20)

    check.on("positive").to(add)
    check.on("negative").to(subtract)

    flow = Flow(start=check)
    await flow.run(shared)
    ```
"""

from typing import Any, Dict, Optional

from pydantic import Field

from actiongraph.core.exceptions import FlowConfigurationError, FlowExecutionError
from actiongraph.core.graph.nodes.base.node import BaseNode, DEFAULT_ACTION
from actiongraph.core.graph.state import Traversal, bind_record
from actiongraph.core.logging import get_logger, LogComponent, log_verbose

logger = get_logger(LogComponent.FLOW)

class Flow(BaseNode):
    """Node that orchestrates a graph of nodes.

    Attributes:
        start: Node the traversal begins at
    """
    start: Optional[BaseNode] = Field(default=None, description="Node the traversal begins at")

    def __init__(self, start: Optional[BaseNode] = None, **data):
        super().__init__(start=start, **data)

    def get_next_node(self, current: BaseNode, action: Optional[str]) -> Optional[BaseNode]:
        """Return the successor of ``current`` for ``action``, if any.

        Logs a warning when ``current`` has successors but none is
        registered for the action; the flow then ends normally.
        """
        action = action or DEFAULT_ACTION
        nxt = current.successors.get(action)
        if nxt is None and current.successors:
            logger.warning(
                f"Flow {self.id} ends: '{action}' not found in {list(current.successors)}"
            )
        return nxt

    async def _orchestrate(self, shared: Any, params: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """Walk the graph once and return the last action produced.

        Args:
            shared: Shared store handed to every node
            params: Parameter set for this walk; defaults to the flow's own

        Raises:
            FlowConfigurationError: If the flow has no start node
        """
        if self.start is None:
            raise FlowConfigurationError(self.id)

        run_params = dict(params) if params is not None else dict(self.params)
        traversal = Traversal(flow_id=self.id)
        traversal.start()
        logger.info(f"Flow {self.id} [{traversal.run_id[:8]}]: starting at {self.start.id}")

        current = self.start
        while current is not None:
            record = current._new_record(run_params, run_id=traversal.run_id)
            try:
                with bind_record(current, record):
                    action = await current._run(shared)
            except Exception as e:
                logger.error(f"Flow {self.id}: error in node {current.id}: {e!r}")
                raise
            traversal.record_step(current.id, action)

            nxt = self.get_next_node(current, action)
            if nxt is not None:
                log_verbose(
                    logger,
                    f"Transitioning {current.id} --[{action or DEFAULT_ACTION}]--> {nxt.id}"
                )
            current = nxt

        traversal.finish()
        logger.info(
            f"Flow {self.id} [{traversal.run_id[:8]}]: terminal after {traversal.steps} steps "
            f"(last action: {traversal.last_action})"
        )
        return traversal.last_action

    async def _run_lifecycle(self, shared: Any) -> Optional[str]:
        prep_res = await self.prepare(shared)
        last_action = await self._orchestrate(shared)
        return await self.finalize(shared, prep_res, last_action)

    async def execute(self, prep_res: Any) -> Any:
        raise FlowExecutionError(self.id)

def chain(*nodes: BaseNode, action: str = DEFAULT_ACTION) -> BaseNode:
    """Connect a sequence of nodes in order and return the first.

    Args:
        nodes: Nodes to chain together
        action: Action label to use for every transition
    """
    if not nodes:
        raise ValueError("chain() needs at least one node")
    for src, dst in zip(nodes, nodes[1:]):
        src.connect(dst, action)
    return nodes[0]
