"""Batch flows: one full traversal per parameter set.

``prepare`` returns a list of parameter dicts. Each entry is merged over the
flow's own parameters (the entry wins on conflicts) and the graph is walked
once with the result.
"""

import asyncio
from typing import Any, Dict, List, Optional

from actiongraph.core.graph.flow import Flow
from actiongraph.core.logging import get_logger, LogComponent

logger = get_logger(LogComponent.BATCH)

class BatchFlow(Flow):
    """Run the flow once per parameter set, in order.

    The first failing traversal aborts the remaining ones.
    """

    async def _run_lifecycle(self, shared: Any) -> Optional[str]:
        batch_params: List[Dict[str, Any]] = await self.prepare(shared) or []
        logger.debug(f"BatchFlow {self.id}: {len(batch_params)} traversals")
        for entry in batch_params:
            await self._orchestrate(shared, {**self.params, **entry})
        return await self.finalize(shared, batch_params, None)

class ParallelBatchFlow(Flow):
    """Run the flow once per parameter set, all traversals at once.

    Every traversal shares the same store and nothing synchronizes their
    writes; keep keys distinct per entry. The first failure is raised and
    the other traversals keep running.
    """

    async def _run_lifecycle(self, shared: Any) -> Optional[str]:
        batch_params: List[Dict[str, Any]] = await self.prepare(shared) or []
        logger.debug(f"ParallelBatchFlow {self.id}: starting {len(batch_params)} traversals")
        await asyncio.gather(
            *(self._orchestrate(shared, {**self.params, **entry}) for entry in batch_params)
        )
        return await self.finalize(shared, batch_params, None)
