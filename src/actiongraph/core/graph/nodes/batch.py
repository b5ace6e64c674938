"""Batch nodes: fan ``execute`` out over the collection ``prepare`` returns.

Both strategies run every item through the retry engine of ``Node``; they
differ only in scheduling.
"""

import asyncio
from typing import Any, Iterable, List, Optional

from actiongraph.core.graph.nodes.base.node import Node
from actiongraph.core.graph.state import bind_record, current_record
from actiongraph.core.logging import get_logger, LogComponent

logger = get_logger(LogComponent.BATCH)

class BatchNode(Node):
    """
    Execute items one at a time, in order.

    ``prepare`` returns the items (``None`` means no items); ``finalize``
    receives the list of per-item results. The first item whose retries and
    fallback are exhausted aborts the batch, and later items never run.
    """

    async def _exec(self, items: Optional[Iterable[Any]]) -> List[Any]:
        results = []
        for item in items or []:
            results.append(await super()._exec(item))
        logger.debug(f"Batch {self.id}: executed {len(results)} items sequentially")
        return results

class ParallelBatchNode(Node):
    """
    Execute all items concurrently.

    Every item is started at once, with no cap on how many are in flight.
    Results come back in input order whatever order the items finish in.
    Each item keeps its own attempt counter. The first irrecoverable
    failure is raised to the caller; items already started are not
    cancelled and run to completion in the background.
    """

    async def _exec_item(self, item: Any) -> Any:
        record = current_record(self)
        with bind_record(self, record.model_copy(update={"cur_retry": 0})):
            return await super()._exec(item)

    async def _exec(self, items: Optional[Iterable[Any]]) -> List[Any]:
        with self._execution_scope():
            items = list(items or [])
            logger.debug(f"Batch {self.id}: starting {len(items)} items concurrently")
            return list(await asyncio.gather(*(self._exec_item(item) for item in items)))
