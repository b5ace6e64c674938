"""Tests for BatchNode and ParallelBatchNode.

This module tests:
- Order of results
- Fail-fast behavior
- Per-item retry and fallback
- Concurrency of the parallel strategy
"""

import asyncio
import time
import pytest
from typing import Dict, List
from pydantic import Field

from actiongraph.core.graph.nodes import BatchNode, ParallelBatchNode


class DoubleBatch(BatchNode):
    """Doubles every item of ``shared["items"]``."""

    async def prepare(self, shared):
        return shared.get("items")

    async def execute(self, item):
        return item * 2

    async def finalize(self, shared, prep_res, exec_res):
        shared["results"] = exec_res


class FailingBatch(BatchNode):
    """Fails on item 2 and records every item it attempted."""

    attempted: List[int] = Field(default_factory=list)

    async def prepare(self, shared):
        return [1, 2, 3, 4]

    async def execute(self, item):
        self.attempted.append(item)
        if item == 2:
            raise ValueError("bad item 2")
        return item


class RetryingBatch(BatchNode):
    """Each item fails on its first attempt only."""

    attempts: Dict[int, int] = Field(default_factory=dict)

    async def prepare(self, shared):
        return [1, 2, 3]

    async def execute(self, item):
        self.attempts[item] = self.attempts.get(item, 0) + 1
        if self.attempts[item] == 1:
            raise RuntimeError("first try")
        return item * 10

    async def finalize(self, shared, prep_res, exec_res):
        shared["results"] = exec_res


class FallbackBatch(BatchNode):
    """Negative items fail and fall back to -1."""

    async def prepare(self, shared):
        return [1, -2, 3]

    async def execute(self, item):
        if item < 0:
            raise ValueError(f"negative item {item}")
        return item

    async def fallback(self, prep_res, exc):
        return -1

    async def finalize(self, shared, prep_res, exec_res):
        shared["results"] = exec_res


class SlowDouble(ParallelBatchNode):
    """Sleeps ``delay`` seconds per item, then doubles it."""

    delay: float = 0.1

    async def prepare(self, shared):
        return shared.get("items")

    async def execute(self, item):
        await asyncio.sleep(self.delay)
        return item * 2

    async def finalize(self, shared, prep_res, exec_res):
        shared["results"] = exec_res


class ReverseFinish(ParallelBatchNode):
    """Later items finish first."""

    finished: List[int] = Field(default_factory=list)

    async def prepare(self, shared):
        return [0, 1, 2, 3, 4]

    async def execute(self, item):
        await asyncio.sleep(0.01 * (5 - item))
        self.finished.append(item)
        return item

    async def finalize(self, shared, prep_res, exec_res):
        shared["results"] = exec_res


class PartialFailure(ParallelBatchNode):
    """Item 0 fails immediately while the others are still sleeping."""

    completed: List[int] = Field(default_factory=list)

    async def prepare(self, shared):
        return [0, 1, 2]

    async def execute(self, item):
        if item == 0:
            raise ValueError("boom")
        await asyncio.sleep(0.05)
        self.completed.append(item)
        return item


class CounterCheck(ParallelBatchNode):
    """Records the attempt counter each item observes."""

    seen: Dict[int, List[int]] = Field(default_factory=dict)

    async def prepare(self, shared):
        return [1, 2, 3]

    async def execute(self, item):
        self.seen.setdefault(item, []).append(self.cur_retry)
        await asyncio.sleep(0.01)
        if len(self.seen[item]) < 2:
            raise RuntimeError("retry me")
        return item


class TestBatchNode:
    """Test suite for the sequential batch strategy."""

    async def test_results_in_order(self):
        """Items are executed in order and results keep that order."""
        shared = {"items": [1, 2, 3]}
        await DoubleBatch().run(shared)
        assert shared["results"] == [2, 4, 6]

    async def test_missing_items(self):
        """A None collection is treated as empty."""
        shared = {}
        await DoubleBatch().run(shared)
        assert shared["results"] == []

    async def test_fail_fast(self):
        """The first irrecoverable item failure stops the batch."""
        node = FailingBatch()

        with pytest.raises(ValueError, match="bad item 2"):
            await node.run({})

        assert node.attempted == [1, 2]

    async def test_retry_per_item(self):
        """Each item gets its own full set of attempts."""
        node = RetryingBatch(max_retries=2)
        shared = {}

        await node.run(shared)

        assert shared["results"] == [10, 20, 30]
        assert node.attempts == {1: 2, 2: 2, 3: 2}

    async def test_fallback_per_item(self):
        """An item's fallback result takes its place in the results."""
        shared = {}
        await FallbackBatch().run(shared)
        assert shared["results"] == [1, -1, 3]


class TestParallelBatchNode:
    """Test suite for the parallel batch strategy."""

    async def test_items_run_concurrently(self):
        """Five 100ms items finish in about the time of one."""
        shared = {"items": list(range(5))}

        start = time.perf_counter()
        await SlowDouble().run(shared)
        elapsed = time.perf_counter() - start

        assert shared["results"] == [0, 2, 4, 6, 8]
        assert elapsed < 0.3

    async def test_results_follow_input_order(self):
        """Results keep input order even when completion order differs."""
        node = ReverseFinish()
        shared = {}

        await node.run(shared)

        assert node.finished == [4, 3, 2, 1, 0]
        assert shared["results"] == [0, 1, 2, 3, 4]

    async def test_empty_and_single(self):
        """Empty and single-item collections are handled."""
        shared = {"items": []}
        await SlowDouble(delay=0).run(shared)
        assert shared["results"] == []

        shared = {"items": [42]}
        await SlowDouble(delay=0).run(shared)
        assert shared["results"] == [84]

    async def test_failure_propagates_without_cancelling_siblings(self):
        """The first failure is raised; started siblings still complete."""
        node = PartialFailure()

        with pytest.raises(ValueError, match="boom"):
            await node.run({})

        await asyncio.sleep(0.1)
        assert sorted(node.completed) == [1, 2]

    async def test_attempt_counters_are_per_item(self):
        """Interleaved retries do not share an attempt counter."""
        node = CounterCheck(max_retries=2)

        await node.run({})

        assert node.seen == {1: [0, 1], 2: [0, 1], 3: [0, 1]}
