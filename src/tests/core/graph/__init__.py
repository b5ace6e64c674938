"""Test suite for the actiongraph graph system.

This package contains tests for the orchestration engine, organized into
the following structure:

1. Flow Tests (test_flow.py)
   - Sequential, branching and cyclic traversal
   - Nested flows
   - Wiring diagnostics and misuse errors
   - Per-run parameter isolation

2. Batch Flow Tests (test_batch_flow.py)
   - Sequential and parallel batch flows
   - Parameter merging

3. Node Tests (nodes/)
   - Base node lifecycle and wiring
   - Retry and fallback
   - Batch and parallel batch nodes

4. State Management (test_state.py)
   - Execution records and traversal bookkeeping
   - Context binding across tasks
"""
