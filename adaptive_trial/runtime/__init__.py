"""Execution helpers for replication batches."""

from .parallel import ChunkTask, plan_chunks, run_chunks

__all__ = ["ChunkTask", "plan_chunks", "run_chunks"]
