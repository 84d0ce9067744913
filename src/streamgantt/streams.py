from __future__ import annotations

from typing import Dict, Iterable, List

from .records import TaskRecord


UNASSIGNED_STREAM = "unassigned"


def stream_of(task: TaskRecord) -> str:
    return task.stream or UNASSIGNED_STREAM


def split_by_stream(tasks: Iterable[TaskRecord]) -> Dict[str, List[TaskRecord]]:
    """Group tasks by stream, keeping first-encounter stream order and input order within a stream."""
    out: Dict[str, List[TaskRecord]] = {}
    for t in tasks:
        out.setdefault(stream_of(t), []).append(t)
    return out
