"""Dependency ordering shared by chart streams and pipeline steps.

Dependencies on ids that are not part of the set being ordered are treated
as already satisfied: a task may point at work in another stream (or at
nothing at all) without blocking its own stream.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .errors import CyclicDependency
from .logging import get_logger
from .records import TaskRecord


log = get_logger("streamgantt.ordering")


def topological_order(
    ids: Sequence[str],
    dependencies: Sequence[Iterable[str]],
    labels: Optional[Sequence[str]] = None,
    scope: Optional[str] = None,
) -> List[int]:
    """Return positions of `ids` in dependency order.

    Each pass picks the earliest unplaced item whose known dependencies are
    all satisfied, so ties resolve by input position.
    """
    known = set(ids)
    deps = [[d for d in ds if d in known] for ds in dependencies]
    satisfied: set[str] = set()
    placed = [False] * len(ids)
    order: List[int] = []
    while len(order) < len(ids):
        nxt = next(
            (
                i
                for i in range(len(ids))
                if not placed[i] and all(d in satisfied for d in deps[i])
            ),
            None,
        )
        if nxt is None:
            names = labels or ids
            raise CyclicDependency(
                scope, [names[i] for i in range(len(ids)) if not placed[i]]
            )
        placed[nxt] = True
        satisfied.add(ids[nxt])
        order.append(nxt)
    return order


def _label(task: TaskRecord) -> str:
    return f"{task.id} ({task.name})" if task.id else task.name


def order_stream(tasks: Sequence[TaskRecord], stream: Optional[str] = None) -> List[TaskRecord]:
    positions = topological_order(
        [t.id for t in tasks],
        [t.dependencies for t in tasks],
        labels=[_label(t) for t in tasks],
        scope=stream,
    )
    return [tasks[i] for i in positions]


def order_streams(by_stream: Dict[str, List[TaskRecord]]) -> Dict[str, List[TaskRecord]]:
    out: Dict[str, List[TaskRecord]] = {}
    for stream, tasks in by_stream.items():
        out[stream] = order_stream(tasks, stream)
        log.debug("Ordered stream %s: %s", stream, " -> ".join(t.id for t in out[stream]))
    return out
