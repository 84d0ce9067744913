"""Mermaid Gantt markup for ordered, stream-grouped tasks.

A chart is a flat list of lines, each either a section marker (one per
stream) or a task line. Streams other than `unassigned` are drawn as one
continuous timeline: every task after the first gets an `after` reference
to the task placed before it, unless it already declares that dependency.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .config import ChartSettings
from .records import TaskRecord
from .streams import UNASSIGNED_STREAM


INDENT = "    "


class LineKind(enum.Enum):
    SECTION = "section"
    TASK = "task"


@dataclass(frozen=True)
class ChartLine:
    kind: LineKind
    name: str
    id: Optional[str] = None
    dependencies: Tuple[str, ...] = ()
    start_date: Optional[str] = None
    duration: int = 0
    unit: str = "d"

    @classmethod
    def section(cls, stream: str) -> "ChartLine":
        return cls(kind=LineKind.SECTION, name=stream)

    @classmethod
    def task(
        cls,
        record: TaskRecord,
        dependencies: Sequence[str],
        unit: str = "d",
    ) -> "ChartLine":
        return cls(
            kind=LineKind.TASK,
            name=record.name,
            id=record.id or None,
            dependencies=tuple(dependencies),
            start_date=record.start_date,
            duration=record.duration,
            unit=unit,
        )

    def render(self) -> str:
        if self.kind is LineKind.SECTION:
            return f"section {self.name}"
        parts: List[str] = []
        if self.id:
            parts.append(self.id)
        if self.dependencies:
            parts.append("after " + " ".join(self.dependencies))
        if self.start_date:
            parts.append(self.start_date)
        parts.append(f"{self.duration}{self.unit}")
        return f"{self.name} :" + ", ".join(parts)


@dataclass
class ChartDocument:
    title: str
    lines: List[ChartLine] = field(default_factory=list)
    date_format: str = "YYYY-MM-DD"
    excludes: str = "weekends"

    def header(self) -> List[str]:
        return [
            "gantt",
            f"{INDENT}title {self.title}",
            f"{INDENT}dateFormat {self.date_format}",
            f"{INDENT}excludes {self.excludes}",
        ]

    def render(self) -> str:
        body = [f"{INDENT}{ln.render()}" for ln in self.lines]
        return "\n".join(self.header() + body) + "\n"


def lines_for_stream(
    stream: str,
    tasks: Sequence[TaskRecord],
    serialize: bool,
    unit: str = "d",
) -> List[ChartLine]:
    """Section marker followed by the stream's task lines.

    With `serialize`, each task after the first also depends on its
    predecessor in `tasks`. Records are left untouched.
    """
    out = [ChartLine.section(stream)]
    previous: Optional[TaskRecord] = None
    for t in tasks:
        deps = list(t.dependencies)
        if serialize and previous is not None and previous.id and not t.depends_on(previous.id):
            deps.append(previous.id)
        out.append(ChartLine.task(t, deps, unit=unit))
        previous = t
    return out


def build_chart(
    title: str,
    ordered_by_stream: Dict[str, List[TaskRecord]],
    settings: ChartSettings | None = None,
) -> ChartDocument:
    settings = settings or ChartSettings()
    doc = ChartDocument(
        title=settings.title or title,
        date_format=settings.date_format,
        excludes=settings.excludes,
    )
    unassigned = ordered_by_stream.get(UNASSIGNED_STREAM)
    if unassigned:
        doc.lines += lines_for_stream(
            UNASSIGNED_STREAM, unassigned, serialize=False, unit=settings.duration_unit
        )
    for stream, tasks in ordered_by_stream.items():
        if stream == UNASSIGNED_STREAM:
            continue
        doc.lines += lines_for_stream(
            stream, tasks, serialize=True, unit=settings.duration_unit
        )
    return doc
