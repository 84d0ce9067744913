"""Turn `|`-delimited task lists into stream-grouped Mermaid Gantt charts."""

from .chart import ChartDocument, ChartLine, LineKind, build_chart
from .errors import CyclicDependency, MalformedRecord, RenderError, StreamGanttError
from .generator import generate_chart
from .ordering import order_stream
from .records import TaskRecord, parse_document
from .streams import UNASSIGNED_STREAM, split_by_stream

__all__ = [
    "ChartDocument",
    "ChartLine",
    "LineKind",
    "build_chart",
    "CyclicDependency",
    "MalformedRecord",
    "RenderError",
    "StreamGanttError",
    "generate_chart",
    "order_stream",
    "TaskRecord",
    "parse_document",
    "UNASSIGNED_STREAM",
    "split_by_stream",
]
