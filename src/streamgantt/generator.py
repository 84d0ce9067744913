from __future__ import annotations

from typing import Dict, List

from .chart import ChartDocument, build_chart
from .config import ChartSettings
from .logging import get_logger
from .ordering import order_streams
from .records import parse_document
from .streams import split_by_stream


log = get_logger("streamgantt.generator")


def build_document(text: str, settings: ChartSettings | None = None) -> ChartDocument:
    """Parse, partition and order `text`, raising before anything is rendered."""
    settings = settings or ChartSettings()
    doc = parse_document(text, settings.date_format)
    by_stream = split_by_stream(doc.tasks)
    ordered = order_streams(by_stream)
    log.info("Parsed %d tasks in %d streams", len(doc.tasks), len(ordered))
    return build_chart(doc.title, ordered, settings)


def generate_chart(text: str, settings: ChartSettings | None = None) -> str:
    return build_document(text, settings).render()


def summarize(text: str, settings: ChartSettings | None = None) -> Dict[str, List[str]]:
    """Computed order of task ids per stream, for `check`."""
    settings = settings or ChartSettings()
    doc = parse_document(text, settings.date_format)
    ordered = order_streams(split_by_stream(doc.tasks))
    return {stream: [t.id or t.name for t in tasks] for stream, tasks in ordered.items()}
