"""Parsing of `.gs` task lists into task records.

The first non-empty line of a document is the chart title. Every following
non-empty line is one task:

    taskId|task name|4|otherTaskId1 otherTaskId2|bob|2021-08-09

The stream and start date fields are optional.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .errors import MalformedRecord


DELIMITER = "|"
MIN_FIELDS = 4
MAX_FIELDS = 6

_WS = re.compile(r"\s+")

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"
_DATE_TOKEN = re.compile(r"(YYYY|MM|DD)")
_DATE_TOKENS = {
    "YYYY": (r"\d{4}", "%Y"),
    "MM": (r"\d{2}", "%m"),
    "DD": (r"\d{2}", "%d"),
}


@dataclass(frozen=True)
class TaskRecord:
    id: str
    name: str
    duration: int
    dependencies: Tuple[str, ...] = ()
    stream: Optional[str] = None
    start_date: Optional[str] = None

    def depends_on(self, task_id: str) -> bool:
        return task_id in self.dependencies


@dataclass
class ParsedDocument:
    title: str
    tasks: List[TaskRecord] = field(default_factory=list)


def _split_dependencies(raw: str) -> Tuple[str, ...]:
    seen: list[str] = []
    for token in _WS.split(raw.strip()):
        if token and token not in seen:
            seen.append(token)
    return tuple(seen)


def _parse_duration(raw: str, line: str) -> int:
    if not raw:
        raise MalformedRecord(line, "missing duration")
    # int() would also take "+5", "1_000" and non-ASCII digits
    if not (raw.isascii() and raw.isdecimal()):
        raise MalformedRecord(line, f"duration {raw!r} is not a positive integer")
    duration = int(raw)
    if duration <= 0:
        raise MalformedRecord(line, f"duration must be positive, got {duration}")
    return duration


def date_pattern(date_format: str) -> Optional[Tuple[re.Pattern, str]]:
    """Anchored regex and strptime format for a Mermaid `dateFormat`.

    Only the YYYY, MM and DD tokens are understood; any other letters give
    None and start dates are then passed through unchecked.
    """
    regex, strp = "", ""
    for piece in _DATE_TOKEN.split(date_format):
        if piece in _DATE_TOKENS:
            regex += _DATE_TOKENS[piece][0]
            strp += _DATE_TOKENS[piece][1]
        elif re.search(r"[A-Za-z]", piece):
            return None
        else:
            regex += re.escape(piece)
            strp += piece.replace("%", "%%")
    return re.compile(regex, re.ASCII), strp


def _parse_start_date(raw: str, line: str, date_format: str) -> Optional[str]:
    if not raw:
        return None
    pattern = date_pattern(date_format)
    if pattern is None:
        return raw
    regex, strp = pattern
    if regex.fullmatch(raw):
        try:
            datetime.strptime(raw, strp)
            return raw
        except ValueError:
            pass
    raise MalformedRecord(line, f"start date {raw!r} does not match {date_format}")


def parse_line(line: str, date_format: str = DEFAULT_DATE_FORMAT) -> TaskRecord:
    """Parse one `|`-delimited record line."""
    fields = [f.strip() for f in line.split(DELIMITER)]
    if not MIN_FIELDS <= len(fields) <= MAX_FIELDS:
        raise MalformedRecord(
            line, f"expected {MIN_FIELDS}-{MAX_FIELDS} fields, got {len(fields)}"
        )
    # Pad the optional trailing fields
    fields += [""] * (MAX_FIELDS - len(fields))
    task_id, name, duration, dependencies, stream, start_date = fields
    if not name:
        raise MalformedRecord(line, "missing task name")
    return TaskRecord(
        id=task_id,
        name=name,
        duration=_parse_duration(duration, line),
        dependencies=_split_dependencies(dependencies),
        stream=stream or None,
        start_date=_parse_start_date(start_date, line, date_format),
    )


def parse_document(text: str, date_format: str = DEFAULT_DATE_FORMAT) -> ParsedDocument:
    """Parse a whole document: title line first, then one task per line.

    Start dates are checked against `date_format`, the chart's Mermaid
    `dateFormat`, and kept exactly as written.
    """
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise MalformedRecord(text, "document has no title line")
    doc = ParsedDocument(title=lines[0].strip())
    for ln in lines[1:]:
        doc.tasks.append(parse_line(ln, date_format))
    return doc
