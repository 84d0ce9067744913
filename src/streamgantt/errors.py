"""Error types raised by the chart generator.

Every failure is caused by static input (or a missing external tool), so
nothing here is retried by the parsing or ordering code.
"""

from __future__ import annotations

from typing import Sequence


class StreamGanttError(Exception):
    """Base class for errors the CLI reports without a traceback."""


class MalformedRecord(StreamGanttError):
    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed record ({reason}): {line!r}")


class CyclicDependency(StreamGanttError):
    def __init__(self, stream: str | None, unplaced: Sequence[str]):
        self.stream = stream
        self.unplaced = list(unplaced)
        where = f" in '{stream}'" if stream else ""
        super().__init__(
            f"Invalid dependency cycle{where}; unplaced: {', '.join(self.unplaced)}"
        )


class RenderError(StreamGanttError):
    def __init__(self, command: Sequence[str], returncode: int | None, detail: str = ""):
        self.command = list(command)
        self.returncode = returncode
        msg = f"Renderer failed ({' '.join(self.command)})"
        if returncode is not None:
            msg += f" with exit code {returncode}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
