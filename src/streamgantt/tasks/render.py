"""Render step: hand `<chart>.mmd` to the Mermaid CLI.

Runs `mmdc -w <width> -i <chart>.mmd -o <chart>.<format>`. The executable
comes from `render.mmdc` in the config or the STREAMGANTT_MMDC env var
(e.g. "npx mmdc").
"""

from __future__ import annotations

import shlex
import subprocess
from typing import Dict, List

from ..config import mmdc_command, render_format, render_width
from ..errors import RenderError
from ..logging import get_logger
from ..orchestrator import step
from . import chart_path


def output_path(p: Dict) -> str:
    return chart_path(p, f".{render_format(p)}")


def render_command(p: Dict) -> List[str]:
    return shlex.split(mmdc_command(p)) + [
        "-w",
        str(render_width(p)),
        "-i",
        chart_path(p, ".mmd"),
        "-o",
        output_path(p),
    ]


@step(
    name="render",
    inputs=lambda p: [chart_path(p, ".mmd")],
    outputs=lambda p: [output_path(p)],
)
def render(params: Dict):
    logger = get_logger("streamgantt.tasks.render")
    cmd = render_command(params)
    logger.info("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        raise RenderError(cmd, None, "executable not found") from None
    if proc.returncode != 0:
        raise RenderError(cmd, proc.returncode, (proc.stderr or "").strip())
