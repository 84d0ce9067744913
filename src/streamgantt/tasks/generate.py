"""Generate step: `<chart>.gs` task list to `<chart>.mmd` Mermaid markup."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from ..config import ChartSettings
from ..generator import generate_chart
from ..logging import get_logger
from ..orchestrator import step
from . import chart_path


@step(
    name="generate",
    inputs=lambda p: [chart_path(p, ".gs")],
    outputs=lambda p: [chart_path(p, ".mmd")],
)
def generate(params: Dict):
    logger = get_logger("streamgantt.tasks.generate")
    src = Path(chart_path(params, ".gs"))
    dst = Path(chart_path(params, ".mmd"))
    if not src.exists():
        raise FileNotFoundError(f"Task list not found: {src}")

    markup = generate_chart(
        src.read_text(encoding="utf-8"), ChartSettings.from_params(params)
    )
    dst.write_text(markup, encoding="utf-8")
    logger.info("Wrote %s", dst)
