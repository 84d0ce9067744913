"""Pipeline steps live here.

Each module declares one function decorated with
`@orchestrator.step(name=..., inputs=[...], outputs=[...])`; `streamgantt list`
and `streamgantt build` discover them by importing every module in this package.
"""

from typing import Dict


def chart_path(p: Dict, suffix: str) -> str:
    """`runtime.chart` (path without extension) plus `suffix`."""
    return f"{p['runtime']['chart']}{suffix}"
