from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Union

from ..config import runs_dir
from ..logging import get_logger, log_to_file
from ..ordering import topological_order
from . import cache as cache_mod


# Allow static lists or callables that build paths from params
PathSpec = Union[List[str], Callable[[dict], List[str]]]


@dataclass
class StepSpec:
    name: str
    inputs: PathSpec
    outputs: PathSpec
    fn: Callable[..., None]


def step(name: str, inputs: PathSpec, outputs: PathSpec):
    """Decorator to declare a pipeline step on a function.

    The wrapped function receives a single dict `params` (parsed config plus
    a `runtime` section filled in by the pipeline).
    """

    def deco(fn: Callable[..., None]):
        spec = StepSpec(name=name, inputs=inputs, outputs=outputs, fn=fn)
        setattr(fn, "_step_spec", spec)
        return fn

    return deco


def order_steps(nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> list[str]:
    """Order step names so every edge (u, v) runs u before v."""
    nodes = list(nodes)
    deps: dict[str, list[str]] = {n: [] for n in nodes}
    for u, v in edges:
        if u not in deps or v not in deps:
            raise ValueError(f"Edge references unknown step: {(u, v)}")
        deps[v].append(u)
    positions = topological_order(nodes, [deps[n] for n in nodes], scope="pipeline")
    return [nodes[i] for i in positions]


class Pipeline:
    def __init__(
        self,
        steps: dict[str, StepSpec],
        edges: list[tuple[str, str]],
        name: str = "pipeline",
    ):
        self.name = name
        self.steps = steps
        self.edges = edges
        self.order = order_steps(steps.keys(), edges)
        self.logger = get_logger(f"streamgantt.pipeline.{self.name}")

    def _select_subset(
        self, from_step: str | None, until_step: str | None, only_step: str | None
    ) -> list[str]:
        if only_step:
            if only_step not in self.steps:
                raise KeyError(f"Unknown step: {only_step}")
            return [only_step]
        ordered = self.order
        if from_step:
            if from_step not in self.steps:
                raise KeyError(f"Unknown step: {from_step}")
            ordered = ordered[ordered.index(from_step):]
        if until_step:
            if until_step not in self.steps:
                raise KeyError(f"Unknown step: {until_step}")
            ordered = ordered[: ordered.index(until_step) + 1]
        return ordered

    def run(
        self,
        params: dict,
        force: set[str] | None = None,
        from_step: str | None = None,
        until_step: str | None = None,
        only_step: str | None = None,
        retries: int = 0,
    ) -> dict:
        force = force or set()
        run_id = time.strftime("%Y%m%d-%H%M%S")
        run_dir = Path(runs_dir(params)) / self.name / run_id
        os.makedirs(run_dir, exist_ok=True)

        params = dict(params)
        params["runtime"] = dict(params.get("runtime") or {}, run_id=run_id)

        selected = self._select_subset(from_step, until_step, only_step)

        state = {
            "pipeline": self.name,
            "run_id": run_id,
            "steps": [],
            "python": sys.version,
        }

        with log_to_file(run_dir / "pipeline.log"):
            self.logger.info("Selected steps: %s", " -> ".join(selected))
            for step_name in selected:
                self._run_step(step_name, params, force, retries, run_dir, state)
        return state

    def _run_step(
        self,
        step_name: str,
        params: dict,
        force: set[str],
        retries: int,
        run_dir: Path,
        state: dict,
    ) -> None:
        spec = self.steps[step_name]
        step_logger = get_logger(f"streamgantt.pipeline.{self.name}.{step_name}")

        inputs = [Path(p) for p in _resolve_paths(spec.inputs, params)]
        outputs = [Path(p) for p in _resolve_paths(spec.outputs, params)]
        for p in outputs:
            p.parent.mkdir(parents=True, exist_ok=True)

        # run_id changes every run and must not invalidate the cache
        hash_params = {k: v for k, v in params.items() if k != "runtime"}
        step_hash = cache_mod.compute_step_hash(spec.name, inputs, hash_params)

        if step_name not in force and cache_mod.is_cached(step_hash, outputs):
            step_logger.info("Skip (cached): %s", step_name)
            state["steps"].append(
                {"name": step_name, "status": "cached", "hash": step_hash}
            )
            return

        attempt = 0
        while True:
            try:
                step_logger.info("Run: %s", step_name)
                spec.fn(params=params)
                cache_mod.write_hash_files(step_hash, outputs)
                state["steps"].append(
                    {"name": step_name, "status": "ok", "hash": step_hash}
                )
                break
            except Exception as e:  # noqa: BLE001
                attempt += 1
                step_logger.warning(
                    "Step failed (%s), attempt %d/%d: %s",
                    step_name,
                    attempt,
                    retries + 1,
                    e,
                )
                if attempt > retries:
                    state["steps"].append(
                        {"name": step_name, "status": "error", "error": str(e)}
                    )
                    _write_state(run_dir, state)
                    raise
        _write_state(run_dir, state)


def _write_state(run_dir: Path, state: dict) -> None:
    with open(run_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)


def _resolve_paths(paths_spec: PathSpec, params: dict) -> list[str]:
    """Resolve a static list of paths or a callable(params) into a list[str]."""
    paths = paths_spec(params) if callable(paths_spec) else paths_spec
    if paths is None:
        return []
    return [str(p) for p in paths]
