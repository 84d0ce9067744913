from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Dict

import typer
from dotenv import find_dotenv, load_dotenv

from .config import DEFAULT_CONFIG, ChartSettings, load_config
from .errors import StreamGanttError
from .generator import generate_chart, summarize
from .logging import get_logger, set_level
from .orchestrator import Pipeline, StepSpec


app = typer.Typer(add_completion=False, help="Stream-grouped Mermaid Gantt chart generator")
log = get_logger("streamgantt.cli")

BUILD_STEPS = ["generate", "render"]
BUILD_EDGES = [("generate", "render")]


def discover_steps() -> Dict[str, StepSpec]:
    """Import all modules in the `tasks` package and collect decorated functions."""
    steps_pkg = "streamgantt.tasks"
    specs: Dict[str, StepSpec] = {}
    pkg = importlib.import_module(steps_pkg)
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{steps_pkg}."):
        mod = importlib.import_module(m.name)
        for attr_name in dir(mod):
            spec = getattr(getattr(mod, attr_name), "_step_spec", None)
            if isinstance(spec, StepSpec):
                specs[spec.name] = spec
    return specs


def _fail(err: Exception) -> None:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level"),
):
    load_dotenv(find_dotenv(usecwd=True))
    # Loggers already exist; pick up a level that only the .env file sets
    set_level("INFO" if verbose else None)


@app.command("list")
def list_steps():
    """List discovered pipeline steps."""
    typer.echo("Discovered steps:")
    for name in sorted(discover_steps().keys()):
        typer.echo(f"- {name}")


@app.command()
def generate(
    input_path: Path = typer.Argument(..., help="Task list (.gs)"),
    output_path: Path = typer.Argument(..., help="Mermaid markup to write (.mmd)"),
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """Convert a task list into Mermaid Gantt markup."""
    try:
        params = load_config(config)
        text = input_path.read_text(encoding="utf-8")
        markup = generate_chart(text, ChartSettings.from_params(params))
        output_path.write_text(markup, encoding="utf-8")
    except (StreamGanttError, OSError) as e:
        _fail(e)
    log.info("Wrote %s", output_path)


@app.command()
def check(
    input_path: Path = typer.Argument(..., help="Task list (.gs)"),
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
):
    """Validate a task list and print each stream's computed order."""
    try:
        params = load_config(config)
        ordered = summarize(
            input_path.read_text(encoding="utf-8"), ChartSettings.from_params(params)
        )
    except (StreamGanttError, OSError) as e:
        _fail(e)
    for stream, ids in ordered.items():
        typer.echo(f"{stream}: {' -> '.join(ids)}")


@app.command()
def build(
    chart: str = typer.Argument(..., help="Chart path without extension; reads CHART.gs"),
    config: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
    force: str = typer.Option("", help="Comma-separated steps to force"),
    only: str = typer.Option("", help="Run only this step"),
    from_step: str = typer.Option("", help="Start from this step name"),
    until_step: str = typer.Option("", help="Stop after this step name"),
    retries: int = typer.Option(0, help="Retries per step on failure"),
):
    """Generate CHART.mmd from CHART.gs, then render it with the Mermaid CLI."""
    specs = discover_steps()
    missing = [s for s in BUILD_STEPS if s not in specs]
    if missing:
        typer.echo("Missing required steps: " + ", ".join(missing), err=True)
        raise typer.Exit(code=1)

    params = load_config(config)
    params["runtime"] = {"chart": chart[:-3] if chart.endswith(".gs") else chart}
    pipe = Pipeline(
        steps={k: specs[k] for k in BUILD_STEPS}, edges=BUILD_EDGES, name="build"
    )
    force_set = set([x.strip() for x in force.split(",") if x.strip()])
    try:
        state = pipe.run(
            params=params,
            force=force_set,
            from_step=from_step or None,
            until_step=until_step or None,
            only_step=only or None,
            retries=retries,
        )
    except (StreamGanttError, OSError, KeyError) as e:
        _fail(e)
    for s in state["steps"]:
        typer.echo(f"{s['name']}: {s['status']}")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
