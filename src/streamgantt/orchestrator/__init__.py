"""Small step runner used by `streamgantt build`.

Provides StepSpec and Pipeline primitives, dependency ordering of steps and
hash-based skipping of steps whose inputs have not changed.
"""

from .core import StepSpec, Pipeline, step  # re-export for convenience

__all__ = ["StepSpec", "Pipeline", "step"]
