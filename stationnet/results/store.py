"""Step-scoped results container for a pipeline run.

`Results` organizes outputs by step name and records `StepMetadata` for
execution context. Each step writes two keys under its namespace:

- ``metadata``: step-level metadata (dict)
- ``data``: step-specific payload (dict)

Export with :meth:`Results.to_dict`, which returns a JSON-safe structure with
shape ``{workflow, steps, pipeline}``. During export, objects with a
``to_dict()`` method are converted, dictionary keys are coerced to strings and
tuples are emitted as lists.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StepMetadata:
    """Metadata for one step execution.

    Attributes:
        step_type: The step class name (e.g., 'ComputeMetrics').
        step_name: The instance name of the step.
        execution_order: Order in which this step was executed (0-based).
        seed: Seed the step used, if it consumed one.
    """

    step_type: str
    step_name: str
    execution_order: int
    seed: Optional[int] = None


def _deep_convert(value: Any) -> Any:
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return _deep_convert(value.to_dict())
    if isinstance(value, dict):
        return {str(k): _deep_convert(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_deep_convert(x) for x in value]
    return value


@dataclass
class Results:
    """Step-scoped results container with deterministic export shape."""

    # _store[step_name]["metadata"|"data"] = dict
    _store: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    _metadata: Dict[str, StepMetadata] = field(default_factory=dict)

    # Active step scope during PipelineStep.execute()
    _active_step: Optional[str] = None

    _pipeline: Dict[str, Any] = field(default_factory=dict)

    # ---- Scope management -------------------------------------------------
    def enter_step(self, step_name: str) -> None:
        """Enter step scope. Subsequent put/get are scoped to this step."""
        self._active_step = step_name
        if step_name not in self._store:
            self._store[step_name] = {}

    def exit_step(self) -> None:
        """Exit step scope."""
        self._active_step = None

    # ---- Step-scoped accessors -------------------------------------------
    def put(self, key: str, value: Any) -> None:
        """Store a value in the active step under "metadata" or "data"."""
        if self._active_step is None:
            raise RuntimeError("Results.put() called without active step scope")
        if key not in {"metadata", "data"}:
            raise ValueError("Results.put() only allows keys 'metadata' and 'data'")
        self._store.setdefault(self._active_step, {})[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value from the active step scope."""
        if self._active_step is None:
            raise RuntimeError("Results.get() called without active step scope")
        return self._store.get(self._active_step, {}).get(key, default)

    def get_step(self, step_name: str) -> Dict[str, Any]:
        """Return the raw dict for a given step name (for cross-step reads)."""
        return self._store.get(step_name, {})

    def put_step_metadata(
        self,
        step_name: str,
        step_type: str,
        execution_order: int,
        *,
        seed: Optional[int] = None,
    ) -> None:
        """Record metadata for a step."""
        self._metadata[step_name] = StepMetadata(
            step_type=step_type,
            step_name=step_name,
            execution_order=execution_order,
            seed=seed,
        )

    def get_step_metadata(self, step_name: str) -> Optional[StepMetadata]:
        return self._metadata.get(step_name)

    def get_steps_by_execution_order(self) -> list[str]:
        """Step names ordered by their execution order."""
        return sorted(
            self._metadata, key=lambda step: self._metadata[step].execution_order
        )

    def set_pipeline_snapshot(self, snapshot: Dict[str, Any]) -> None:
        """Attach the normalized pipeline configuration for export."""
        self._pipeline = snapshot

    def to_dict(self) -> Dict[str, Any]:
        """Return exported results with shape: {workflow, steps, pipeline}."""
        workflow: Dict[str, Any] = {}
        for step_name in self.get_steps_by_execution_order():
            md = self._metadata[step_name]
            workflow[step_name] = {
                "step_type": md.step_type,
                "step_name": md.step_name,
                "execution_order": md.execution_order,
                "seed": md.seed,
            }

        steps: Dict[str, Dict[str, Any]] = {}
        for step_name, data in self._store.items():
            invalid = set(data) - {"metadata", "data"}
            if invalid:
                raise ValueError(
                    f"Step '{step_name}' contains invalid result keys: "
                    f"{', '.join(sorted(invalid))}"
                )
            metadata_part = data.get("metadata") or {}
            data_part = data.get("data") or {}
            if not isinstance(metadata_part, dict) or not isinstance(data_part, dict):
                raise ValueError(
                    f"Step '{step_name}' must store dicts for 'metadata' and 'data'"
                )
            steps[step_name] = {
                "metadata": _deep_convert(metadata_part),
                "data": _deep_convert(data_part),
            }

        out: Dict[str, Any] = {"workflow": workflow, "steps": steps}
        if self._pipeline:
            out["pipeline"] = self._pipeline
        return out
