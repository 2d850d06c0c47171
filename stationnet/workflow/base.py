"""Base class for pipeline steps.

Steps implement `run()` and are executed via `execute()`, which records
metadata, logs timing and re-raises failures.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from stationnet.logging import get_logger

if TYPE_CHECKING:
    from stationnet.pipeline import Pipeline

logger = get_logger(__name__)


@dataclass
class PipelineStep(ABC):
    """Base class for all pipeline steps.

    Attributes:
        name: Identifier used for logging and as the results namespace.
            Defaults to the class name.
    """

    name: str = ""

    def step_seed(self, pipeline: "Pipeline") -> Optional[int]:
        """Seed this step consumes, or None for deterministic steps."""
        return None

    def execute(self, pipeline: "Pipeline") -> None:
        """Run the step inside its results scope with timing and logging.

        Args:
            pipeline: The pipeline whose state the step reads and extends.

        Raises:
            Exception: Re-raises any exception raised by `run()` after logging
                duration and context.
        """
        step_type = self.__class__.__name__
        step_name = self.name or step_type

        pipeline.results.enter_step(step_name)
        pipeline.results.put_step_metadata(
            step_name=step_name,
            step_type=step_type,
            execution_order=pipeline.next_execution_order(),
            seed=self.step_seed(pipeline),
        )

        logger.info(f"Starting pipeline step: {step_name} ({step_type})")
        start_time = time.time()

        try:
            self.run(pipeline)
            duration = time.time() - start_time
            existing_md = pipeline.results.get("metadata", {})
            if not isinstance(existing_md, dict):
                raise TypeError("Results metadata must be a dict")
            pipeline.results.put("metadata", {**existing_md, "duration_sec": duration})
            logger.info(
                f"Completed pipeline step: {step_name} ({step_type}) "
                f"in {duration:.3f} seconds"
            )
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"Failed pipeline step: {step_name} ({step_type}) "
                f"after {duration:.3f} seconds - {type(e).__name__}: {e}"
            )
            raise
        finally:
            pipeline.results.exit_step()

    @abstractmethod
    def run(self, pipeline: "Pipeline") -> None:
        """Execute the step logic; called by execute()."""
