"""Results store and metadata for pipeline steps."""

from __future__ import annotations

from .store import Results, StepMetadata

__all__ = ["Results", "StepMetadata"]
