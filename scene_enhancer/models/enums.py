"""Enumerations for the scene enhancer."""

from enum import Enum


class GenerationStatus(str, Enum):
    """Outcome of the best-effort image generation stage."""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PipelineStage(str, Enum):
    """Stage of request processing."""
    ANALYSIS = "analysis"
    GENERATION = "generation"
    ASSEMBLY = "assembly"
