"""Data models and schemas for the scene enhancer."""

from .schemas import (
    EnhancementRequest,
    EditPlan,
    GenerationOutcome,
    EnhancementResult,
    ErrorResponse,
)
from .enums import (
    GenerationStatus,
    PipelineStage,
)

__all__ = [
    "EnhancementRequest",
    "EditPlan",
    "GenerationOutcome",
    "EnhancementResult",
    "ErrorResponse",
    "GenerationStatus",
    "PipelineStage",
]
