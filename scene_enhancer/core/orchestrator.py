"""Main orchestrator coordinating analysis and generation."""

import time

from .scene_analyzer import SceneAnalyzer
from .image_generator import ImageGenerator
from ..models.schemas import (
    EditPlan,
    EnhancementRequest,
    EnhancementResult,
    GenerationOutcome,
)
from ..models.enums import PipelineStage
from ..utils.logger import get_logger, truncate
from ..utils.errors import ImageRejectedError

logger = get_logger(__name__)


def assemble_result(
    request: EnhancementRequest,
    plan: EditPlan,
    outcome: GenerationOutcome,
) -> EnhancementResult:
    """Combine request, plan and generation outcome into the response body."""
    after_img = outcome.image_url if outcome.succeeded else request.image_url

    return EnhancementResult(
        before_img=request.image_url,
        after_img=after_img,
        product_title=request.product_title,
        product_price=request.product_price,
        product_id=request.product_id,
        scene_type=plan.scene_type,
        edit_summary=plan.edit_summary,
        placement_instructions=plan.placement_instructions,
        lighting_instructions=plan.lighting_instructions,
        extra_improvements=plan.extra_improvements,
    )


class Orchestrator:
    """Runs analyze-then-generate for one request at a time."""

    def __init__(
        self,
        analyzer: SceneAnalyzer,
        generator: ImageGenerator,
        rejection_reason: str = "Rejected by analysis",
    ):
        """
        Initialize orchestrator.

        Args:
            analyzer: Stage 1, produces the edit plan
            generator: Stage 2, best-effort image synthesis
            rejection_reason: Detail used when an invalid plan gives no reason
        """
        self.analyzer = analyzer
        self.generator = generator
        self.rejection_reason = rejection_reason

    async def process(self, request: EnhancementRequest) -> EnhancementResult:
        """
        Process an enhancement request.

        Raises:
            ImageRejectedError: If the plan marks the image invalid
            Exception: Any stage 1 provider failure, unchanged
        """
        start_time = time.time()

        logger.info(
            "Starting enhancement",
            extra={
                "image_url": truncate(request.image_url),
                "action_type": request.action_type,
                "product_id": request.product_id,
            }
        )

        plan = await self.analyzer.analyze(request)

        if not plan.valid_image:
            reason = plan.reason or self.rejection_reason
            logger.info(
                "Image rejected by analysis",
                extra={
                    "stage": PipelineStage.ANALYSIS.value,
                    "reason": reason,
                }
            )
            raise ImageRejectedError(reason)

        outcome = await self.generator.generate(plan)

        result = assemble_result(request, plan, outcome)

        logger.info(
            "Enhancement complete",
            extra={
                "stage": PipelineStage.ASSEMBLY.value,
                "generation_status": outcome.status.value,
                "processing_time_seconds": round(time.time() - start_time, 3),
            }
        )

        return result
