"""Best-effort image generation from an edit plan."""

from ..models.schemas import EditPlan, GenerationOutcome
from ..models.enums import GenerationStatus, PipelineStage
from ..utils.logger import get_logger
from ..utils.errors import GenerationError

logger = get_logger(__name__)

DATA_URI_PREFIX = "data:image/png;base64,"


class ImageGenerator:
    """Synthesizes the staged product image. Never raises."""

    def __init__(
        self,
        client,
        model: str = "gpt-image-1",
        size: str = "1024x1024",
        fallback_prompt: str = "Improve the image.",
        response_format: str = None,
    ):
        """
        Initialize image generator.

        Args:
            client: Provider exposing an async generate_image()
            model: Image model identifier
            size: Requested image size
            fallback_prompt: Used when the plan carries no image_prompt
            response_format: Forwarded to the provider when set
        """
        self.client = client
        self.model = model
        self.size = size
        self.fallback_prompt = fallback_prompt
        self.response_format = response_format

    async def generate(self, plan: EditPlan) -> GenerationOutcome:
        """
        Run stage 2 for a valid plan.

        Returns:
            GenerationOutcome, SUCCEEDED with a PNG data URI or FAILED with
            the error text
        """
        prompt = plan.image_prompt or self.fallback_prompt

        try:
            data = await self.client.generate_image(
                prompt=prompt,
                model=self.model,
                size=self.size,
                response_format=self.response_format,
            )

            b64 = None
            if data:
                b64 = data[0].get("b64_json")

            if not b64:
                raise GenerationError("Provider returned no image data")

        except Exception as e:
            logger.warning(
                f"Image generation failed, keeping original image: {e}",
                extra={
                    "stage": PipelineStage.GENERATION.value,
                    "model": self.model,
                    "error": str(e),
                },
                exc_info=True,
            )
            return GenerationOutcome(
                status=GenerationStatus.FAILED,
                prompt_used=prompt,
                error=str(e),
            )

        logger.info(
            "Image generated",
            extra={
                "stage": PipelineStage.GENERATION.value,
                "model": self.model,
                "b64_length": len(b64),
            }
        )

        return GenerationOutcome(
            status=GenerationStatus.SUCCEEDED,
            image_url=f"{DATA_URI_PREFIX}{b64}",
            prompt_used=prompt,
        )
