"""Scene analysis: turns a product image into an edit plan."""

import json
from typing import Any, Dict

from .prompt_builder import PLAN_FIELDS, build_prompt
from ..models.schemas import EditPlan, EnhancementRequest
from ..models.enums import PipelineStage
from ..utils.logger import get_logger, truncate

logger = get_logger(__name__)

INVALID_JSON_REASON = "Invalid JSON"

# Fed to the error detail and the image model, so they must be strings.
TEXT_FIELDS = ("reason", "image_prompt")
DESCRIPTIVE_FIELDS = tuple(
    name for name in PLAN_FIELDS if name not in TEXT_FIELDS and name != "valid_image"
)


def _as_text(value: Any) -> str:
    """Coerce a loosely typed model value into display text."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "; ".join(_as_text(item) for item in value if item)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_plan(raw: str) -> EditPlan:
    """
    Parse the model's raw answer into an EditPlan.

    Anything that is not a JSON object yields an invalid plan with reason
    "Invalid JSON", so generation is never attempted on garbage.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        data = None

    if not isinstance(data, dict):
        logger.warning(
            "Scene analysis returned malformed JSON",
            extra={"raw": truncate(raw, 200)}
        )
        return EditPlan(valid_image=False, reason=INVALID_JSON_REASON, image_prompt="")

    return _plan_from_dict(data)


def _plan_from_dict(data: Dict[str, Any]) -> EditPlan:
    fields = {name: _as_text(data.get(name)) for name in TEXT_FIELDS}
    fields.update({name: data.get(name) or "" for name in DESCRIPTIVE_FIELDS})
    return EditPlan(valid_image=bool(data.get("valid_image")), **fields)


class SceneAnalyzer:
    """Asks a vision model whether and how a product image can be staged."""

    def __init__(
        self,
        client,
        model: str = "gpt-4.1-mini",
        user_instruction: str = "Analyze this image and return the requested JSON.",
    ):
        """
        Initialize analyzer.

        Args:
            client: Provider exposing an async complete_json()
            model: Vision model identifier
            user_instruction: Fixed text sent next to the image
        """
        self.client = client
        self.model = model
        self.user_instruction = user_instruction

    async def analyze(self, request: EnhancementRequest) -> EditPlan:
        """
        Run stage 1 for a request.

        Provider failures are not caught here.
        """
        prompt = build_prompt(
            action_type=request.action_type,
            client_idea=request.client_idea,
            product_title=request.product_title,
            product_category=request.product_category,
            product_style=request.product_style,
        )

        raw = await self.client.complete_json(
            system_prompt=prompt,
            user_text=self.user_instruction,
            image_url=request.image_url,
            model=self.model,
        )

        plan = parse_plan(raw)

        logger.info(
            "Edit plan parsed",
            extra={
                "stage": PipelineStage.ANALYSIS.value,
                "valid_image": plan.valid_image,
                "scene_type": plan.scene_type,
                "has_image_prompt": bool(plan.image_prompt),
            }
        )

        return plan
