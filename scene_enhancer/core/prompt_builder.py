"""Instruction prompt for the scene analysis stage.

The builder is pure: identical inputs always give the identical prompt and
nothing is read or written. User text is interpolated as-is; the model is told
to answer with a fixed JSON object, which the analyzer then parses.
"""

import json
from typing import Any

PLAN_FIELDS = (
    "valid_image",
    "reason",
    "scene_type",
    "edit_summary",
    "placement_instructions",
    "lighting_instructions",
    "extra_improvements",
    "image_prompt",
)

PROMPT_TEMPLATE = """
You are an art director and interior designer who specializes in photorealistic visualizations.

Your task:
Analyze the user's image and return a JSON object with detailed instructions on how to integrate the product.

Respond strictly in JSON with this structure:

{{
  "valid_image": true/false,
  "reason": "",
  "scene_type": "",
  "edit_summary": "",
  "placement_instructions": "",
  "lighting_instructions": "",
  "extra_improvements": "",
  "image_prompt": ""
}}

User data:
- tipoAccion: {action_type}
- ideaCliente: {client_idea}
- productTitle: {product_title}
- productCategory: {product_category}
- productStyle: {product_style}
"""


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def build_prompt(
    action_type: Any = "auto",
    client_idea: Any = "",
    product_title: Any = "",
    product_category: Any = "",
    product_style: Any = "",
) -> str:
    """
    Build the system instruction for scene analysis.

    Args:
        action_type: Free-form edit intent tag ("auto" by default)
        client_idea: Client's own description of the desired result
        product_title: Product display name
        product_category: Product category
        product_style: Product style

    Returns:
        Instruction text demanding the edit plan JSON
    """
    return PROMPT_TEMPLATE.format(
        action_type=_display(action_type),
        client_idea=_display(client_idea),
        product_title=_display(product_title),
        product_category=_display(product_category),
        product_style=_display(product_style),
    )
