"""Pydantic schemas for data validation."""

from typing import Any, Optional
from pydantic import BaseModel, Field

from .enums import GenerationStatus


class EnhancementRequest(BaseModel):
    """
    Inbound body of POST /generate.

    Fields are untyped on purpose: prompt inputs are rendered as text and
    product fields are echoed back exactly as the storefront sent them.
    """
    image_url: Any = Field(default=None, alias="imageUrl")
    action_type: Any = Field(default="auto", alias="tipoAccion")
    client_idea: Any = Field(default="", alias="ideaCliente")
    product_title: Any = ""
    product_category: Any = ""
    product_style: Any = ""
    product_id: Any = ""
    product_price: Any = ""

    class Config:
        populate_by_name = True


class EditPlan(BaseModel):
    """
    Scene analysis result. Every field is optional in the model output.

    Descriptive fields keep whatever JSON value the model produced
    (string, list, object); reason and image_prompt are always text.
    """
    valid_image: bool = False
    reason: str = ""
    scene_type: Any = ""
    edit_summary: Any = ""
    placement_instructions: Any = ""
    lighting_instructions: Any = ""
    extra_improvements: Any = ""
    image_prompt: str = ""


class GenerationOutcome(BaseModel):
    """Result of the best-effort generation stage."""
    status: GenerationStatus
    image_url: Optional[str] = None
    prompt_used: str = ""
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == GenerationStatus.SUCCEEDED and bool(self.image_url)


class EnhancementResult(BaseModel):
    """Before/after payload returned to the storefront."""
    before_img: Any
    after_img: Any
    product_title: Any = ""
    product_price: Any = ""
    product_id: Any = ""
    scene_type: Any = ""
    edit_summary: Any = ""
    placement_instructions: Any = ""
    lighting_instructions: Any = ""
    extra_improvements: Any = ""


class ErrorResponse(BaseModel):
    """Error body shared by every non-200 response."""
    error: str
    detail: Optional[str] = None
