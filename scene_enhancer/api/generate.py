"""Enhancement endpoint: product image in, before/after payload out."""

import json
from typing import Any, Dict, Optional
from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse

from ..models.schemas import EnhancementRequest, EnhancementResult, ErrorResponse
from ..utils.logger import get_logger
from ..utils.errors import ImageRejectedError

logger = get_logger(__name__)

router = APIRouter()

DEFAULT_MAX_BODY_BYTES = 15 * 1024 * 1024

MISSING_IMAGE_MESSAGE = "Missing imageUrl in body."
INVALID_IMAGE_MESSAGE = "Invalid image"
BODY_TOO_LARGE_MESSAGE = "Request body too large."
INTERNAL_ERROR_MESSAGE = "Internal AI server error."


def error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    """Build the {error, detail?} body used by every failure."""
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def _load_payload(body: bytes) -> Dict[str, Any]:
    """Decode the JSON body; anything but an object counts as empty."""
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Request body is not valid JSON", extra={"body_bytes": len(body)})
        return {}
    return payload if isinstance(payload, dict) else {}


def _too_large(request: Request, max_body_bytes: int) -> bool:
    content_length = request.headers.get("content-length", "")
    return content_length.isdigit() and int(content_length) > max_body_bytes


async def _read_body(request: Request, max_body_bytes: int) -> Optional[bytes]:
    """Read the body chunk by chunk; None once it grows past the limit."""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_body_bytes:
            return None
    return bytes(body)


# ============================================================================
# DEPENDENCIES
# ============================================================================

async def get_orchestrator(request: Request):
    """Dependency to get the orchestrator from app state."""
    return request.app.state.orchestrator


async def get_max_body_bytes(request: Request) -> int:
    """Dependency to get the configured body size limit."""
    return getattr(request.app.state, "max_body_bytes", DEFAULT_MAX_BODY_BYTES)


# ============================================================================
# ENDPOINT
# ============================================================================

@router.post("/generate", response_model=EnhancementResult)
async def generate(
    request: Request,
    orchestrator=Depends(get_orchestrator),
    max_body_bytes: int = Depends(get_max_body_bytes),
):
    """
    Analyze a product image and return a staged before/after result.

    400 when imageUrl is missing or analysis rejects the image, 413 when
    the body exceeds the size limit, 500 for anything else. Generation
    failures never fail the request; the original image is returned.
    """
    try:
        if _too_large(request, max_body_bytes):
            return error_response(413, BODY_TOO_LARGE_MESSAGE)

        body = await _read_body(request, max_body_bytes)
        if body is None:
            return error_response(413, BODY_TOO_LARGE_MESSAGE)

        payload = _load_payload(body)

        if not payload.get("imageUrl"):
            logger.warning("Request without imageUrl rejected")
            return error_response(400, MISSING_IMAGE_MESSAGE)

        enhancement_request = EnhancementRequest.model_validate(payload)

        return await orchestrator.process(enhancement_request)

    except ImageRejectedError as e:
        return error_response(400, INVALID_IMAGE_MESSAGE, e.reason)

    except Exception as e:
        logger.error(
            f"Error in /generate: {e}",
            extra={"error": str(e)},
            exc_info=True
        )
        return error_response(500, INTERNAL_ERROR_MESSAGE)
