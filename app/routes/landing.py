# app/routes/landing.py
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
import logging
from app.dependencies import get_landing_service
from app.errors import ValidationError, StoreWriteError
from app.models.landing import (
    ContactRequest, SubscribeRequest, TrackClickRequest, LandingResponse
)
from app.services.landing_service import LandingService
from app.utils.request_metadata import extract_request_metadata

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["landing"])

FAILURE_MESSAGES = {
    "contact upsert": "Failed to save contact",
    "subscription upsert": "Failed to subscribe",
    "button click insert": "Failed to track click",
}

def envelope(status_code: int, success: bool, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=LandingResponse(success=success, message=message, **extra).to_content()
    )

def failure_response(error: Exception, endpoint: str) -> JSONResponse:
    """Map a handler exception onto the landing envelope"""
    if isinstance(error, ValidationError):
        logger.warning(f"{endpoint} validation error: {error}")
        return envelope(status.HTTP_400_BAD_REQUEST, False, str(error))

    if isinstance(error, StoreWriteError):
        logger.error(f"{endpoint} store error: {error}")
        message = FAILURE_MESSAGES.get(error.operation, "An error occurred")
        return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, False, message)

    logger.error(f"{endpoint} API error: {error}", exc_info=True)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, False, "An error occurred")

@router.post("/contact", response_model=LandingResponse)
async def submit_contact(
    body: ContactRequest,
    request: Request,
    service: LandingService = Depends(get_landing_service)
):
    """Popup contact form submission"""
    try:
        contact_id = await service.submit_contact(body, extract_request_metadata(request))
    except Exception as e:
        return failure_response(e, "Contact")

    return envelope(
        status.HTTP_200_OK, True, "Contact saved successfully",
        contact_id=contact_id
    )

@router.post("/subscribe", response_model=LandingResponse)
async def subscribe(
    body: SubscribeRequest,
    request: Request,
    service: LandingService = Depends(get_landing_service)
):
    """Newsletter signup"""
    try:
        await service.subscribe(body, extract_request_metadata(request))
    except Exception as e:
        return failure_response(e, "Subscribe")

    return envelope(status.HTTP_200_OK, True, "Successfully subscribed!")

@router.post("/track-click", response_model=LandingResponse)
async def track_click(
    body: TrackClickRequest,
    request: Request,
    service: LandingService = Depends(get_landing_service)
):
    """Button click analytics"""
    try:
        metadata = extract_request_metadata(request, session_id=body.session_id)
        await service.track_click(body, metadata)
    except Exception as e:
        return failure_response(e, "Track click")

    return envelope(status.HTTP_200_OK, True, "Click tracked")
