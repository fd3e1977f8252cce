from __future__ import annotations

from fastapi import APIRouter, Depends

from application.wishlist import NotificationSettingsService
from server.api.rest.dependencies import get_notification_settings_service
from server.models.schemas import EmailConfigRequest, EmailConfigResponse, MessageResponse

router = APIRouter(prefix="/api", tags=["email-config"])


@router.get("/email-config", response_model=EmailConfigResponse)
async def read_email_config(
    service: NotificationSettingsService = Depends(get_notification_settings_service),
) -> EmailConfigResponse:
    return EmailConfigResponse(**await service.describe())


@router.post("/email-config", response_model=MessageResponse)
async def write_email_config(
    req: EmailConfigRequest,
    service: NotificationSettingsService = Depends(get_notification_settings_service),
) -> MessageResponse:
    await service.update(
        account=req.account,
        credential=req.credential,
        admin_password=req.adminPassword,
    )
    return MessageResponse(message="Email configuration saved.")
