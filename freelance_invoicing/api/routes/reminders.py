"""
Reminder management endpoints.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from freelance_invoicing.api.dependencies import get_reminder_service
from freelance_invoicing.application.dto.requests import (
    CreateReminderRequest,
    UpdateReminderRequest,
)
from freelance_invoicing.application.dto.responses import ErrorResponse, ReminderResponse
from freelance_invoicing.application.reminder_service import ReminderService

router = APIRouter(prefix="/api/reminders", tags=["reminders"])

_VALIDATION = {400: {"model": ErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=list[ReminderResponse],
    responses=_VALIDATION,
)
async def list_reminders(
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0),
    status_filter: str | None = Query(default=None, alias="status"),
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    service: ReminderService = Depends(get_reminder_service),
) -> list[ReminderResponse]:
    """List reminders with invoice and client details."""
    reminders = await service.list_reminders(
        limit=limit,
        offset=offset,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
    )
    return [ReminderResponse.from_entity(r) for r in reminders]


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_VALIDATION,
)
async def create_reminder(
    request: CreateReminderRequest,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Create a new reminder."""
    created = await service.create_reminder(request)
    return ReminderResponse.from_entity(created)


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
)
async def get_reminder(
    reminder_id: str,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Get a reminder by ID."""
    reminder = await service.get_reminder(reminder_id)
    return ReminderResponse.from_entity(reminder)


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={**_VALIDATION, **_NOT_FOUND},
)
async def update_reminder(
    reminder_id: str,
    request: UpdateReminderRequest,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Update any subset of a reminder's editable fields."""
    updated = await service.update_reminder(reminder_id, request)
    return ReminderResponse.from_entity(updated)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
)
async def delete_reminder(
    reminder_id: str,
    service: ReminderService = Depends(get_reminder_service),
) -> Response:
    """Delete a reminder."""
    await service.delete_reminder(reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
