"""
Reminder service.

Validates identifiers and query parameters, then delegates to whichever
IReminderStore it was built with. Responses look the same whether the store
is in memory or SQLite.
"""

from uuid import UUID, uuid4

from freelance_invoicing.application.dto.requests import (
    CreateReminderRequest,
    UpdateReminderRequest,
)
from freelance_invoicing.config import get_logger, get_settings
from freelance_invoicing.core.datetimes import parse_iso8601, truncate, utcnow
from freelance_invoicing.core.entities.reminder import Reminder, ReminderStatus, ReminderType
from freelance_invoicing.core.exceptions import (
    FieldViolation,
    NoFieldsToUpdateError,
    ReminderNotFoundError,
    ValidationError,
)
from freelance_invoicing.core.identifiers import parse_reminder_id
from freelance_invoicing.core.interfaces.storage import IReminderStore, ReminderFilters

logger = get_logger(__name__)


class ReminderService:
    """List, get, create, update and delete payment reminders."""

    def __init__(self, store: IReminderStore) -> None:
        self._store = store

    @property
    def store(self) -> IReminderStore:
        return self._store

    async def list_reminders(
        self,
        limit: int | None = None,
        offset: int | None = None,
        status: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[Reminder]:
        """
        List reminders with optional invoice-status and date-range filters.

        Raises:
            ValidationError: listing every malformed parameter
        """
        violations: list[FieldViolation] = []
        max_page_size = get_settings().api.max_page_size

        if limit is not None and not 1 <= limit <= max_page_size:
            violations.append(
                FieldViolation("limit", f"limit must be between 1 and {max_page_size}")
            )
        if offset is not None and offset < 0:
            violations.append(FieldViolation("offset", "offset must be 0 or greater"))

        bounds = {}
        for field, raw in (("from", date_from), ("to", date_to)):
            if raw is None:
                continue
            try:
                # a date-only "to" includes that whole day
                bounds[field] = truncate(parse_iso8601(raw, end_of_day=field == "to"))
            except ValueError:
                violations.append(FieldViolation(field, f"{field} must be an ISO 8601 date"))

        if violations:
            raise ValidationError(violations)

        status = status.strip() if status else None
        filters = ReminderFilters(
            invoice_status=status or None,
            date_from=bounds.get("from"),
            date_to=bounds.get("to"),
            limit=limit,
            offset=offset or 0,
        )
        return await self._store.list_reminders(filters)

    async def get_reminder(self, reminder_id: str | UUID) -> Reminder:
        """
        Get one reminder.

        Raises:
            ValidationError: if the id is not a UUID
            ReminderNotFoundError: if no reminder has this id
        """
        parsed = parse_reminder_id(reminder_id)
        reminder = await self._store.get(parsed)
        if reminder is None:
            raise ReminderNotFoundError(parsed)
        return reminder

    async def create_reminder(self, request: CreateReminderRequest) -> Reminder:
        """Create a reminder with a fresh id and defaults applied."""
        now = utcnow()
        reminder = Reminder(
            reminder_id=uuid4(),
            invoice_id=request.invoice_id,
            client_name=request.client_name,
            email=request.email,
            reminder_date=request.reminder_date or now,
            message=request.message,
            type=request.type or ReminderType.POLITE,
            status=request.status or ReminderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        created = await self._store.create(reminder)
        logger.info(
            "reminder_create_accepted",
            reminder_id=str(created.reminder_id),
            invoice_id=created.invoice_id.to_storage(),
        )
        return created

    async def update_reminder(
        self, reminder_id: str | UUID, request: UpdateReminderRequest
    ) -> Reminder:
        """
        Apply a partial update.

        Raises:
            ValidationError: if the id is not a UUID
            NoFieldsToUpdateError: if the request carries no updatable field
            ReminderNotFoundError: if no updatable reminder has this id
        """
        parsed = parse_reminder_id(reminder_id)
        patch = request.to_patch()
        if not patch:
            raise NoFieldsToUpdateError()

        updated = await self._store.update(parsed, patch)
        if updated is None:
            raise ReminderNotFoundError(parsed)
        return updated

    async def delete_reminder(self, reminder_id: str | UUID) -> None:
        """
        Delete a reminder.

        Raises:
            ValidationError: if the id is not a UUID
            ReminderNotFoundError: if no reminder has this id
        """
        parsed = parse_reminder_id(reminder_id)
        if not await self._store.delete(parsed):
            raise ReminderNotFoundError(parsed)
