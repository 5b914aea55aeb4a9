"""
Follow-up actions recorded against a customer: comments, payment promises and
device collections.

Each write is independent. A collection creates its task first and only then
posts the confirming comment; if that comment fails the task stays in place.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from .timeutils import DateInput, format_day_month_year, local_timestamp, parse_date_input
from ..api.services.notes import NotesService
from ..api.services.tasks import TasksService
from ..config import PortalSettings, get_settings
from ..exceptions import SubmitError, ValidationError
from ..models import Administrator, CollectionTask, Customer, CustomerNote

logger = logging.getLogger(__name__)

COMMENT_TITLE = "Customer Comment"
PROMISE_TITLE = "Promise to Pay"
TASK_CREATION_TITLE = "Task Creation"
COLLECTION_DESCRIPTION = "Collect device from the customer"
NO_ADDRESS = "No address"
COLLECTION_DURATION = "1h 25m"


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _amount_text(amount: Any) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount).strip()


class ActionRecorder:
    """Writes notes and collection tasks through the portal API"""

    def __init__(self, notes: NotesService, tasks: TasksService,
                 settings: Optional[PortalSettings] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.notes = notes
        self.tasks = tasks
        self.settings = settings or get_settings()
        self.clock = clock

    def _timestamp(self, moment: Optional[datetime] = None) -> str:
        if moment is None and self.clock is not None:
            moment = self.clock()
        return local_timestamp(moment, self.settings.TIMEZONE)

    def assignee_for(self, admin: Administrator) -> int:
        # Routing rule owned by the field-operations team
        if admin.id in self.settings.TEAM_ADMIN_IDS:
            return self.settings.TEAM_ASSIGNEE
        return self.settings.DEFAULT_ASSIGNEE

    async def post_comment(self, customer_id: int, admin: Administrator, body_text: str,
                           title: str = COMMENT_TITLE) -> CustomerNote:
        """
        Append a comment note

        Raises:
            ValidationError: If the body is blank
            SubmitError: If the API rejects the note
        """
        if _blank(body_text):
            raise ValidationError("Comment text is required.")

        note = CustomerNote(
            customer_id=customer_id,
            datetime=self._timestamp(),
            administrator_id=admin.id,
            name=admin.name,
            type="comment",
            title=title,
            comment=body_text,
            is_done="1",
            is_send="1",
            is_pinned="0",
        )
        await self.notes.create_note(note)
        return note

    async def record_promise(self, customer_id: int, admin: Administrator,
                             amount: Any, due_date: Optional[DateInput]) -> CustomerNote:
        """
        Record a promise to pay as a comment

        Raises:
            ValidationError: If the amount or due date is missing or the date is unreadable
            SubmitError: If the API rejects the note
        """
        if _blank(amount) or _blank(due_date):
            raise ValidationError("Fill all fields")
        try:
            formatted_date = format_day_month_year(due_date)
        except ValueError:
            raise ValidationError(f"Invalid due date: {due_date}")

        amount_text = _amount_text(amount)
        text = f"Promised to pay R{amount_text} on {formatted_date}"
        return await self.post_comment(customer_id, admin, text, PROMISE_TITLE)

    def build_collection_task(self, customer: Customer, admin: Administrator,
                              collection_date: DateInput) -> CollectionTask:
        try:
            scheduled = parse_date_input(collection_date)
        except ValueError:
            raise ValidationError(f"Invalid collection date: {collection_date}")

        now = self._timestamp()
        return CollectionTask(
            title=customer.name,
            description=COLLECTION_DESCRIPTION,
            address=customer.street_1 or NO_ADDRESS,
            gps=customer.gps or "",
            related_customer_id=customer.id,
            created_at=now,
            updated_at=now,
            assignee=self.assignee_for(admin),
            assigned_at=now,
            scheduled_from=self._timestamp(scheduled),
            formatted_duration=COLLECTION_DURATION,
            last_status_changed=now,
            watchers=list(self.settings.TASK_WATCHERS),
        )

    async def schedule_collection(self, customer: Customer, admin: Administrator,
                                  collection_date: Optional[DateInput]) -> CollectionTask:
        """
        Create a device-collection task, then note it on the customer

        Raises:
            ValidationError: If the collection date is missing or unreadable
            SubmitError: If the task is rejected (no comment is posted), or the
                task was created but the confirming comment was rejected
        """
        if _blank(collection_date):
            raise ValidationError("Select a date")

        task = self.build_collection_task(customer, admin, collection_date)
        await self.tasks.create_task(task)

        entered = collection_date if isinstance(collection_date, str) else collection_date.isoformat()
        try:
            await self.post_comment(customer.id, admin, f"Collection Task created for {entered}",
                                    TASK_CREATION_TITLE)
        except SubmitError:
            logger.error(f"Collection task for customer {customer.id} was created but its comment failed")
            raise
        return task
