"""
Portal Customer Notes Service

Reads and appends customer notes. The API has no per-customer filter, so
notes are always fetched in full and filtered here.
"""

import logging
from typing import Any, List

from ..client import PortalApiClient, parse_records
from ..config import NOTES
from ...models import CustomerNote


logger = logging.getLogger(__name__)


class NotesService:
    """Service for customer notes"""

    def __init__(self, client: PortalApiClient):
        """
        Initialize NotesService

        Args:
            client: Portal API client instance
        """
        self.client = client

    async def list_notes(self) -> List[CustomerNote]:
        """
        Fetch the complete note set

        Raises:
            TransportError: If the read fails
        """
        payload = await self.client.get(NOTES)
        return parse_records(CustomerNote, payload, "customer notes")

    async def notes_for_customer(self, customer_id: int) -> List[CustomerNote]:
        """
        Notes of one customer, in the order the API returned them

        Args:
            customer_id: Portal customer ID
        """
        notes = await self.list_notes()
        relevant = [note for note in notes if note.customer_id == customer_id]
        logger.info(f"Found {len(relevant)} notes for customer {customer_id}")
        return relevant

    async def create_note(self, note: CustomerNote) -> Any:
        """
        Append a note

        Args:
            note: Note to create

        Returns:
            The API's response body

        Raises:
            SubmitError: If the API rejects the note
        """
        logger.info(f"Creating '{note.title}' note for customer {note.customer_id}")
        return await self.client.post(NOTES, data=note.model_dump(exclude_none=True))
