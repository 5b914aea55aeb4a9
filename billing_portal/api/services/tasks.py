"""
Portal Scheduling Tasks Service
"""

import logging
from typing import Any

from ..client import PortalApiClient
from ..config import TASKS
from ...models import CollectionTask


logger = logging.getLogger(__name__)


class TasksService:
    """Service for creating scheduling tasks"""

    def __init__(self, client: PortalApiClient):
        self.client = client

    async def create_task(self, task: CollectionTask) -> Any:
        """
        Create a scheduling task

        Raises:
            SubmitError: If the API rejects the task
        """
        logger.info(f"Creating collection task for customer {task.related_customer_id}")
        response = await self.client.post(TASKS, data=task.model_dump())
        logger.info(f"Created collection task for customer {task.related_customer_id}")
        return response
