import asyncio
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.modules.task.models import Task
from kanban.core.modules.webhook.models import WebhookChanges, WebhookEvent, WebhookPayload, WebhookTask
from kanban.core.modules.webhook.sender import post_webhook

logger = structlog.get_logger(__name__)


class WebhookService(Service):
    """Fire-and-forget task notifications to the configured webhook URL."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._tasks: set[asyncio.Task[None]] = set()

    async def on_start(self) -> None:
        logger.debug("webhook_service_started", enabled=self.core.config.webhook_url is not None)

    async def on_stop(self) -> None:
        await self.drain()

    async def drain(self) -> None:
        """Wait for all scheduled deliveries to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @staticmethod
    def build_payload(
        event: WebhookEvent, task: Task, from_column: str | None = None, to_column: str | None = None
    ) -> WebhookPayload:
        changes = None
        if from_column is not None or to_column is not None:
            changes = WebhookChanges(from_=from_column, to=to_column)
        return WebhookPayload(
            event=event,
            task=WebhookTask(
                id=str(task.id),
                title=task.title,
                description=task.description,
                priority=task.priority,
                column_id=task.column_id,
            ),
            changes=changes,
        )

    async def _deliver(self, url: str, payload: WebhookPayload) -> None:
        try:
            success, error_msg = await post_webhook(url, self.core.config.webhook_token, payload)
            if not success:
                logger.warning("webhook_failed", event=payload.event, task_id=payload.task.id, error=error_msg)
        except Exception as e:
            logger.exception("webhook_error", event=payload.event, task_id=payload.task.id, error=str(e))

    def notify(
        self, event: WebhookEvent, task: Task, from_column: str | None = None, to_column: str | None = None
    ) -> None:
        """Schedule delivery in the background; a no-op when no webhook URL is configured."""
        url = self.core.config.webhook_url
        if not url:
            logger.debug("webhook_skipped", event=event, task_id=task.id)
            return
        payload = self.build_payload(event, task, from_column, to_column)
        delivery = asyncio.create_task(self._deliver(url, payload))
        self._tasks.add(delivery)
        delivery.add_done_callback(self._tasks.discard)
