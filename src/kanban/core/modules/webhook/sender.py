"""Webhook delivery over HTTP."""

import httpx
import structlog

from kanban.core.modules.webhook.models import WebhookPayload

logger = structlog.get_logger(__name__)

WEBHOOK_TIMEOUT_SECONDS = 10.0


async def post_webhook(
    url: str, token: str | None, payload: WebhookPayload, transport: httpx.AsyncBaseTransport | None = None
) -> tuple[bool, str | None]:
    """POST a payload to the webhook target.

    ``transport`` replaces the network transport, e.g. with ``httpx.MockTransport``.

    Returns:
        Tuple of (success: bool, error_message: str | None)
    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with httpx.AsyncClient(timeout=WEBHOOK_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(
                url,
                content=payload.model_dump_json(by_alias=True, exclude_none=True),
                headers=headers,
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        error_msg = f"{e.response.status_code} {e.response.reason_phrase}"
        logger.warning("webhook_rejected", event=payload.event, status_code=e.response.status_code)
        return False, error_msg
    except httpx.HTTPError as e:
        error_msg = str(e)
        logger.exception("webhook_send_error", event=payload.event, error=error_msg)
        return False, error_msg
    else:
        logger.debug("webhook_sent", event=payload.event, task_id=payload.task.id)
        return True, None
