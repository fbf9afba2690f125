import logging
from typing import Any, Dict, Optional

import requests

from solar_lead_relay.models.schemas import WebhookResult

logger = logging.getLogger(__name__)


def send_to_webhook(data: Dict[str, Any], webhook_url: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """POST the combined lead document to the n8n webhook.

    Failures are reported in the returned dict and never raised.
    """
    logger.info("Sending data to n8n webhook: %s", webhook_url)
    try:
        resp = requests.post(webhook_url, json=data, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.error("n8n webhook rejected the payload (%s): %s", status, e)
        return WebhookResult(success=False, error=str(e), statusCode=status).model_dump(exclude_none=True)
    except requests.RequestException as e:
        logger.error("Error sending data to n8n webhook: %s", e)
        return WebhookResult(success=False, error=str(e)).model_dump(exclude_none=True)

    logger.info("n8n webhook response status: %s", resp.status_code)
    return WebhookResult(success=True, statusCode=resp.status_code).model_dump(exclude_none=True)
