import json
import logging
from typing import Any

import requests

from podcast_gateway.config.settings import Settings
from podcast_gateway.infra.errors import SinkError, SinkNotConfigured

logger = logging.getLogger(__name__)


def append_row(payload: dict, settings: Settings) -> Any:
    """POST one submission to the Apps Script webhook that appends a sheet row.

    The webhook may answer with JSON or plain text; plain text is wrapped as
    ``{"success": True, "message": text}``.
    """
    if not settings.sheets_configured:
        logger.warning("Google Apps Script webhook URL not configured")
        raise SinkNotConfigured("Google Sheets not configured")

    logger.info("Sending submission to Google Sheets webhook")
    logger.debug("Sheets payload: %s", json.dumps(payload, ensure_ascii=False))
    r = requests.post(settings.sheets_webhook_url, json=payload, timeout=settings.sink_timeout)
    text = r.text
    logger.info("Google Sheets response status: %s", r.status_code)
    if not r.ok:
        raise SinkError(f"Google Apps Script error: {r.status_code} - {text}")
    try:
        return json.loads(text)
    except ValueError:
        return {"success": True, "message": text}
