import json
import logging
from typing import Optional

import requests

from podcast_gateway.config.settings import Settings
from podcast_gateway.infra.errors import SinkError, SinkNotConfigured

logger = logging.getLogger(__name__)

MEMBER_EXISTS = "Member Exists"


def split_name(name: Optional[str]) -> tuple[str, str]:
    parts = (name or "").strip().split(" ")
    first = parts[0]
    last = " ".join(parts[1:])
    return first, last


def build_member(email: str, name: Optional[str], tags: list[str]) -> dict:
    first, last = split_name(name)
    return {
        "email_address": email,
        "status": "subscribed",
        "merge_fields": {"FNAME": first, "LNAME": last},
        "tags": tags,
    }


def subscribe(email: str, name: Optional[str], settings: Settings) -> dict:
    """Add a subscriber to the configured audience list with the integration tags.

    An address that is already on the list counts as subscribed.
    """
    if not settings.mailchimp_configured:
        logger.warning("Mailchimp credentials not configured")
        raise SinkNotConfigured("Mailchimp not configured")

    tags = list(settings.mailchimp_tags)
    r = requests.post(
        settings.mailchimp_members_url,
        headers={"Authorization": f"Bearer {settings.mailchimp_api_key}"},
        json=build_member(email, name, tags),
        timeout=settings.sink_timeout,
    )
    if not r.ok:
        try:
            error_data = r.json()
        except ValueError:
            raise SinkError(f"Mailchimp API error: {r.status_code} - {r.text}")
        if isinstance(error_data, dict) and error_data.get("title") == MEMBER_EXISTS:
            logger.info("Subscriber already exists in Mailchimp")
            return {"message": "Already subscribed"}
        raise SinkError(f"Mailchimp API error: {r.status_code} - {json.dumps(error_data)}")

    logger.info("Added subscriber to Mailchimp with tags %s", tags)
    return {"tags": tags}
