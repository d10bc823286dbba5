import logging
from typing import Any, Optional

import httpx
from openai import APIStatusError, OpenAI

from podcast_gateway.config.settings import Settings

logger = logging.getLogger(__name__)


def get_client(settings: Settings, http_client: Optional[httpx.Client] = None) -> OpenAI:
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not set. Export it before starting the gateway.")
    return OpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        max_retries=0,
        http_client=http_client,
    )


def forward_chat_completion(body: Any, settings: Settings) -> tuple[int, Any]:
    """Send a chat-completion body upstream untouched.

    Returns the upstream status code and decoded JSON body. Error statuses are
    returned, not raised, so the caller can mirror them to its own client.
    """
    client = get_client(settings)
    try:
        response = client.post("/chat/completions", cast_to=httpx.Response, body=body)
    except APIStatusError as exc:
        logger.warning("LLM upstream returned %s", exc.status_code)
        response = exc.response
    return response.status_code, response.json()


def complete_chat(request: dict, settings: Settings) -> dict:
    client = get_client(settings)
    return client.chat.completions.create(**request).model_dump()
