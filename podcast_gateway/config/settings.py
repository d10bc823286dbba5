import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Configuration entry points. Secrets are read from the environment once at
# startup and handed to the app; nothing reads os.environ per request.
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_MODEL = "gpt-4o"

MAILCHIMP_API_URL = "https://{dc}.api.mailchimp.com/3.0/lists/{list_id}/members"
MAILCHIMP_DEFAULT_DC = "us10"
DEFAULT_MAILCHIMP_TAGS = ("podcast-question-generator",)

DEFAULT_PORT = 5001

_TRUTHY = {"1", "true", "yes", "on"}


def parse_tags(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_MAILCHIMP_TAGS
    tags = tuple(t.strip() for t in raw.split(",") if t.strip())
    return tags or DEFAULT_MAILCHIMP_TAGS


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"SINK_TIMEOUT_SECONDS must be a number, got {raw!r}") from None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_base_url: str = OPENAI_BASE_URL
    openai_model: str = OPENAI_MODEL
    sheets_webhook_url: str = ""
    mailchimp_api_key: str = ""
    mailchimp_list_id: str = ""
    mailchimp_tags: tuple[str, ...] = DEFAULT_MAILCHIMP_TAGS
    sink_timeout: Optional[float] = None
    log_level: str = "INFO"
    log_json: bool = False
    port: int = DEFAULT_PORT

    @property
    def sheets_configured(self) -> bool:
        return bool(self.sheets_webhook_url)

    @property
    def mailchimp_configured(self) -> bool:
        return bool(self.mailchimp_api_key and self.mailchimp_list_id)

    @property
    def mailchimp_data_center(self) -> str:
        # Mailchimp keys look like "xxxxxxxx-us10"; the suffix picks the host.
        parts = self.mailchimp_api_key.split("-")
        if len(parts) > 1 and parts[1]:
            return parts[1]
        return MAILCHIMP_DEFAULT_DC

    @property
    def mailchimp_members_url(self) -> str:
        return MAILCHIMP_API_URL.format(dc=self.mailchimp_data_center, list_id=self.mailchimp_list_id)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY", ""),
        openai_base_url=env.get("OPENAI_BASE_URL") or OPENAI_BASE_URL,
        openai_model=env.get("OPENAI_MODEL") or OPENAI_MODEL,
        sheets_webhook_url=env.get("GOOGLE_APPS_SCRIPT_WEBHOOK_URL", ""),
        mailchimp_api_key=env.get("MAILCHIMP_API_KEY", ""),
        mailchimp_list_id=env.get("MAILCHIMP_LIST_ID", ""),
        mailchimp_tags=parse_tags(env.get("MAILCHIMP_TAGS")),
        sink_timeout=_parse_timeout(env.get("SINK_TIMEOUT_SECONDS")),
        log_level=env.get("LOG_LEVEL") or "INFO",
        log_json=env.get("LOG_JSON", "").strip().lower() in _TRUTHY,
        port=int(env.get("PORT") or DEFAULT_PORT),
    )
