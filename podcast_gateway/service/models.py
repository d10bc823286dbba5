from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from podcast_gateway.service.fanout import Settled

ANONYMOUS = "Anonymous"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SubmissionRecord(BaseModel):
    """One form submission, parsed once at the edge and never mutated."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    email: str
    name: Optional[str] = None
    timestamp: str = Field(default_factory=utc_now_iso)
    audience: str = ""
    guest_bio: str = Field("", alias="guestBio")
    questions: str = ""
    generate_mode: bool = Field(False, alias="generateMode")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _receipt_time_when_blank(cls, value: Any) -> Any:
        return value or utc_now_iso()

    @field_validator("audience", "guest_bio", "questions", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("generate_mode", mode="before")
    @classmethod
    def _unset_flag(cls, value: Any) -> Any:
        return False if value is None else value

    def sheet_payload(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "email": self.email,
            "name": self.name or ANONYMOUS,
            "audience": self.audience,
            "guestBio": self.guest_bio,
            "questions": self.questions,
            "generateMode": self.generate_mode,
        }


@dataclass(frozen=True)
class SinkOutcome:
    success: bool
    data: Any = None
    error: Optional[str] = None
    message: Optional[str] = None
    tags: Optional[list[str]] = None

    @classmethod
    def from_settled(cls, settled: Settled) -> "SinkOutcome":
        if not settled.ok:
            return cls(success=False, error=settled.error_message)
        return cls(success=True, **(settled.value or {}))

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


def either_succeeded(outcomes: Iterable[SinkOutcome]) -> bool:
    outcomes = list(outcomes)
    return any(o.success for o in outcomes) or not any(o.error for o in outcomes)


@dataclass(frozen=True)
class FanOutResult:
    success: bool
    sheets: SinkOutcome
    mailchimp: SinkOutcome

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "sheets": self.sheets.to_dict(),
            "mailchimp": self.mailchimp.to_dict(),
        }
