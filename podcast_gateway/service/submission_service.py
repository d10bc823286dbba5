import logging
from typing import Any

from pydantic import ValidationError

from podcast_gateway.config.settings import Settings
from podcast_gateway.infra import mailchimp_client, sheets_client
from podcast_gateway.service.fanout import settle_all
from podcast_gateway.service.models import FanOutResult, SinkOutcome, SubmissionRecord, either_succeeded

logger = logging.getLogger(__name__)

SHEETS = "sheets"
MAILCHIMP = "mailchimp"


class SubmissionError(ValueError):
    """The client sent a submission that cannot be accepted."""


def parse_submission(payload: Any) -> SubmissionRecord:
    if not isinstance(payload, dict):
        raise SubmissionError("Request body must be a JSON object")
    email = payload.get("email")
    if email is None or (isinstance(email, str) and not email.strip()):
        raise SubmissionError("Email is required")
    try:
        return SubmissionRecord.model_validate(payload)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"])
        raise SubmissionError(f"Invalid submission: {field}: {err['msg']}") from e


def submit(record: SubmissionRecord, settings: Settings) -> FanOutResult:
    """Send one submission to the sheet and the mailing list at the same time.

    Both sinks are always attempted; either one failing only shows up in its
    own outcome.
    """
    settled = settle_all({
        SHEETS: lambda: {"data": sheets_client.append_row(record.sheet_payload(), settings)},
        MAILCHIMP: lambda: mailchimp_client.subscribe(record.email, record.name, settings),
    })
    sheets = SinkOutcome.from_settled(settled[SHEETS])
    mailchimp = SinkOutcome.from_settled(settled[MAILCHIMP])
    success = either_succeeded([sheets, mailchimp])
    if not success:
        logger.error("Submission failed on every sink: sheets=%s mailchimp=%s", sheets.error, mailchimp.error)
    return FanOutResult(success=success, sheets=sheets, mailchimp=mailchimp)
