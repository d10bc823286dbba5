"""Unit tests for the sheet webhook and mailing-list clients."""

import pytest
import requests

from conftest import MAILCHIMP_URL, SHEETS_URL, make_response
from podcast_gateway.config.settings import Settings
from podcast_gateway.infra import mailchimp_client, sheets_client
from podcast_gateway.infra.errors import SinkError, SinkNotConfigured


class TestSheets:
    def test_json_reply_is_parsed(self, settings, sinks):
        sinks.responses[SHEETS_URL] = make_response(200, {"success": True, "row": 12})
        assert sheets_client.append_row({"email": "a@b.com"}, settings) == {"success": True, "row": 12}
        assert sinks.calls_to(SHEETS_URL)[0]["json"] == {"email": "a@b.com"}

    def test_plain_text_reply_is_wrapped(self, settings, sinks):
        sinks.responses[SHEETS_URL] = make_response(200, text="Row added")
        assert sheets_client.append_row({}, settings) == {"success": True, "message": "Row added"}

    def test_error_status_raises(self, settings, sinks):
        sinks.responses[SHEETS_URL] = make_response(403, text="forbidden")
        with pytest.raises(SinkError, match="Google Apps Script error: 403 - forbidden"):
            sheets_client.append_row({}, settings)

    def test_timeout_setting_is_passed(self, sinks):
        s = Settings(sheets_webhook_url=SHEETS_URL, sink_timeout=3.0)
        sheets_client.append_row({}, s)
        assert sinks.calls_to(SHEETS_URL)[0]["timeout"] == 3.0

    def test_unconfigured(self, sinks):
        with pytest.raises(SinkNotConfigured, match="Google Sheets not configured"):
            sheets_client.append_row({}, Settings())
        assert sinks.calls == []


class TestMailchimp:
    @pytest.mark.parametrize(
        "name, first, last",
        [
            ("Jane", "Jane", ""),
            ("Jane Doe", "Jane", "Doe"),
            ("  Jane Q Public ", "Jane", "Q Public"),
            ("", "", ""),
            (None, "", ""),
        ],
    )
    def test_split_name(self, name, first, last):
        assert mailchimp_client.split_name(name) == (first, last)

    def test_configured_tags_are_sent(self, sinks):
        s = Settings(mailchimp_api_key="k-us21", mailchimp_list_id="list123", mailchimp_tags=("a", "b"))
        assert mailchimp_client.subscribe("a@b.com", None, s) == {"tags": ["a", "b"]}
        assert sinks.calls_to(MAILCHIMP_URL)[0]["json"]["tags"] == ["a", "b"]

    def test_member_exists(self, settings, sinks):
        sinks.responses[MAILCHIMP_URL] = make_response(400, {"title": "Member Exists", "status": 400})
        assert mailchimp_client.subscribe("a@b.com", "Jane", settings) == {"message": "Already subscribed"}

    def test_other_error_raises(self, settings, sinks):
        sinks.responses[MAILCHIMP_URL] = make_response(401, {"title": "API Key Invalid", "status": 401})
        with pytest.raises(SinkError, match="Mailchimp API error: 401"):
            mailchimp_client.subscribe("a@b.com", "Jane", settings)

    def test_non_json_error_raises(self, settings, sinks):
        sinks.responses[MAILCHIMP_URL] = make_response(503, text="Service Unavailable")
        with pytest.raises(SinkError, match="503 - Service Unavailable"):
            mailchimp_client.subscribe("a@b.com", "Jane", settings)

    def test_network_error_propagates(self, settings, sinks):
        sinks.responses[MAILCHIMP_URL] = requests.Timeout("read timed out")
        with pytest.raises(requests.Timeout):
            mailchimp_client.subscribe("a@b.com", "Jane", settings)

    def test_unconfigured(self, sinks):
        with pytest.raises(SinkNotConfigured, match="Mailchimp not configured"):
            mailchimp_client.subscribe("a@b.com", "Jane", Settings(mailchimp_api_key="k-us1"))
        assert sinks.calls == []
