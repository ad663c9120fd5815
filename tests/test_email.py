"""Tests for email templates and the SES email service."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from app.config import Settings
from app.services.email_service import EmailDeliveryError, EmailService
from app.services.email_templates import (
    booking_confirmation_email,
    format_show_date,
    format_show_time,
    new_show_email,
    show_reminder_email,
)

TZ = "Asia/Kolkata"


class TestFormatting:
    @pytest.mark.parametrize(
        "value, date, time",
        [
            (datetime(2026, 10, 20, 14, 0), "10/20/2026", "7:30:00 PM"),
            (datetime(2026, 10, 20, 18, 30), "10/21/2026", "12:00:00 AM"),
            (datetime(2026, 1, 5, 6, 30, 5), "1/5/2026", "12:00:05 PM"),
            (datetime(2026, 3, 1, 0, 15, tzinfo=timezone.utc), "3/1/2026", "5:45:00 AM"),
        ],
    )
    def test_en_us_formats_in_display_timezone(self, value, date, time):
        assert format_show_date(value, TZ) == date
        assert format_show_time(value, TZ) == time


class TestTemplates:
    def test_reminder_mentions_hours_to_go(self):
        message = show_reminder_email("Ana", "Dune", datetime(2026, 10, 20, 14, 0), TZ, hours_to_go=8)

        assert message.subject == '🎬 Reminder: Your movie "Dune" starts soon!'
        assert "Hey Ana," in message.body
        assert "8 hours to go" in message.body

    def test_user_supplied_text_is_escaped(self):
        message = booking_confirmation_email("<b>Ana</b>", "Dune", datetime(2026, 10, 20, 14, 0), TZ)

        assert "&lt;b&gt;Ana&lt;/b&gt;" in message.body
        assert "<b>Ana</b>" not in message.body

    def test_new_show_links_to_site(self):
        message = new_show_email("Ana", "Dune", "https://quickshow.example/")

        assert message.subject == "🎬 New Show Added: Dune"
        assert 'href="https://quickshow.example/"' in message.body


@pytest.mark.unit
class TestEmailService:
    @pytest.fixture
    def settings(self):
        return Settings(
            EMAIL_DEVELOPMENT_MODE=False,
            SENDER_EMAIL="tickets@quickshow.example",
            SENDER_NAME="QuickShow",
        )

    @pytest.mark.asyncio
    async def test_development_mode_logs_only(self):
        service = EmailService(Settings(EMAIL_DEVELOPMENT_MODE=True))

        result = await service.send_email("ana@example.com", "Hi", "<p>Hi</p>")

        assert service.development_mode is True
        assert result is None

    @pytest.mark.asyncio
    async def test_sends_html_through_ses(self, settings):
        ses = Mock()
        ses.send_email.return_value = {"MessageId": "msg-1"}
        service = EmailService(settings, ses_client=ses)

        result = await service.send_email("ana@example.com", "Hi", "<p>Hi</p>")

        assert result == "msg-1"
        kwargs = ses.send_email.call_args.kwargs
        assert kwargs["Source"] == "QuickShow <tickets@quickshow.example>"
        assert kwargs["Destination"] == {"ToAddresses": ["ana@example.com"]}
        assert kwargs["Message"]["Subject"]["Data"] == "Hi"
        assert kwargs["Message"]["Body"]["Html"]["Data"] == "<p>Hi</p>"

    @pytest.mark.asyncio
    async def test_ses_rejection_raises_delivery_error(self, settings):
        ses = Mock()
        ses.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "Email address is not verified."}},
            "SendEmail",
        )
        service = EmailService(settings, ses_client=ses)

        with pytest.raises(EmailDeliveryError, match="MessageRejected"):
            await service.send_email("ana@example.com", "Hi", "<p>Hi</p>")

    @pytest.mark.asyncio
    async def test_connection_failure_raises_delivery_error(self, settings):
        ses = Mock()
        ses.send_email.side_effect = EndpointConnectionError(endpoint_url="https://email.us-east-1.amazonaws.com")
        service = EmailService(settings, ses_client=ses)

        with pytest.raises(EmailDeliveryError):
            await service.send_email("ana@example.com", "Hi", "<p>Hi</p>")
