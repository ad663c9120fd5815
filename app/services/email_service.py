"""Email service for sending transactional emails via AWS SES.

In development mode emails are logged instead of sent, so the handlers can
run locally without AWS credentials.
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Email could not be delivered."""

    pass


class EmailService:
    """Service for sending HTML emails via AWS SES."""

    def __init__(self, settings: Settings | None = None, ses_client=None):
        """
        Initialize email service.

        Args:
            settings: Application settings, defaults to the cached settings
            ses_client: Pre-built SES client, mainly for tests
        """
        settings = settings or get_settings()

        self.from_email = settings.SENDER_EMAIL
        self.from_name = settings.SENDER_NAME
        self.development_mode = settings.EMAIL_DEVELOPMENT_MODE and ses_client is None

        if self.development_mode:
            self.ses_client = None
            logger.info("Email service in development mode (emails will be logged)")
        elif ses_client is not None:
            self.ses_client = ses_client
        else:
            self.ses_client = boto3.client(
                "ses",
                region_name=settings.AWS_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            )
            logger.info("AWS SES client initialized")

    @property
    def source(self) -> str:
        return f"{self.from_name} <{self.from_email}>"

    async def send_email(self, to: str, subject: str, body: str) -> str | None:
        """
        Send an HTML email.

        Args:
            to: Recipient email address
            subject: Email subject line
            body: HTML email body

        Returns:
            SES message ID, or None in development mode

        Raises:
            EmailDeliveryError: If SES rejects the message or is unreachable
        """
        if self.development_mode:
            logger.info(f"EMAIL (development mode, not sent) to={to} subject={subject}")
            logger.debug(body)
            return None

        try:
            response = await asyncio.to_thread(
                self.ses_client.send_email,
                Source=self.source,
                Destination={"ToAddresses": [to]},
                Message={
                    "Subject": {"Charset": "UTF-8", "Data": subject},
                    "Body": {"Html": {"Charset": "UTF-8", "Data": body}},
                },
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"SES rejected email to {to}: {error_code}")
            raise EmailDeliveryError(f"Failed to send email to {to}: {error_code}") from e
        except BotoCoreError as e:
            logger.error(f"SES unavailable sending email to {to}: {e}")
            raise EmailDeliveryError(f"Failed to send email to {to}: {e}") from e

        message_id = response.get("MessageId")
        logger.info(f"Email sent to {to} (message_id={message_id})")
        return message_id
