"""Reminder schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import BaseSchema


class ReminderTask(BaseSchema):
    """One reminder email to send for a (show, user) pair."""

    user_email: str = Field(..., alias="userEmail")
    user_name: str = Field(..., alias="userName")
    movie_title: str = Field(..., alias="movieTitle")
    show_time: datetime = Field(..., alias="showTime")


class ReminderSummary(BaseSchema):
    """Result of a reminder run."""

    sent: int = 0
    failed: int | None = None
    message: str

    @classmethod
    def empty(cls) -> "ReminderSummary":
        return cls(sent=0, message="No reminders to send.")

    @classmethod
    def from_outcomes(cls, sent: int, failed: int) -> "ReminderSummary":
        return cls(
            sent=sent,
            failed=failed,
            message=f"Sent {sent} reminder(s), {failed} failed.",
        )
