"""HTML email templates."""

from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class EmailMessage:
    """Rendered email."""

    subject: str
    body: str


def _localize(value: datetime, tz_name: str) -> datetime:
    # Naive datetimes are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name))


def format_show_date(value: datetime, tz_name: str) -> str:
    """Format a date like ``10/19/2026``."""
    local = _localize(value, tz_name)
    return f"{local.month}/{local.day}/{local.year}"


def format_show_time(value: datetime, tz_name: str) -> str:
    """Format a time like ``7:30:00 PM``."""
    local = _localize(value, tz_name)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d}:{local.second:02d} {suffix}"


def booking_confirmation_email(
    user_name: str,
    movie_title: str,
    show_time: datetime,
    tz_name: str,
) -> EmailMessage:
    """
    Render the booking confirmation email.

    Args:
        user_name: Recipient display name
        movie_title: Title of the booked movie
        show_time: Show start, naive values are UTC
        tz_name: IANA timezone the date and time are shown in

    Returns:
        Subject and HTML body
    """
    name = escape(user_name)
    title = escape(movie_title)
    return EmailMessage(
        subject=f'🎉 Booking Confirmed: "{movie_title}" - See You Soon!',
        body=f"""<div style="font-family: Arial, sans-serif; padding: 24px; background-color: #fefefe; border-radius: 10px; color: #333;">
    <h2 style="color: #28a745;">Hi {name},</h2>
    <p style="font-size: 16px;">
        Your booking for <strong style="color: #F84565;">"{title}"</strong> has been successfully confirmed! 🎟️
    </p>
    <div style="margin: 20px 0; padding: 16px; background-color: #f8f9fa; border-left: 5px solid #28a745; border-radius: 6px;">
        <p><strong>Date:</strong> {format_show_date(show_time, tz_name)}</p>
        <p><strong>Time:</strong> {format_show_time(show_time, tz_name)}</p>
    </div>
    <p style="font-size: 15px;">We're thrilled to have you! Get ready for an amazing movie experience. 🍿</p>
    <br/>
    <p style="font-size: 14px; color: #555;">Thanks for booking with us!<br/><strong>- QuickShow Team</strong></p>
</div>""",
    )


def show_reminder_email(
    user_name: str,
    movie_title: str,
    show_time: datetime,
    tz_name: str,
    hours_to_go: int = 8,
) -> EmailMessage:
    """
    Render the upcoming show reminder email.

    Args:
        user_name: Recipient display name
        movie_title: Title of the movie
        show_time: Show start, naive values are UTC
        tz_name: IANA timezone the date and time are shown in
        hours_to_go: Lead time quoted in the body

    Returns:
        Subject and HTML body
    """
    name = escape(user_name)
    title = escape(movie_title)
    return EmailMessage(
        subject=f'🎬 Reminder: Your movie "{movie_title}" starts soon!',
        body=f"""<div style="font-family: Arial, sans-serif; padding: 24px; background-color: #fffbe6; border-radius: 10px; color: #333;">
    <h2 style="color: #F84565;">Hey {name},</h2>
    <p style="font-size: 16px;">Just a reminder that your movie:</p>
    <div style="padding: 16px; background-color: #ffffff; border-left: 5px solid #F84565; margin: 20px 0; border-radius: 6px;">
        <h3 style="margin: 0; color: #000;">🎥 <span style="color: #F84565;">"{title}"</span></h3>
        <p style="margin: 8px 0 0; font-size: 15px;">
            <strong>Date:</strong> {format_show_date(show_time, tz_name)}<br/>
            <strong>Time:</strong> {format_show_time(show_time, tz_name)}
        </p>
    </div>
    <p style="font-size: 15px;">Only <strong>{hours_to_go} hours to go</strong> - make sure your popcorn is ready! 🍿</p>
    <br/>
    <p style="font-size: 14px; color: #555;">See you at the movies!<br/><strong>- QuickShow Team</strong></p>
</div>""",
    )


def new_show_email(user_name: str, movie_title: str, site_url: str) -> EmailMessage:
    """
    Render the new show announcement email.

    Args:
        user_name: Recipient display name
        movie_title: Title of the newly added movie
        site_url: Link target of the booking button

    Returns:
        Subject and HTML body
    """
    name = escape(user_name)
    title = escape(movie_title)
    return EmailMessage(
        subject=f"🎬 New Show Added: {movie_title}",
        body=f"""<div style="font-family: Arial, sans-serif; padding: 24px; background-color: #f9f9f9; border-radius: 10px; color: #333;">
    <h2 style="color: #F84565;">🍿 Hello {name},</h2>
    <p style="font-size: 16px;">
        We're excited to announce a brand-new movie show just added to our platform!
    </p>
    <div style="padding: 16px; background-color: #fff; border-left: 5px solid #F84565; margin: 20px 0; border-radius: 6px;">
        <h3 style="margin: 0; color: #000;">🎬 <span style="color: #F84565;">{title}</span></h3>
        <p style="margin: 8px 0 0; font-size: 15px;">Now available for booking on <strong>QuickShow</strong>.</p>
    </div>
    <a href="{escape(site_url)}" target="_blank" style="display: inline-block; margin-top: 20px; background-color: #F84565; color: #fff; text-decoration: none; padding: 12px 20px; border-radius: 5px; font-weight: bold;">
        🎟️ Book Your Seats Now
    </a>
    <p style="margin-top: 30px; font-size: 14px; color: #555;">Thank you for being part of QuickShow!<br/>The QuickShow Team</p>
</div>""",
    )
