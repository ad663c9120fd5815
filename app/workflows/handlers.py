"""Event handlers run by the Inngest functions.

Handlers hold their collaborators explicitly (session factory, email
service, settings, clock) and receive the raw ``event.data`` plus the step
runner, so they can be exercised with fakes outside the Inngest runtime.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Mapping, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import Settings
from app.schemas.events import (
    PAYMENT_PENDING,
    SHOW_ADDED,
    SHOW_BOOKED,
    USER_CREATED,
    USER_DELETED,
    USER_UPDATED,
    BookingEventPayload,
    ClerkUserDeletedPayload,
    ClerkUserPayload,
    ShowAddedPayload,
    parse_payload,
)
from app.schemas.reminder import ReminderSummary, ReminderTask
from app.services.booking_service import BookingService
from app.services.email_service import EmailDeliveryError, EmailService
from app.services.email_templates import (
    booking_confirmation_email,
    new_show_email,
    show_reminder_email,
)
from app.services.show_service import ShowService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]
SessionMaker = async_sessionmaker[AsyncSession]


class StepRunner(Protocol):
    """The subset of ``inngest.Step`` used by the handlers."""

    async def run(self, step_id: str, handler: Callable[[], Awaitable[T]]) -> T: ...

    async def sleep_until(self, step_id: str, until: datetime) -> None: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """Convert to the naive UTC form stored in the database."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class UserSyncHandlers:
    """Mirror identity-provider user events into the user table."""

    def __init__(self, session_factory: SessionMaker):
        self.session_factory = session_factory

    async def created(self, data: Mapping[str, Any]) -> dict:
        payload = parse_payload(ClerkUserPayload, data, USER_CREATED)

        async with self.session_factory() as db:
            await UserService(db).create_user(
                user_id=payload.id,
                email=payload.primary_email,
                name=payload.full_name,
                image=payload.image_url,
            )

        logger.info(f"Created user {payload.id}")
        return {"userId": payload.id}

    async def updated(self, data: Mapping[str, Any]) -> dict:
        payload = parse_payload(ClerkUserPayload, data, USER_UPDATED)

        async with self.session_factory() as db:
            await UserService(db).upsert_user(
                user_id=payload.id,
                email=payload.primary_email,
                name=payload.full_name,
                image=payload.image_url,
            )

        logger.info(f"Updated user {payload.id}")
        return {"userId": payload.id}

    async def deleted(self, data: Mapping[str, Any]) -> dict:
        payload = parse_payload(ClerkUserDeletedPayload, data, USER_DELETED)

        async with self.session_factory() as db:
            deleted = await UserService(db).delete_user(payload.id)

        return {"userId": payload.id, "deleted": deleted}


class SeatReleaseHandler:
    """Release held seats once the hold window passes without payment."""

    def __init__(
        self,
        session_factory: SessionMaker,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self.session_factory = session_factory
        self.hold_window = timedelta(seconds=settings.SEAT_HOLD_SECONDS)
        self.clock = clock

    async def handle(
        self,
        data: Mapping[str, Any],
        step: StepRunner,
        received_at: datetime | None = None,
    ) -> dict:
        payload = parse_payload(BookingEventPayload, data, PAYMENT_PENDING)

        release_at = (received_at or self.clock()) + self.hold_window
        await step.sleep_until("wait-for-10-minutes", release_at)

        async def check_payment_status() -> dict:
            async with self.session_factory() as db:
                result = await BookingService(db).release_unpaid_booking(
                    payload.booking_id
                )
            return result.to_dict()

        return await step.run("check-payment-status", check_payment_status)


class BookingConfirmationHandler:
    """Email the user once a booking is confirmed."""

    def __init__(
        self,
        session_factory: SessionMaker,
        email_service: EmailService,
        settings: Settings,
    ):
        self.session_factory = session_factory
        self.email_service = email_service
        self.tz_name = settings.DISPLAY_TIMEZONE

    async def handle(self, data: Mapping[str, Any]) -> dict:
        payload = parse_payload(BookingEventPayload, data, SHOW_BOOKED)

        async with self.session_factory() as db:
            booking = await BookingService(db).get_booking_details(payload.booking_id)
            user_email = booking.user.email
            message = booking_confirmation_email(
                user_name=booking.user.name,
                movie_title=booking.show.movie.title,
                show_time=booking.show.show_date_time,
                tz_name=self.tz_name,
            )

        await self.email_service.send_email(
            to=user_email,
            subject=message.subject,
            body=message.body,
        )
        return {"bookingId": payload.booking_id, "to": user_email}


class ReminderHandler:
    """Remind ticket holders of shows starting in the lookahead window."""

    def __init__(
        self,
        session_factory: SessionMaker,
        email_service: EmailService,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self.session_factory = session_factory
        self.email_service = email_service
        self.lookahead = timedelta(hours=settings.REMINDER_LOOKAHEAD_HOURS)
        self.window = timedelta(minutes=settings.REMINDER_WINDOW_MINUTES)
        self.hours_to_go = settings.REMINDER_LOOKAHEAD_HOURS
        self.tz_name = settings.DISPLAY_TIMEZONE
        self.clock = clock

    def reminder_window(self, now: datetime) -> tuple[datetime, datetime]:
        """Return the inclusive ``(start, end)`` window of show times."""
        target = now + self.lookahead
        return target - self.window, target

    async def prepare_tasks(self, start: datetime, end: datetime) -> list[dict]:
        """Build one reminder task per (show, distinct user)."""
        tasks: list[dict] = []

        async with self.session_factory() as db:
            shows = await ShowService(db).get_shows_between(
                to_naive_utc(start), to_naive_utc(end)
            )
            user_service = UserService(db)

            for show in shows:
                if show.movie is None or not show.occupied_seats:
                    continue

                user_ids = sorted(set(show.occupied_seats.values()))
                users = await user_service.get_users_by_ids(user_ids)

                for user in users:
                    task = ReminderTask(
                        user_email=user.email,
                        user_name=user.name,
                        movie_title=show.movie.title,
                        show_time=show.show_date_time,
                    )
                    tasks.append(task.model_dump(by_alias=True, mode="json"))

        return tasks

    async def _send_reminder(self, task: ReminderTask) -> None:
        message = show_reminder_email(
            user_name=task.user_name,
            movie_title=task.movie_title,
            show_time=task.show_time,
            tz_name=self.tz_name,
            hours_to_go=self.hours_to_go,
        )
        await self.email_service.send_email(
            to=task.user_email,
            subject=message.subject,
            body=message.body,
        )

    async def send_all(self, raw_tasks: list[dict]) -> list[str]:
        """Send every reminder concurrently; report each outcome."""
        tasks = [ReminderTask.model_validate(t) for t in raw_tasks]
        results = await asyncio.gather(
            *(self._send_reminder(task) for task in tasks),
            return_exceptions=True,
        )

        outcomes = []
        for task, result in zip(tasks, results):
            # gather returns CancelledError, which is not an Exception
            if isinstance(result, BaseException):
                logger.warning(f"Reminder to {task.user_email} failed: {result}")
                outcomes.append("rejected")
            else:
                outcomes.append("fulfilled")
        return outcomes

    async def handle(self, step: StepRunner) -> dict:
        start, end = self.reminder_window(self.clock())

        async def prepare_reminder_tasks() -> list[dict]:
            return await self.prepare_tasks(start, end)

        reminder_tasks = await step.run("prepare-reminder-tasks", prepare_reminder_tasks)

        if not reminder_tasks:
            return ReminderSummary.empty().model_dump(exclude_none=True)

        async def send_all_reminders() -> list[str]:
            return await self.send_all(reminder_tasks)

        outcomes = await step.run("send-all-reminders", send_all_reminders)

        sent = outcomes.count("fulfilled")
        failed = len(outcomes) - sent
        summary = ReminderSummary.from_outcomes(sent, failed)
        logger.info(summary.message)
        return summary.model_dump(exclude_none=True)


class NewShowNotificationHandler:
    """Announce a newly added show to every user."""

    def __init__(
        self,
        session_factory: SessionMaker,
        email_service: EmailService,
        settings: Settings,
    ):
        self.session_factory = session_factory
        self.email_service = email_service
        self.page_size = settings.USER_PAGE_SIZE
        self.site_url = settings.SITE_URL

    async def handle(self, data: Mapping[str, Any]) -> dict:
        payload = parse_payload(ShowAddedPayload, data, SHOW_ADDED)

        last_id: str | None = None
        while True:
            # Short session per page; no connection is held while sending
            async with self.session_factory() as db:
                page = await UserService(db).get_users_page(
                    after_id=last_id, limit=self.page_size
                )
            if not page:
                break

            for user in page:
                await self._notify(user.name, user.email, payload.movie_title)

            if len(page) < self.page_size:
                break
            last_id = page[-1].user_id

        return {"message": "Notifications sent."}

    async def _notify(self, user_name: str, user_email: str, movie_title: str) -> None:
        message = new_show_email(user_name, movie_title, self.site_url)
        try:
            await self.email_service.send_email(
                to=user_email,
                subject=message.subject,
                body=message.body,
            )
        except EmailDeliveryError as e:
            logger.warning(f"New show notification to {user_email} failed: {e}")


@dataclass
class Handlers:
    """All event handlers wired to shared collaborators."""

    user_sync: UserSyncHandlers
    seat_release: SeatReleaseHandler
    booking_confirmation: BookingConfirmationHandler
    reminders: ReminderHandler
    new_show: NewShowNotificationHandler


def create_handlers(
    session_factory: SessionMaker,
    email_service: EmailService,
    settings: Settings,
    clock: Clock = utc_now,
) -> Handlers:
    """Build every handler from one set of collaborators."""
    return Handlers(
        user_sync=UserSyncHandlers(session_factory),
        seat_release=SeatReleaseHandler(session_factory, settings, clock),
        booking_confirmation=BookingConfirmationHandler(
            session_factory, email_service, settings
        ),
        reminders=ReminderHandler(session_factory, email_service, settings, clock),
        new_show=NewShowNotificationHandler(session_factory, email_service, settings),
    )
