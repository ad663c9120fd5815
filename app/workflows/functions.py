"""Inngest function registration."""

from datetime import datetime, timezone

import inngest

from app.config import Settings
from app.schemas.events import (
    PAYMENT_PENDING,
    SHOW_ADDED,
    SHOW_BOOKED,
    USER_CREATED,
    USER_DELETED,
    USER_UPDATED,
)
from app.workflows.handlers import Handlers


def event_received_at(event: inngest.Event) -> datetime | None:
    """Event timestamp as an aware datetime, if the event carries one."""
    if not event.ts:
        return None
    return datetime.fromtimestamp(event.ts / 1000, tz=timezone.utc)


def build_functions(
    client: inngest.Inngest,
    handlers: Handlers,
    settings: Settings,
) -> list[inngest.Function]:
    """Register every handler on ``client`` and return the functions to serve."""

    @client.create_function(
        fn_id="sync-user-from-clerk",
        trigger=inngest.TriggerEvent(event=USER_CREATED),
    )
    async def sync_user_creation(ctx: inngest.Context, step: inngest.Step) -> dict:
        return await handlers.user_sync.created(ctx.event.data)

    @client.create_function(
        fn_id="delete-user-with-clerk",
        trigger=inngest.TriggerEvent(event=USER_DELETED),
    )
    async def sync_user_deletion(ctx: inngest.Context, step: inngest.Step) -> dict:
        return await handlers.user_sync.deleted(ctx.event.data)

    @client.create_function(
        fn_id="update-user-from-clerk",
        trigger=inngest.TriggerEvent(event=USER_UPDATED),
    )
    async def sync_user_update(ctx: inngest.Context, step: inngest.Step) -> dict:
        return await handlers.user_sync.updated(ctx.event.data)

    @client.create_function(
        fn_id="release-seats-delete-booking",
        trigger=inngest.TriggerEvent(event=PAYMENT_PENDING),
    )
    async def release_seats_and_delete_booking(
        ctx: inngest.Context, step: inngest.Step
    ) -> dict:
        return await handlers.seat_release.handle(
            ctx.event.data, step, received_at=event_received_at(ctx.event)
        )

    @client.create_function(
        fn_id="send-booking-confirmation-email",
        trigger=inngest.TriggerEvent(event=SHOW_BOOKED),
    )
    async def send_booking_confirmation_email(
        ctx: inngest.Context, step: inngest.Step
    ) -> dict:
        return await handlers.booking_confirmation.handle(ctx.event.data)

    @client.create_function(
        fn_id="send-show-reminders",
        trigger=inngest.TriggerCron(cron=settings.REMINDER_CRON),
    )
    async def send_show_reminders(ctx: inngest.Context, step: inngest.Step) -> dict:
        return await handlers.reminders.handle(step)

    @client.create_function(
        fn_id="send-new-show-notifications",
        trigger=inngest.TriggerEvent(event=SHOW_ADDED),
    )
    async def send_new_show_notifications(
        ctx: inngest.Context, step: inngest.Step
    ) -> dict:
        return await handlers.new_show.handle(ctx.event.data)

    return [
        sync_user_creation,
        sync_user_deletion,
        sync_user_update,
        release_seats_and_delete_booking,
        send_booking_confirmation_email,
        send_show_reminders,
        send_new_show_notifications,
    ]
