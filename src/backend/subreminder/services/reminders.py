"""
Reminder planning from next billing dates.

Delivery is left to the client; this only decides when and what to say.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List

from subreminder.models.reminder import Reminder
from subreminder.models.subscription import Subscription, SubscriptionStatus
from subreminder.services.billing import next_billing_date
from subreminder.utils.money import format_money

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Subscription Reminder"
REMINDABLE_STATUSES = (SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIAL)


def reminder_body(name: str, days_before: int, money: str) -> str:
    if days_before == 0:
        when = "today"
    elif days_before == 1:
        when = "tomorrow"
    else:
        when = f"in {days_before} days"
    return f"{name} is billing {when} - {money}"


def plan_reminders(
    subscriptions: Iterable[Subscription],
    days_before: Iterable[int],
    today: date
) -> List[Reminder]:
    """
    Build reminders for every subscription and offset.

    Only active and trial subscriptions are reminded about, and only
    reminders dated after today are kept.

    Returns:
        Reminders sorted by date, then subscription name
    """
    offsets = sorted(set(days_before))
    reminders: List[Reminder] = []

    for sub in subscriptions:
        if sub.status not in REMINDABLE_STATUSES:
            continue

        billing = next_billing_date(sub, today)
        money = format_money(sub.amount, sub.currency)

        for n in offsets:
            remind_on = billing - timedelta(days=n)
            if remind_on <= today:
                continue
            reminders.append(Reminder(
                id=f"{sub.id}-{n}d",
                subscription_id=sub.id,
                name=sub.name,
                days_before=n,
                remind_on=remind_on,
                billing_date=billing,
                title=REMINDER_TITLE,
                body=reminder_body(sub.name, n, money),
            ))

    reminders.sort(key=lambda r: (r.remind_on, r.name))
    logger.debug("Planned %d reminders", len(reminders))
    return reminders
