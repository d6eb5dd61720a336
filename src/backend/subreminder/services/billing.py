"""
Billing recurrence calculations.

Pure functions over a Subscription and an explicit "today". Monthly, yearly
and quarterly subscriptions bill on their billing day, clamped to the length
of each month (billing day 31 lands on Feb 28). Weekly subscriptions bill
every 7 days from the start date. One-time subscriptions never recur.
"""

import logging
from calendar import monthrange
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from subreminder.models.subscription import BillingCycle, Subscription

logger = logging.getLogger(__name__)

WEEKS_PER_MONTH = Decimal("4.33")

_CYCLE_STEP = {
    BillingCycle.MONTHLY: relativedelta(months=1),
    BillingCycle.QUARTERLY: relativedelta(months=3),
    BillingCycle.YEARLY: relativedelta(years=1),
}


def days_in_month(year: int, month: int) -> int:
    try:
        return monthrange(year, month)[1]
    except (ValueError, OverflowError):
        logger.warning("Could not compute month length for %s-%s, assuming 30", year, month)
        return 30


def clamp_day(d: date, day: int) -> date:
    """Same year and month as d, with the day capped to the month length."""
    return d.replace(day=min(day, days_in_month(d.year, d.month)))


def advance_one_cycle(d: date, cycle: BillingCycle, billing_day: int) -> date:
    """Move one billing period forward. One-time dates are returned unchanged."""
    if cycle == BillingCycle.WEEKLY:
        return d + timedelta(weeks=1)
    if cycle == BillingCycle.ONE_TIME:
        return d
    # relativedelta clamps short months; re-clamp so Feb 28 goes back to Mar 31
    return clamp_day(d + _CYCLE_STEP[cycle], billing_day)


def next_billing_date(sub: Subscription, today: date) -> date:
    """
    First billing date on or after today.

    One-time subscriptions return their start date even when it is in the past.
    """
    if sub.cycle == BillingCycle.WEEKLY:
        anchor = sub.start_date
    else:
        anchor = clamp_day(sub.start_date, sub.billing_day)

    if sub.cycle == BillingCycle.ONE_TIME:
        return anchor

    while anchor < today:
        anchor = advance_one_cycle(anchor, sub.cycle, sub.billing_day)
    return anchor


def billing_date_in_month(sub: Subscription, year: int, month: int) -> Optional[date]:
    """
    The date the subscription bills in a given month, if any.

    Weekly subscriptions bill several times a month and always return None;
    use weekly_billing_dates_in_month for those.
    """
    start = sub.start_date

    if sub.cycle == BillingCycle.ONE_TIME:
        if (start.year, start.month) == (year, month):
            return start
        return None
    if sub.cycle == BillingCycle.WEEKLY:
        return None

    candidate = date(year, month, min(sub.billing_day, days_in_month(year, month)))
    if candidate < start:
        return None

    if sub.cycle == BillingCycle.YEARLY and month != start.month:
        return None
    if sub.cycle == BillingCycle.QUARTERLY:
        offset = (year * 12 + month) - (start.year * 12 + start.month)
        if offset < 0 or offset % 3 != 0:
            return None

    return candidate


def weekly_billing_dates_in_month(sub: Subscription, year: int, month: int) -> List[date]:
    """Every weekly occurrence falling in the given month, in order."""
    if sub.cycle != BillingCycle.WEEKLY:
        return []

    month_start = date(year, month, 1)
    current = sub.start_date
    while current < month_start:
        current += timedelta(weeks=1)

    dates = []
    while (current.year, current.month) == (year, month):
        dates.append(current)
        current += timedelta(weeks=1)
    return dates


def total_spent(sub: Subscription, today: date) -> Decimal:
    """
    Amount paid so far: whole elapsed cycles since the start date times the amount.

    One-time subscriptions count their full amount; nothing is spent before
    the start date.
    """
    start = sub.start_date
    if today < start:
        return Decimal(0)
    if sub.cycle == BillingCycle.ONE_TIME:
        return sub.amount

    elapsed = relativedelta(today, start)
    months = elapsed.years * 12 + elapsed.months

    if sub.cycle == BillingCycle.WEEKLY:
        cycles = (today - start).days // 7
    elif sub.cycle == BillingCycle.MONTHLY:
        cycles = months
    elif sub.cycle == BillingCycle.QUARTERLY:
        cycles = months // 3
    else:
        cycles = elapsed.years

    return sub.amount * max(cycles, 0)


def days_until_billing(sub: Subscription, today: date) -> int:
    """
    Days from today to the next billing date.

    Negative for a one-time subscription whose date has already passed.
    """
    return (next_billing_date(sub, today) - today).days


def monthly_equivalent(sub: Subscription) -> Decimal:
    """Cost normalized to one month (weekly uses 4.33 weeks per month)."""
    if sub.cycle == BillingCycle.YEARLY:
        return sub.amount / 12
    if sub.cycle == BillingCycle.WEEKLY:
        return sub.amount * WEEKS_PER_MONTH
    if sub.cycle == BillingCycle.QUARTERLY:
        return sub.amount / 3
    if sub.cycle == BillingCycle.ONE_TIME:
        return Decimal(0)
    return sub.amount
