"""
Month grid and per-day billing lookups for the calendar view.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List

from subreminder.models.subscription import BillingCycle, Subscription, SubscriptionStatus
from subreminder.services.billing import billing_date_in_month, weekly_billing_dates_in_month

GRID_DAYS = 42


def calendar_days(year: int, month: int) -> List[date]:
    """Six full weeks, Monday first, covering the whole month."""
    first = date(year, month, 1)
    grid_start = first - timedelta(days=first.weekday())
    return [grid_start + timedelta(days=i) for i in range(GRID_DAYS)]


def format_day_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def subscriptions_by_date(
    subscriptions: Iterable[Subscription],
    year: int,
    month: int
) -> Dict[str, List[Subscription]]:
    """
    Group subscriptions by the days they bill in a month.

    Cancelled subscriptions are left out. Keys are "YYYY-MM-DD".
    """
    result: Dict[str, List[Subscription]] = defaultdict(list)

    for sub in subscriptions:
        if sub.status == SubscriptionStatus.CANCELLED:
            continue

        if sub.cycle == BillingCycle.WEEKLY:
            for d in weekly_billing_dates_in_month(sub, year, month):
                result[format_day_key(d)].append(sub)
        else:
            d = billing_date_in_month(sub, year, month)
            if d is not None:
                result[format_day_key(d)].append(sub)

    return dict(result)
