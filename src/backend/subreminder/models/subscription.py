"""
Pydantic models for subscriptions.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from subreminder.config import settings
from subreminder.utils.money import currency_symbol, parse_money


CATEGORIES = [
    "Streaming", "Music", "Software", "Cloud Storage", "Productivity",
    "AI", "Education", "News", "Gaming", "Fitness", "Finance", "Other",
]


class BillingCycle(str, Enum):
    """Recurrence period of a subscription."""
    MONTHLY = "monthly"
    YEARLY = "yearly"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"
    ONE_TIME = "one-time"

    @property
    def label(self) -> str:
        return "One-time" if self is BillingCycle.ONE_TIME else self.value.capitalize()

    @property
    def short_label(self) -> str:
        return _SHORT_LABELS[self]


_SHORT_LABELS = {
    BillingCycle.MONTHLY: "/mo",
    BillingCycle.YEARLY: "/yr",
    BillingCycle.WEEKLY: "/wk",
    BillingCycle.QUARTERLY: "/qtr",
    BillingCycle.ONE_TIME: "",
}


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    TRIAL = "trial"


def _truncate_to_date(value):
    # Time-of-day is never meaningful for billing
    if isinstance(value, datetime):
        return value.date()
    return value


class ParsedSubscription(BaseModel):
    """Sparse result of text extraction. A missing field means "not detected"."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    url: Optional[str] = None
    amount_text: Optional[str] = None
    currency_code: Optional[str] = None
    cycle: Optional[BillingCycle] = None
    start_date: Optional[date] = None
    trial_end_date: Optional[date] = None
    category: Optional[str] = None
    status: Optional[SubscriptionStatus] = None

    def summary(self) -> str:
        """One-line description of what was recognized, e.g. "Found: Netflix, $15.49/mo"."""
        parts = []
        if self.name:
            parts.append(self.name)
        if self.amount_text:
            symbol = currency_symbol(self.currency_code) if self.currency_code else ""
            cycle = self.cycle.short_label if self.cycle else ""
            parts.append(f"{symbol}{self.amount_text}{cycle}")
        if not parts:
            return "Partial data recognized"
        return "Found: " + ", ".join(parts)


class Subscription(BaseModel):
    """A fully-formed subscription record, input to the billing calculator."""
    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    url: Optional[str] = None
    amount: Decimal = Field(gt=0)
    currency: str = "USD"
    cycle: BillingCycle = BillingCycle.MONTHLY
    billing_day: int = Field(ge=1, le=31)
    start_date: date
    trial_end_date: Optional[date] = None
    category: str = "Other"
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    notes: Optional[str] = None

    @field_validator('start_date', 'trial_end_date', mode='before')
    @classmethod
    def truncate_dates(cls, value):
        return _truncate_to_date(value)


class SubscriptionForm(BaseModel):
    """
    Editable subscription form.

    Amount stays a string until validation, mirroring what a user types
    (or what OCR extraction pre-filled).
    """
    name: str = ""
    url: str = ""
    amount: str = ""
    currency: str = "USD"
    cycle: BillingCycle = BillingCycle.MONTHLY
    billing_day: int = Field(ge=1, le=31)
    start_date: date
    trial_end_date: Optional[date] = None
    category: str = "Other"
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    notes: str = ""

    @field_validator('start_date', 'trial_end_date', mode='before')
    @classmethod
    def truncate_dates(cls, value):
        return _truncate_to_date(value)

    @classmethod
    def blank(cls, today: date, currency: Optional[str] = None) -> "SubscriptionForm":
        """Empty form defaulting to billing today in the configured currency."""
        return cls(currency=currency or settings.DEFAULT_CURRENCY, billing_day=today.day, start_date=today)

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedSubscription,
        today: date,
        currency: Optional[str] = None
    ) -> "SubscriptionForm":
        """
        Pre-fill a blank form with extracted values.

        Only detected fields overwrite the defaults; a detected start date
        also fixes the billing day.
        """
        form = cls.blank(today, currency=currency)
        updates = {}
        if parsed.name:
            updates['name'] = parsed.name
        if parsed.url:
            updates['url'] = parsed.url
        if parsed.amount_text:
            updates['amount'] = parsed.amount_text
        if parsed.currency_code:
            updates['currency'] = parsed.currency_code
        if parsed.cycle:
            updates['cycle'] = parsed.cycle
        if parsed.start_date:
            updates['start_date'] = parsed.start_date
            updates['billing_day'] = parsed.start_date.day
        if parsed.trial_end_date:
            updates['trial_end_date'] = parsed.trial_end_date
        if parsed.category:
            updates['category'] = parsed.category
        if parsed.status:
            updates['status'] = parsed.status
        return form.model_copy(update=updates)

    @property
    def parsed_amount(self) -> Optional[Decimal]:
        return parse_money(self.amount)

    @property
    def is_valid(self) -> bool:
        amount = self.parsed_amount
        return bool(self.name.strip()) and amount is not None and amount > 0

    def to_subscription(self) -> Subscription:
        """
        Build a Subscription from this form.

        Raises:
            ValueError: If the name is blank or the amount is not a positive number
        """
        if not self.is_valid:
            raise ValueError("Subscription needs a name and an amount greater than zero")

        return Subscription(
            name=self.name.strip(),
            url=self.url or None,
            amount=self.parsed_amount,
            currency=self.currency,
            cycle=self.cycle,
            billing_day=self.billing_day,
            start_date=self.start_date,
            trial_end_date=self.trial_end_date if self.status == SubscriptionStatus.TRIAL else None,
            category=self.category,
            status=self.status,
            notes=self.notes or None,
        )
