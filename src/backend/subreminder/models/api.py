"""
Request and response models for the subscriptions API.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
from uuid import UUID

from subreminder.models.reminder import Reminder
from subreminder.models.subscription import ParsedSubscription, Subscription, SubscriptionForm


class ParseRequest(BaseModel):
    text: str
    locale: Optional[str] = None
    reference: Optional[date] = None


class ParseResponse(BaseModel):
    parsed: ParsedSubscription
    summary: str
    form: SubscriptionForm


class OCRResponse(BaseModel):
    text: str
    average_confidence: float
    parsed: ParsedSubscription
    summary: str
    form: SubscriptionForm


class ScheduleRequest(BaseModel):
    subscription: Subscription
    today: Optional[date] = None


class ScheduleResponse(BaseModel):
    next_billing_date: date
    days_until_billing: int
    total_spent: Decimal
    monthly_equivalent: Decimal
    cycle_label: str
    formatted_amount: str


class CalendarRequest(BaseModel):
    subscriptions: List[Subscription] = []
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


class CalendarResponse(BaseModel):
    days: List[date]
    billing: Dict[str, List[UUID]]


class RemindersRequest(BaseModel):
    subscriptions: List[Subscription] = []
    days_before: Optional[List[int]] = None
    today: Optional[date] = None


class RemindersResponse(BaseModel):
    reminders: List[Reminder]
    total: int
