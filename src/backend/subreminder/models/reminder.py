"""
Pydantic models for billing reminders.
"""

from pydantic import BaseModel
from datetime import date
from uuid import UUID


class Reminder(BaseModel):
    """A reminder to show some days before a billing date."""
    id: str
    subscription_id: UUID
    name: str
    days_before: int
    remind_on: date
    billing_date: date
    title: str
    body: str
