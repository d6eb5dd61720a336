"""
Tests for subscription models and the editable form.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from subreminder.models.subscription import (
    BillingCycle, ParsedSubscription, Subscription, SubscriptionForm, SubscriptionStatus,
)

TODAY = date(2025, 6, 1)


class TestBillingCycle:
    def test_labels(self):
        assert BillingCycle.MONTHLY.label == "Monthly"
        assert BillingCycle.ONE_TIME.label == "One-time"
        assert BillingCycle.QUARTERLY.short_label == "/qtr"
        assert BillingCycle.ONE_TIME.short_label == ""

    def test_values(self):
        assert BillingCycle("one-time") is BillingCycle.ONE_TIME


class TestSubscription:
    """Validation on construction."""

    def test_datetime_is_truncated(self):
        sub = Subscription(
            name="Netflix", amount=Decimal("15.49"), billing_day=15,
            start_date=datetime(2025, 1, 15, 13, 30),
        )
        assert sub.start_date == date(2025, 1, 15)

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            Subscription(name="X", amount=Decimal("0"), billing_day=1, start_date=TODAY)

    def test_billing_day_range(self):
        with pytest.raises(ValidationError):
            Subscription(name="X", amount=Decimal("1"), billing_day=32, start_date=TODAY)

    def test_ids_are_unique(self):
        a = Subscription(name="A", amount=Decimal("1"), billing_day=1, start_date=TODAY)
        b = Subscription(name="B", amount=Decimal("1"), billing_day=1, start_date=TODAY)
        assert a.id != b.id


class TestSubscriptionForm:
    """Merging extraction results and validating user input."""

    def test_blank_defaults(self):
        form = SubscriptionForm.blank(TODAY, currency="EUR")
        assert form.billing_day == 1
        assert form.start_date == TODAY
        assert form.currency == "EUR"
        assert form.category == "Other"
        assert not form.is_valid

    def test_from_parsed_only_overwrites_detected_fields(self):
        parsed = ParsedSubscription(
            name="Netflix",
            url="netflix.com",
            amount_text="15.49",
            start_date=date(2025, 1, 20),
            category="Streaming",
        )
        form = SubscriptionForm.from_parsed(parsed, TODAY, currency="GBP")

        assert form.name == "Netflix"
        assert form.amount == "15.49"
        assert form.currency == "GBP"
        assert form.cycle == BillingCycle.MONTHLY
        assert form.status == SubscriptionStatus.ACTIVE
        assert form.start_date == date(2025, 1, 20)
        assert form.billing_day == 20

    def test_validity(self):
        form = SubscriptionForm.blank(TODAY)
        assert not form.model_copy(update={'name': "Netflix", 'amount': "0"}).is_valid
        assert not form.model_copy(update={'name': "   ", 'amount': "5"}).is_valid
        assert not form.model_copy(update={'name': "Netflix", 'amount': "abc"}).is_valid
        assert form.model_copy(update={'name': "Netflix", 'amount': "9,99"}).is_valid

    def test_to_subscription(self):
        form = SubscriptionForm.blank(TODAY).model_copy(update={
            'name': "  Netflix ",
            'amount': "$15.49",
            'trial_end_date': date(2025, 7, 1),
        })
        sub = form.to_subscription()

        assert sub.name == "Netflix"
        assert sub.amount == Decimal("15.49")
        assert sub.url is None
        assert sub.notes is None
        # Trial end only kept for trial subscriptions
        assert sub.trial_end_date is None

    def test_trial_keeps_trial_end(self):
        form = SubscriptionForm.blank(TODAY).model_copy(update={
            'name': "Acme",
            'amount': "5",
            'status': SubscriptionStatus.TRIAL,
            'trial_end_date': date(2025, 7, 1),
        })
        assert form.to_subscription().trial_end_date == date(2025, 7, 1)

    def test_invalid_form_raises(self):
        with pytest.raises(ValueError):
            SubscriptionForm.blank(TODAY).to_subscription()
