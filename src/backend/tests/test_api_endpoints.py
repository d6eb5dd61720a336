"""
Tests for the HTTP API using FastAPI's TestClient.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from subreminder.main import app
from subreminder.services.ocr import NoTextFoundError, RecognitionResult, RecognizedLine

NETFLIX_TEXT = "Netflix\nTotal: $15.49\nBilling date: January 15, 2025"

NETFLIX_SUB = {
    "name": "Netflix",
    "amount": "15.49",
    "currency": "USD",
    "cycle": "monthly",
    "billing_day": 15,
    "start_date": "2025-01-15",
}


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestParseEndpoint:
    def test_parse(self, client):
        response = client.post("/subscriptions/parse", json={"text": NETFLIX_TEXT})
        assert response.status_code == 200

        data = response.json()
        assert data["parsed"]["name"] == "Netflix"
        assert data["parsed"]["amount_text"] == "15.49"
        assert data["parsed"]["start_date"] == "2025-01-15"
        assert data["summary"] == "Found: Netflix, $15.49/mo"

        form = data["form"]
        assert form["name"] == "Netflix"
        assert form["amount"] == "15.49"
        assert form["currency"] == "USD"
        assert form["cycle"] == "monthly"
        assert form["start_date"] == "2025-01-15"
        assert form["billing_day"] == 15

    def test_form_defaults_to_reference_date(self, client):
        response = client.post(
            "/subscriptions/parse",
            json={"text": "Thank you for your payment", "reference": "2025-03-10"},
        )
        assert response.status_code == 200

        form = response.json()["form"]
        assert form["amount"] == ""
        assert form["start_date"] == "2025-03-10"
        assert form["billing_day"] == 10

    def test_missing_text(self, client):
        assert client.post("/subscriptions/parse", json={}).status_code == 422


class TestOCREndpoint:
    """OCR service is mocked; only routing and error mapping are tested."""

    def test_ocr(self, client):
        result = RecognitionResult(lines=[
            RecognizedLine("Netflix", 0.9),
            RecognizedLine("Total: $15.49", 0.8),
        ])
        with patch('subreminder.routers.subscriptions.OCRService') as service:
            service.return_value.extract_text_for_parsing.return_value = result
            response = client.post(
                "/subscriptions/ocr",
                files={"file": ("receipt.png", b"fake", "image/png")},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Netflix\nTotal: $15.49"
        assert data["parsed"]["name"] == "Netflix"
        assert data["form"]["amount"] == "15.49"
        assert data["average_confidence"] == pytest.approx(0.85)

    def test_no_text_is_422(self, client):
        with patch('subreminder.routers.subscriptions.OCRService') as service:
            service.return_value.extract_text_for_parsing.side_effect = NoTextFoundError("No text found in image")
            response = client.post(
                "/subscriptions/ocr",
                files={"file": ("receipt.png", b"fake", "image/png")},
            )

        assert response.status_code == 422
        assert response.json()["detail"] == "No text found in image"

    def test_wrong_file_type(self, client):
        response = client.post(
            "/subscriptions/ocr",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400


class TestScheduleEndpoint:
    def test_schedule(self, client):
        response = client.post(
            "/subscriptions/schedule",
            json={"subscription": NETFLIX_SUB, "today": "2025-06-01"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["next_billing_date"] == "2025-06-15"
        assert data["days_until_billing"] == 14
        assert Decimal(str(data["total_spent"])) == Decimal("61.96")
        assert Decimal(str(data["monthly_equivalent"])) == Decimal("15.49")
        assert data["formatted_amount"] == "$15.49"
        assert data["cycle_label"] == "Monthly"

    def test_invalid_subscription(self, client):
        bad = dict(NETFLIX_SUB, amount="0")
        response = client.post("/subscriptions/schedule", json={"subscription": bad})
        assert response.status_code == 422


class TestCalendarEndpoint:
    def test_calendar(self, client):
        response = client.post(
            "/subscriptions/calendar",
            json={"subscriptions": [NETFLIX_SUB], "year": 2025, "month": 6},
        )
        assert response.status_code == 200

        data = response.json()
        assert len(data["days"]) == 42
        assert data["days"][0] == "2025-05-26"
        assert list(data["billing"]) == ["2025-06-15"]

    def test_invalid_month(self, client):
        response = client.post("/subscriptions/calendar", json={"year": 2025, "month": 13})
        assert response.status_code == 422


class TestRemindersEndpoint:
    def test_reminders(self, client):
        response = client.post(
            "/subscriptions/reminders",
            json={"subscriptions": [NETFLIX_SUB], "days_before": [1, 3], "today": "2025-06-01"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        assert data["reminders"][0]["remind_on"] == "2025-06-12"
        assert data["reminders"][1]["body"] == "Netflix is billing tomorrow - $15.49"

    def test_default_offsets_from_settings(self, client):
        response = client.post(
            "/subscriptions/reminders",
            json={"subscriptions": [NETFLIX_SUB], "today": "2025-06-01"},
        )
        assert response.json()["total"] == 2
