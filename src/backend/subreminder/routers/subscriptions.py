"""
Subscriptions API router for text parsing, OCR and billing schedules.
"""

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from typing import Optional
from datetime import date
import logging

from subreminder.config import settings
from subreminder.models.api import (
    CalendarRequest, CalendarResponse, OCRResponse, ParseRequest, ParseResponse,
    RemindersRequest, RemindersResponse, ScheduleRequest, ScheduleResponse,
)
from subreminder.models.subscription import SubscriptionForm
from subreminder.services import billing
from subreminder.services.calendar_grid import calendar_days, subscriptions_by_date
from subreminder.services.ocr import OCRError, OCRService
from subreminder.services.parser import SubscriptionTextParser
from subreminder.services.reminders import plan_reminders
from subreminder.utils.money import format_money

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])
logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/heic", "image/tiff", "image/bmp"]
MAX_UPLOAD_MB = 10

parser = SubscriptionTextParser()


@router.post("/parse", response_model=ParseResponse)
async def parse_text(request: ParseRequest):
    """
    Extract subscription fields from pasted or OCR text.

    Returns the detected fields (absent ones are null), a one-line summary
    and an editable form pre-filled with whatever was detected.
    """
    try:
        parsed = parser.parse(request.text, locale=request.locale, reference=request.reference)
        form = SubscriptionForm.from_parsed(parsed, request.reference or date.today())
        return ParseResponse(parsed=parsed, summary=parsed.summary(), form=form)

    except Exception as e:
        logger.exception("Failed to parse text")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to parse text: {str(e)}"
        )


@router.post("/ocr", response_model=OCRResponse)
async def parse_image(
    file: UploadFile = File(...),
    locale: Optional[str] = Form(None)
):
    """
    Recognize text in an uploaded image and extract subscription fields.

    Empty or low-quality recognition is reported as 422.
    """
    try:
        if file.content_type not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid file type: {file.content_type}. Allowed: JPG, PNG, HEIC, TIFF, BMP"
            )

        image_data = await file.read()
        size_mb = len(image_data) / (1024 * 1024)
        if size_mb > MAX_UPLOAD_MB:
            raise HTTPException(
                status_code=400,
                detail=f"File too large: {size_mb:.2f}MB. Maximum: {MAX_UPLOAD_MB}MB"
            )

        result = OCRService().extract_text_for_parsing(image_data)
        text = result.full_text
        today = date.today()
        parsed = parser.parse(text, locale=locale, reference=today)

        return OCRResponse(
            text=text,
            average_confidence=result.average_confidence,
            parsed=parsed,
            summary=parsed.summary(),
            form=SubscriptionForm.from_parsed(parsed, today),
        )

    except HTTPException:
        raise
    except OCRError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("OCR upload failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to process image: {str(e)}"
        )


@router.post("/schedule", response_model=ScheduleResponse)
async def get_schedule(request: ScheduleRequest):
    """Next billing date, spend so far and normalized monthly cost."""
    sub = request.subscription
    today = request.today or date.today()

    try:
        return ScheduleResponse(
            next_billing_date=billing.next_billing_date(sub, today),
            days_until_billing=billing.days_until_billing(sub, today),
            total_spent=billing.total_spent(sub, today),
            monthly_equivalent=billing.monthly_equivalent(sub),
            cycle_label=sub.cycle.label,
            formatted_amount=format_money(sub.amount, sub.currency),
        )

    except Exception as e:
        logger.exception("Failed to compute schedule for %s", sub.id)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to compute schedule: {str(e)}"
        )


@router.post("/calendar", response_model=CalendarResponse)
async def get_calendar(request: CalendarRequest):
    """
    Month grid (42 days, Monday first) and the subscriptions billing on each day.

    Cancelled subscriptions are not shown.
    """
    try:
        days = calendar_days(request.year, request.month)
        by_date = subscriptions_by_date(request.subscriptions, request.year, request.month)

        return CalendarResponse(
            days=days,
            billing={key: [sub.id for sub in subs] for key, subs in by_date.items()},
        )

    except Exception as e:
        logger.exception("Failed to build calendar")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build calendar: {str(e)}"
        )


@router.post("/reminders", response_model=RemindersResponse)
async def get_reminders(request: RemindersRequest):
    """Upcoming reminders for active and trial subscriptions."""
    today = request.today or date.today()
    days_before = request.days_before if request.days_before is not None else settings.REMINDER_DAYS_BEFORE

    try:
        reminders = plan_reminders(request.subscriptions, days_before, today)
        return RemindersResponse(reminders=reminders, total=len(reminders))

    except Exception as e:
        logger.exception("Failed to plan reminders")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to plan reminders: {str(e)}"
        )
