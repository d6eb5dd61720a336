"""
Subscription text parser for turning OCR text into pre-filled form data.
"""

import re
import logging
from datetime import date
from typing import Any, Dict, Optional

from subreminder.models.known_services import find_known_service
from subreminder.models.subscription import ParsedSubscription, SubscriptionStatus
from subreminder.services.amounts import AmountExtractor
from subreminder.services.classifiers import classify_cycle, classify_status, infer_category
from subreminder.services.dates import DateExtractor

logger = logging.getLogger(__name__)

# Lines containing these are receipt boilerplate, not a service name
NAME_SKIP_WORDS = [
    "receipt", "invoice", "order", "payment", "confirmation",
    "thank you", "thanks", "dear", "hello", "hi ",
    "total", "subtotal", "tax", "收据", "发票", "订单", "确认",
]
NAME_CURRENCY_SYMBOLS = "$€£¥₩₹₽฿"
NAME_MAX_LENGTH = 40
NAME_SCAN_LINES = 5


class SubscriptionTextParser:
    """Service for parsing OCR text and extracting subscription fields."""

    def __init__(self):
        self.amount_extractor = AmountExtractor()
        self.date_extractor = DateExtractor()

    def parse(
        self,
        text: str,
        locale: Optional[str] = None,
        reference: Optional[date] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> ParsedSubscription:
        """
        Parse OCR text and extract all available fields.

        Args:
            text: OCR-extracted text from a receipt or screenshot
            locale: Locale for ambiguous numeric dates (defaults to settings.DATE_LOCALE)
            reference: Date used to complete partial dates such as "Mar 3"
            _debug: Optional dict collecting candidates and matched sources

        Returns:
            ParsedSubscription with every field that could be detected
        """
        fields: Dict[str, Any] = {}

        # 1. Known service seeds name, url, category and cycle
        service = find_known_service(text)
        if service:
            fields['name'] = service.display_name
            fields['url'] = service.domain
            fields['category'] = service.category
            fields['cycle'] = service.default_cycle
            if _debug is not None:
                _debug['known_service'] = service.domain

        # 2. Amount and currency always replace whatever was there
        amount, currency = self.amount_extractor.extract(text, _debug=_debug)
        fields['amount_text'] = amount
        fields['currency_code'] = currency

        # 3. An explicit cycle in the text beats the service default
        cycle = classify_cycle(text)
        if cycle:
            fields['cycle'] = cycle

        # 4. Dates, only for roles that were found
        roles = self.date_extractor.extract(text, locale=locale, reference=reference, _debug=_debug)
        if roles.start:
            fields['start_date'] = roles.start
        if roles.trial_end:
            fields['trial_end_date'] = roles.trial_end

        # 5. Active is "no opinion"; leave it to the caller's default
        status = classify_status(text)
        if status != SubscriptionStatus.ACTIVE:
            fields['status'] = status

        # 6. Name from the header lines when no service matched
        if not fields.get('name'):
            fields['name'] = self.infer_service_name(text)

        # 7. Category from keywords when no service matched
        if not fields.get('category'):
            fields['category'] = infer_category(text)

        parsed = ParsedSubscription(**fields)
        logger.debug("Parsed subscription: %s", parsed.summary())
        return parsed

    def infer_service_name(self, text: str) -> Optional[str]:
        """
        Pick the most prominent header line as the service name.

        Only the first few non-empty lines are considered; sentences,
        prices, boilerplate and bare numbers are skipped.
        """
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]

        for line in lines[:NAME_SCAN_LINES]:
            lower = line.lower()
            if len(line) > NAME_MAX_LENGTH:
                continue
            if any(symbol in line for symbol in NAME_CURRENCY_SYMBOLS):
                continue
            if any(word in lower for word in NAME_SKIP_WORDS):
                continue
            if re.fullmatch(r'[+-]?(\d+\.?\d*|\.\d+)', line):
                continue
            return line
        return None


_default_parser = SubscriptionTextParser()


def parse_subscription_text(
    text: str,
    locale: Optional[str] = None,
    reference: Optional[date] = None
) -> ParsedSubscription:
    """Parse text with a shared parser instance (patterns are compiled once)."""
    return _default_parser.parse(text, locale=locale, reference=reference)
