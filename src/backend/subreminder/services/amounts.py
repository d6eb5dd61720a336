"""
Amount and currency extraction from OCR text.
"""

import re
import logging
from typing import List, Optional, Tuple

from subreminder.utils.candidates import AmountCandidate, create_amount_candidate
from subreminder.utils.money import CURRENCIES, normalize_decimal
from subreminder.utils.patterns import PatternSpec
from subreminder.utils.scoring import select_best_amount, select_top_amounts

logger = logging.getLogger(__name__)

# Words that mark a line as carrying the real price
PRIORITY_KEYWORDS = [
    "total", "charge", "amount", "payment", "price",
    "billed", "due", "subtotal", "cost", "fee",
    "合计", "总计", "金额", "价格", "费用", "支付",
]

# Multi-character symbols must come before "$" so "HK$" is not read as USD
SYMBOL_TO_CODE = [
    ("HK$", "HKD"), ("NT$", "TWD"), ("A$", "AUD"), ("C$", "CAD"),
    ("S$", "SGD"), ("MX$", "MXN"), ("R$", "BRL"),
    ("$", "USD"), ("€", "EUR"), ("£", "GBP"), ("¥", "CNY"),
    ("₩", "KRW"), ("₹", "INR"), ("₽", "RUB"), ("฿", "THB"),
    ("kr", "SEK"), ("CHF", "CHF"),
]

# (detected code, replacement code, context words anywhere in the text)
CURRENCY_OVERRIDES = [
    ("CNY", "JPY", ("jpy", "japan", "日本", "円")),
    ("SEK", "NOK", ("nok", "norway", "norwegian", "norsk")),
    ("SEK", "DKK", ("dkk", "denmark", "danish", "dansk")),
]

# 1,234.56 keeps its thousands separator; otherwise up to two decimals after . or ,
NUMBER = r'(\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:[.,]\d{1,2})?)'
THOUSANDS_NUMBER = re.compile(r'\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?')


# Any symbol-prefixed or code-suffixed amount, e.g. "$9.99", "kr 79", "15.00 EUR"
MONEY_PATTERN = re.compile(
    r'(?:' + '|'.join(re.escape(symbol) for symbol, _ in SYMBOL_TO_CODE) + r')\s*' + NUMBER
    + r'|' + NUMBER + r'\s*(?:' + '|'.join(CURRENCIES) + r')(?![A-Za-z])',
    re.IGNORECASE,
)


def normalize_number(raw: str) -> str:
    """ "1,234.56" → "1234.56", "9,99" → "9.99". """
    if THOUSANDS_NUMBER.fullmatch(raw):
        return raw.replace(',', '')
    return normalize_decimal(raw)


def strip_amounts(line: str) -> str:
    """Blank out money amounts so their digits are not read as anything else."""
    return MONEY_PATTERN.sub(' ', line)


class AmountExtractor:
    """Finds the most plausible amount + currency pair in a text."""

    def __init__(self):
        """Initialize extractor with regex patterns."""
        self._init_patterns()

    def _init_patterns(self):
        """Initialize regex patterns for amount extraction."""

        # One pattern per currency symbol, tried in SYMBOL_TO_CODE order.
        # Letter-prefixed symbols must not sit inside a word ("US$" is not "S$").
        self.symbol_patterns: List[Tuple[PatternSpec, str]] = [
            (
                PatternSpec(
                    name=f'symbol_{code.lower()}',
                    pattern=(
                        (r'(?<![A-Za-z])' if symbol[0].isalpha() else '')
                        + re.escape(symbol) + r'\s*' + NUMBER
                    ),
                    example=f'{symbol}9.99',
                ),
                code,
            )
            for symbol, code in SYMBOL_TO_CODE
        ]

        self.code_pattern = PatternSpec(
            name='trailing_currency_code',
            pattern=NUMBER + r'\s*(' + '|'.join(CURRENCIES) + r')(?![A-Za-z])',
            example='9.99 USD',
            notes='Amount followed by a 3-letter currency code',
        )

        self.bare_pattern = PatternSpec(
            name='bare_keyword_amount',
            pattern=r'(\d+[.,]\d{2})',
            example='Total 9.99',
            notes='Only used on keyword lines without a symbol or code',
        )

    def collect_candidates(self, text: str) -> List[AmountCandidate]:
        """Generate amount candidates line by line."""
        candidates: List[AmountCandidate] = []

        for line_idx, line in enumerate(text.splitlines()):
            lower_line = line.lower()
            has_keyword = any(kw in lower_line for kw in PRIORITY_KEYWORDS)
            matched_explicit = False

            for spec, code in self.symbol_patterns:
                match = spec.search(line)
                if match:
                    candidates.append(create_amount_candidate(
                        raw_number=normalize_number(match.group(1)),
                        currency=code,
                        pattern_name=spec.name,
                        has_keyword=has_keyword,
                        line_position=line_idx,
                        raw_text=match.group(0),
                    ))
                    matched_explicit = True

            match = self.code_pattern.search(line)
            if match:
                candidates.append(create_amount_candidate(
                    raw_number=normalize_number(match.group(1)),
                    currency=match.group(2).upper(),
                    pattern_name=self.code_pattern.name,
                    has_keyword=has_keyword,
                    line_position=line_idx,
                    raw_text=match.group(0),
                ))
                matched_explicit = True

            if has_keyword and not matched_explicit:
                match = self.bare_pattern.search(line)
                if match:
                    candidates.append(create_amount_candidate(
                        raw_number=match.group(1),
                        currency=None,
                        pattern_name=self.bare_pattern.name,
                        has_keyword=True,
                        line_position=line_idx,
                        raw_text=match.group(0),
                    ))

        return candidates

    def extract(self, text: str, _debug=None) -> Tuple[Optional[str], Optional[str]]:
        """
        Extract the best amount and its currency.

        Args:
            text: OCR text

        Returns:
            (amount, currency) where amount is a decimal string like "9.99";
            either may be None
        """
        try:
            candidates = self.collect_candidates(text)
            best = select_best_amount(candidates)

            if _debug is not None:
                _debug['amount_candidates'] = [
                    {
                        'value': c.value,
                        'currency': c.currency,
                        'priority': c.priority,
                        'pattern': c.pattern_name,
                    }
                    for c in select_top_amounts(candidates, top_n=3)
                ]

            if best is None:
                return None, None

            currency = self.resolve_currency(best.currency, text)
            logger.debug("Selected amount %s %s via %s", best.value, currency, best.pattern_name)
            return best.value, currency

        except (re.error, AttributeError, IndexError):
            logger.warning("Error extracting amount", exc_info=True)
            return None, None

    @staticmethod
    def resolve_currency(currency: Optional[str], text: str) -> Optional[str]:
        """
        Disambiguate shared symbols from context.

        "¥" reads as CNY unless the text mentions Japan; "kr" reads as SEK
        unless the text mentions Norway or Denmark.
        """
        if currency is None:
            return None

        lower_text = text.lower()
        for detected, replacement, hints in CURRENCY_OVERRIDES:
            if currency == detected and any(hint in lower_text for hint in hints):
                return replacement
        return currency
