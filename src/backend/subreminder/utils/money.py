"""
Shared money parsing and formatting utilities with multi-locale support.

Handles various number formats:
- US: 1,234.56
- European: 1.234,56 or 1 234,56
- Comma decimals from OCR: 9,99 → 9.99
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional
import re


# Supported currency codes, in display order
CURRENCIES = [
    "USD", "EUR", "GBP", "CNY", "JPY", "KRW", "CAD", "AUD",
    "CHF", "HKD", "SGD", "SEK", "NOK", "DKK", "INR", "BRL",
    "MXN", "TWD", "THB", "RUB",
]

CURRENCY_SYMBOLS = {
    "USD": "$", "EUR": "€", "GBP": "£", "CNY": "¥", "JPY": "¥",
    "KRW": "₩", "CAD": "C$", "AUD": "A$", "CHF": "CHF", "HKD": "HK$",
    "SGD": "S$", "SEK": "kr", "NOK": "kr", "DKK": "kr", "INR": "₹",
    "BRL": "R$", "MXN": "MX$", "TWD": "NT$", "THB": "฿", "RUB": "₽",
}


class MoneyFormat(Enum):
    """Money format locale hints."""
    US = "US"  # 1,234.56
    EUROPEAN = "EUROPEAN"  # 1.234,56 or 1 234,56
    AUTO = "AUTO"  # Auto-detect based on patterns


def normalize_decimal(amount_str: str) -> str:
    """Convert comma decimal separators to periods: "9,99" → "9.99"."""
    return amount_str.replace(',', '.')


def parse_money(
    amount_str: str,
    format_hint: Optional[MoneyFormat] = None,
    allow_negative: bool = False
) -> Optional[Decimal]:
    """
    Parse money string with multi-locale support.

    Args:
        amount_str: String containing amount (e.g., "$1,234.56", "1.234,56 EUR")
        format_hint: Optional locale hint (US, EUROPEAN, AUTO)
        allow_negative: Whether to allow negative amounts

    Returns:
        Decimal amount or None if parsing fails

    Examples:
        >>> parse_money("$1,234.56")
        Decimal('1234.56')
        >>> parse_money("9,99")
        Decimal('9.99')
        >>> parse_money("-5", allow_negative=True)
        Decimal('-5')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    is_negative = False
    cleaned = amount_str.strip()

    if cleaned.startswith('-'):
        if not allow_negative:
            return None
        is_negative = True
        cleaned = cleaned[1:].strip()

    # Strip currency symbols and codes: $, HK$, ¥, kr, USD, ...
    currency_pattern = r'[A-Z]{0,2}\$\s*|[€£¥₩₹₽฿]\s*|\bkr\b\s*|[A-Z]{3}\s*'
    cleaned = re.sub(currency_pattern, '', cleaned, flags=re.IGNORECASE)
    cleaned = cleaned.strip()

    if not cleaned:
        return None

    detected_format = format_hint or MoneyFormat.AUTO

    if detected_format == MoneyFormat.AUTO:
        detected_format = _detect_money_format(cleaned)

    if detected_format == MoneyFormat.EUROPEAN:
        result = _parse_european_format(cleaned)
    else:  # US or fallback
        result = _parse_us_format(cleaned)

    if result is None or not result.is_finite():
        return None

    if is_negative:
        result = -result

    return result


def _detect_money_format(amount_str: str) -> MoneyFormat:
    """
    Auto-detect money format based on separator patterns.

    Heuristics:
    - If ends with ,X or ,XX (comma + 1-2 digits), assume European
    - If contains space as thousands separator, assume European
    - Otherwise assume US
    """
    if re.search(r',\d{1,2}$', amount_str):
        return MoneyFormat.EUROPEAN

    if ' ' in amount_str and '.' not in amount_str:
        return MoneyFormat.EUROPEAN

    if '.' in amount_str and ',' in amount_str:
        if amount_str.index('.') < amount_str.rindex(','):
            return MoneyFormat.EUROPEAN

    return MoneyFormat.US


def _parse_us_format(amount_str: str) -> Optional[Decimal]:
    """Parse US format: comma thousands, dot decimal."""
    cleaned = amount_str.replace(',', '').replace(' ', '')
    try:
        return Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None


def _parse_european_format(amount_str: str) -> Optional[Decimal]:
    """Parse European format: dot or space thousands, comma decimal."""
    cleaned = amount_str.replace('.', '').replace(' ', '')
    cleaned = normalize_decimal(cleaned)
    try:
        return Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None


def currency_symbol(currency: str) -> str:
    """Display symbol for a currency code, or the code itself when unknown."""
    return CURRENCY_SYMBOLS.get(currency.upper(), currency)


def format_money(amount: Decimal, currency: str = 'USD') -> str:
    """
    Format amount with two decimals: "$9.99".

    Examples:
        >>> format_money(Decimal('9.99'))
        '$9.99'
        >>> format_money(Decimal('1200'), 'EUR')
        '€1200.00'
    """
    if amount is None:
        return 'N/A'

    quantized = Decimal(amount).quantize(Decimal('0.01'))
    return f"{currency_symbol(currency)}{quantized}"
