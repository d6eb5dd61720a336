"""
Candidate dataclasses for extraction ranking.

Each candidate represents a potential extracted value with the metadata
used to rank it. Candidates are transient: they live for one parse call.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Any

from .money import normalize_decimal

# Priority points (higher is better)
KEYWORD_BONUS = 10  # Line mentions "total", "price", 金额, ...
EXPLICIT_CURRENCY_BONUS = 5  # Amount carries a symbol or currency code


@dataclass
class Candidate:
    """Base class for extraction candidates."""
    value: Any = None
    pattern_name: str = ""
    line_position: int = 0  # Which line of the text it came from
    raw_text: str = ""  # Original matched text


@dataclass
class AmountCandidate(Candidate):
    """
    Candidate for extracted amount.

    Ranking factors:
    - priority: keyword bonus + explicit currency bonus
    - numeric value: larger wins among equal priorities
    """
    value: str = ""  # Decimal string with "." separator
    currency: Optional[str] = None  # ISO-like code, None for bare numbers
    priority: int = 0

    @property
    def numeric_value(self) -> Decimal:
        try:
            return Decimal(self.value)
        except (InvalidOperation, ValueError):
            return Decimal(0)


@dataclass
class DateCandidate(Candidate):
    """
    Candidate for extracted date.

    context_line is the lowercased source line, used to decide whether the
    date is a start date, a trial end or a renewal date.
    """
    value: Optional[date] = None
    context_line: str = ""


def create_amount_candidate(
    raw_number: str,
    currency: Optional[str],
    pattern_name: str,
    has_keyword: bool,
    line_position: int,
    raw_text: str = ""
) -> AmountCandidate:
    """
    Create AmountCandidate with computed priority.

    Args:
        raw_number: Matched number, possibly with a comma decimal separator
        currency: Currency code implied by the match, if any
        pattern_name: Name of pattern that matched
        has_keyword: Whether the source line contains a price keyword
        line_position: Line number in text
        raw_text: Original matched text

    Returns:
        AmountCandidate with normalized value and priority
    """
    priority = KEYWORD_BONUS if has_keyword else 0
    if currency is not None:
        priority += EXPLICIT_CURRENCY_BONUS

    return AmountCandidate(
        value=normalize_decimal(raw_number),
        currency=currency,
        priority=priority,
        pattern_name=pattern_name,
        line_position=line_position,
        raw_text=raw_text or raw_number,
    )


def create_date_candidate(
    value: date,
    pattern_name: str,
    line: str,
    line_position: int,
    raw_text: str = ""
) -> DateCandidate:
    """Create DateCandidate tagged with its lowercased source line."""
    return DateCandidate(
        value=value,
        pattern_name=pattern_name,
        line_position=line_position,
        raw_text=raw_text,
        context_line=line.lower(),
    )
