"""
Date extraction from OCR text.

Every line is tried against an ordered table of (pattern, handler) pairs;
the first handler that produces a real calendar date wins for that line.
Found dates are then given a role (start date or trial end) from the
keywords on their source line.
"""

import re
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from dateutil import parser as dateutil_parser

from subreminder.config import settings
from subreminder.services.amounts import strip_amounts
from subreminder.utils.candidates import DateCandidate, create_date_candidate
from subreminder.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)

MONTHS = (
    r'(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|'
    r'Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)'
)
MONTH_NUMBERS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
WEEKDAYS = r'(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)'

TRIAL_KEYWORDS = ["trial end", "trial expire", "free trial", "试用到期", "试用截止", "试用结束"]
START_KEYWORDS = ["start", "billing", "billed", "began", "since", "开始", "生效"]
RENEWAL_KEYWORDS = ["next billing", "next payment", "renewal", "renew", "下次扣款", "续费"]


@dataclass
class DateRoles:
    """Dates assigned a meaning. Either may be None."""
    start: Optional[date] = None
    trial_end: Optional[date] = None


def make_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def month_number(name: str) -> Optional[int]:
    return MONTH_NUMBERS.get(name[:3].lower())


def uses_month_first(locale: str) -> bool:
    """US-style locales read 03/04/2025 as March 4."""
    return locale.replace('-', '_').startswith('en_US')


class DateExtractor:
    """Finds calendar dates line by line and classifies them by role."""

    def __init__(self):
        """Initialize extractor with the ordered pattern table."""
        self._init_patterns()

    def _init_patterns(self):
        """Initialize (pattern, handler) pairs, tried in order."""
        Handler = Callable[[re.Match, str, str, Optional[date]], Optional[date]]

        self.date_patterns: List[Tuple[PatternSpec, Handler]] = [
            (
                PatternSpec(
                    name='chinese_date',
                    pattern=r'(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日',
                    example='2025年1月15日',
                ),
                self._parse_year_first,
            ),
            (
                PatternSpec(
                    name='iso_date',
                    pattern=r'(\d{4})[-/](\d{1,2})[-/](\d{1,2})',
                    example='2025-01-15',
                    notes='Also 2025/1/15',
                ),
                self._parse_year_first,
            ),
            (
                PatternSpec(
                    name='month_name_first',
                    pattern=r'\b' + MONTHS + r'\.?\s+(\d{1,2})(?:st|nd|rd|th)?,?\s*(\d{4})',
                    example='January 15, 2025',
                    notes='Abbreviations and ordinal suffixes allowed',
                ),
                self._parse_month_name_first,
            ),
            (
                PatternSpec(
                    name='day_first',
                    pattern=r'\b(\d{1,2})(?:st|nd|rd|th)?\s+' + MONTHS + r'\.?,?\s+(\d{4})',
                    example='15 January 2025',
                ),
                self._parse_day_first,
            ),
            (
                PatternSpec(
                    name='numeric_date_ambiguous',
                    pattern=r'(\d{1,2})[/-](\d{1,2})[/-](\d{4})',
                    example='01/15/2025',
                    notes='MM/DD/YYYY or DD/MM/YYYY, resolved by value range, then locale',
                ),
                self._parse_ambiguous_numeric,
            ),
            (
                PatternSpec(
                    name='natural_language',
                    pattern=(
                        r'\b' + MONTHS + r'\.?\s+\d{1,4}(?:st|nd|rd|th)?\b'
                        r'|\b\d{1,2}(?:st|nd|rd|th)?\s+' + MONTHS + r'\b'
                        r'|\b' + WEEKDAYS + r'\b'
                    ),
                    example='Renews on Mar 3rd',
                    notes='Last resort: fuzzy parse of the whole line',
                ),
                self._parse_natural_language,
            ),
        ]

    # Handlers

    def _parse_year_first(self, match, line, locale, reference):
        return make_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    def _parse_month_name_first(self, match, line, locale, reference):
        month = month_number(match.group(1))
        return make_date(int(match.group(3)), month, int(match.group(2))) if month else None

    def _parse_day_first(self, match, line, locale, reference):
        month = month_number(match.group(2))
        return make_date(int(match.group(3)), month, int(match.group(1))) if month else None

    def _parse_ambiguous_numeric(self, match, line, locale, reference):
        a, b, year = int(match.group(1)), int(match.group(2)), int(match.group(3))

        # A component above 12 can only be the day
        if a > 12 and b <= 12:
            return make_date(year, b, a)
        if b > 12 and a <= 12:
            return make_date(year, a, b)
        if a <= 12 and b <= 12:
            if uses_month_first(locale):
                return make_date(year, a, b)
            return make_date(year, b, a)
        return None

    def _parse_natural_language(self, match, line, locale, reference):
        # Prices must not donate digits to the date ("$9.99" is not September)
        line = strip_amounts(line)

        # Without a reference date the year must be spelled out
        if reference is None and not re.search(r'\b\d{4}\b', line):
            return None

        # Parse against two defaults that differ in month and day; if the
        # results differ, the text never named a real day
        year = reference.year if reference else 2000
        results = set()
        for default in (datetime(year, 1, 1), datetime(year, 3, 2)):
            try:
                parsed = dateutil_parser.parse(
                    line,
                    fuzzy=True,
                    dayfirst=not uses_month_first(locale),
                    default=default,
                )
            except (ValueError, OverflowError):
                return None
            results.add(parsed.date())

        if len(results) != 1:
            logger.debug("Discarding incomplete date in line: %r", line)
            return None
        return results.pop()

    # Extraction

    def extract_date_from_line(
        self,
        line: str,
        locale: str,
        reference: Optional[date] = None
    ) -> Optional[Tuple[date, str]]:
        """
        Find the first date in a single line.

        Returns:
            (date, pattern name) or None
        """
        for spec, handler in self.date_patterns:
            match = spec.search(line)
            if not match:
                continue
            parsed = handler(match, line, locale, reference)
            if parsed is not None:
                return parsed, spec.name
        return None

    def collect_candidates(
        self,
        text: str,
        locale: str,
        reference: Optional[date] = None
    ) -> List[DateCandidate]:
        candidates: List[DateCandidate] = []
        for line_idx, line in enumerate(text.splitlines()):
            found = self.extract_date_from_line(line, locale, reference)
            if found:
                value, pattern_name = found
                candidates.append(create_date_candidate(
                    value=value,
                    pattern_name=pattern_name,
                    line=line,
                    line_position=line_idx,
                    raw_text=line.strip(),
                ))
        return candidates

    def extract(
        self,
        text: str,
        locale: Optional[str] = None,
        reference: Optional[date] = None,
        _debug=None
    ) -> DateRoles:
        """
        Extract start and trial-end dates from text.

        Args:
            text: OCR text
            locale: Locale used for ambiguous numeric dates (e.g. "en_US", "en_GB")
            reference: Date used to complete partial natural-language dates

        Returns:
            DateRoles with whichever roles were found
        """
        locale = locale or settings.DATE_LOCALE
        roles = DateRoles()

        try:
            candidates = self.collect_candidates(text, locale, reference)
        except (re.error, ValueError, AttributeError):
            logger.warning("Error extracting dates", exc_info=True)
            return roles

        if _debug is not None:
            _debug['date_candidates'] = [
                {'value': c.value.isoformat(), 'pattern': c.pattern_name, 'line': c.line_position}
                for c in candidates
            ]

        for candidate in candidates:
            ctx = candidate.context_line
            if any(kw in ctx for kw in TRIAL_KEYWORDS):
                roles.trial_end = candidate.value
            elif any(kw in ctx for kw in START_KEYWORDS):
                roles.start = candidate.value
            elif any(kw in ctx for kw in RENEWAL_KEYWORDS):
                # Next billing date stands in for a missing start date
                if roles.start is None:
                    roles.start = candidate.value

        # A lone unlabelled date is taken as the start date
        if len(candidates) == 1 and roles.start is None and roles.trial_end is None:
            roles.start = candidates[0].value

        return roles
