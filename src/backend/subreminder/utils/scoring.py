"""
Ranking functions for extraction candidates.

Amount candidates are ordered by priority (descending), then by numeric
value (descending). The sort is stable, so among exact ties the candidate
generated first wins.
"""

from typing import List, Optional, Tuple

from .candidates import AmountCandidate

__all__ = [
    'rank_amounts', 'select_best_amount', 'select_top_amounts',
]


def _amount_sort_key(candidate: AmountCandidate) -> Tuple:
    """Sort key putting the most plausible amount first."""
    return (-candidate.priority, -candidate.numeric_value)


def rank_amounts(candidates: List[AmountCandidate]) -> List[AmountCandidate]:
    """Return candidates ordered best-first without mutating the input."""
    return sorted(candidates, key=_amount_sort_key)


def select_top_amounts(candidates: List[AmountCandidate], top_n: int = 3) -> List[AmountCandidate]:
    """
    Select top N amount candidates.

    Example:
        >>> top_3 = select_top_amounts(candidates, 3)
    """
    return rank_amounts(candidates)[:top_n]


def select_best_amount(candidates: List[AmountCandidate]) -> Optional[AmountCandidate]:
    """Select best amount candidate, or None if the list is empty."""
    if not candidates:
        return None
    return rank_amounts(candidates)[0]
