"""
Unit State - Translation state of a single catalog unit

Mirrors the `stringUnit.state` values Xcode writes into .xcstrings files,
plus the `error` state recorded when a translation request fails.
"""

from enum import Enum
from typing import Optional


class UnitState(str, Enum):
    """String unit states"""

    NEW = "new"                    # Added by Xcode, never translated
    TRANSLATED = "translated"      # Completed translation
    NEEDS_REVIEW = "needs_review"  # Flagged for review in Xcode
    STALE = "stale"                # Source string no longer in code
    ERROR = "error"                # Translation request failed (empty value)


# States that count as finished work; everything else is retried
COMPLETED_STATES = {UnitState.TRANSLATED}


def is_completed_state(state: Optional[str]) -> bool:
    """Check if a raw state string marks a completed translation"""
    return state in {s.value for s in COMPLETED_STATES}
