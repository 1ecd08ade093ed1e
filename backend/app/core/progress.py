"""Progress Math — pure completion-rate and deadline classification helpers.

Invariants:
    - progress_rate(done, 0) == 0 for any done
    - progress_rate rounds UP to the next whole percent (1 of 3 -> 34)
    - A project ending today is completed, not in progress

Design Decisions:
    - Integer ceiling division instead of math.ceil over floats: 100 * done / total
      is exact in integers, floats can land a hair above a whole number
"""

from datetime import date

from app.core.domain_types import ProgressRate


def progress_rate(done: int, total: int) -> ProgressRate:
    """Percentage of done tasks, rounded up. Zero tasks means zero progress."""
    if total <= 0:
        return ProgressRate(0)
    return ProgressRate(-(-100 * done // total))


def is_in_progress(end_date: date, today: date) -> bool:
    """True when the project ends strictly after `today`."""
    return end_date > today
