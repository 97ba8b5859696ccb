"""Heuristic trainee/intern role detection."""

from datetime import date
from typing import Iterable, Optional

from app.config import DEFAULT_TRAINEE_KEYWORDS
from app.schemas.resume import WorkEntry
from app.services.utils.experience import job_dates

DEFAULT_TRAINEE_MAX_DAYS = 180


def is_trainee_or_intern(
    job: WorkEntry,
    keywords: Iterable[str] = DEFAULT_TRAINEE_KEYWORDS,
    max_days: int = DEFAULT_TRAINEE_MAX_DAYS,
    today: Optional[date] = None,
) -> bool:
    """
    Check whether a role looks like a trainee or internship position.

    A role qualifies if its title or description contains one of `keywords`
    (case-insensitive substring match), or if it lasted fewer than
    `max_days` days. Current roles are measured up to today.
    """
    title = (job.title or "").lower()
    description = (job.description or "").lower()

    for keyword in keywords:
        kw = keyword.lower()
        if kw in title or kw in description:
            return True

    start, end = job_dates(job, today=today)

    return abs((end - start).days) < max_days
