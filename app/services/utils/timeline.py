"""
Employment gap and overlap detection.

Jobs are sorted by start date and only chronologically adjacent pairs are
compared. A role fully containing a non-adjacent one is therefore not
reported as an overlap.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from app.config import DEFAULT_TRAINEE_KEYWORDS
from app.schemas.experience import EmploymentTimeline, GapRecord, OverlapRecord
from app.schemas.resume import WorkEntry
from app.services.utils.classifier import DEFAULT_TRAINEE_MAX_DAYS, is_trainee_or_intern
from app.services.utils.dates import parse_date
from app.services.utils.experience import DEFAULT_GAP_THRESHOLD_DAYS, job_dates

DEFAULT_OVERLAP_TOLERANCE_DAYS = 1


def detect_gaps_and_overlaps(
    jobs: Sequence[WorkEntry],
    exclude_trainee_from_gaps: bool = False,
    today: Optional[date] = None,
    gap_threshold_days: int = DEFAULT_GAP_THRESHOLD_DAYS,
    overlap_tolerance_days: int = DEFAULT_OVERLAP_TOLERANCE_DAYS,
    trainee_keywords: Iterable[str] = DEFAULT_TRAINEE_KEYWORDS,
    trainee_max_days: int = DEFAULT_TRAINEE_MAX_DAYS,
) -> EmploymentTimeline:
    """
    Find employment gaps and overlapping roles.

    For each adjacent pair (current, next) in start-date order:
    - gap > `gap_threshold_days`: recorded as a gap, unless trainee
      exclusion is on and either role is a trainee/intern role, in which
      case the pair is skipped
    - gap < -`overlap_tolerance_days`: recorded as an overlap
    - otherwise: continuous employment

    Args:
        jobs: Work history entries in any order.
        exclude_trainee_from_gaps: Skip gaps next to trainee/intern roles.
        today: Reference date for current roles and unparseable dates.

    Returns:
        EmploymentTimeline with gaps and overlaps in chronological order.
    """
    now = today or date.today()
    keywords = list(trainee_keywords)

    def is_trainee(job: WorkEntry) -> bool:
        return is_trainee_or_intern(
            job, keywords=keywords, max_days=trainee_max_days, today=now
        )

    sorted_jobs = sorted(jobs, key=lambda j: parse_date(j.start_date, today=now))

    gaps = []
    overlaps = []

    for current, nxt in zip(sorted_jobs, sorted_jobs[1:]):
        _, current_end = job_dates(current, today=now)
        next_start = parse_date(nxt.start_date, today=now)
        gap_days = (next_start - current_end).days

        if gap_days > gap_threshold_days:
            if exclude_trainee_from_gaps and (is_trainee(current) or is_trainee(nxt)):
                continue
            gaps.append(
                GapRecord(
                    from_job=current.title,
                    to_job=nxt.title,
                    from_date=current_end,
                    to_date=next_start,
                    days=gap_days,
                )
            )
        elif gap_days < -overlap_tolerance_days:
            overlaps.append(
                OverlapRecord(job1=current.title, job2=nxt.title, days=abs(gap_days))
            )

    return EmploymentTimeline(
        gaps=gaps,
        overlaps=overlaps,
        position_count=len(jobs),
        current_position_count=sum(1 for j in jobs if j.is_currently_working),
    )
