"""
Experience Calculation using Merge Overlapping Intervals Algorithm.

This module provides total work experience and average tenure by:
1. Normalizing free-text start/end dates (see `dates.parse_date`)
2. Merging overlapping or near-adjacent periods (gap <= 30 days)
3. Supporting ongoing positions (is_currently_working -> today)

The key insight is that if someone works two jobs simultaneously,
we should NOT double-count that time period. Short breaks between jobs
(notice periods, relocation) are folded into one continuous tenure too.

Example:
    Job A: 2018-01-01 to 2020-12-31
    Job B: 2019-06-01 to 2021-06-30

    Naive sum: ~5 years
    Correct (merged): ~3.5 years (2018-01 to 2021-06)

Durations use the approximate 365.25 / 30.44 day divisors rather than
calendar month arithmetic; downstream outputs depend on these exact values.
"""

import math
from dataclasses import dataclass
from datetime import date
from functools import reduce
from typing import Dict, List, Optional, Sequence, Tuple

from app.schemas.experience import Duration, Tenure
from app.schemas.resume import WorkEntry
from app.services.utils.dates import parse_date

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44
DEFAULT_GAP_THRESHOLD_DAYS = 30
UNKNOWN_COMPANY = "Unknown Company"


@dataclass(frozen=True)
class TimeInterval:
    """Represents a time interval with start and end dates."""

    start: date
    end: date

    @property
    def duration_days(self) -> int:
        """Duration in days."""
        return (self.end - self.start).days

    def gap_to(self, other: "TimeInterval") -> int:
        """Days from the end of this interval to the start of `other`."""
        return (other.start - self.end).days

    def extend_to(self, end: date) -> "TimeInterval":
        """New interval with the later of the two end dates."""
        return TimeInterval(start=self.start, end=max(self.end, end))


def days_to_duration(total_days: float) -> Duration:
    """
    Convert a day count into years/months.

    years = floor(days / 365.25), months = floor((days mod 365.25) / 30.44)
    """
    if total_days <= 0:
        return Duration(years=0, months=0, total_days=0)
    years = math.floor(total_days / DAYS_PER_YEAR)
    months = math.floor((total_days % DAYS_PER_YEAR) / DAYS_PER_MONTH)
    return Duration(years=years, months=months, total_days=math.floor(total_days))


def job_dates(job: WorkEntry, today: Optional[date] = None) -> Tuple[date, date]:
    """Normalized (start, end) for a job; current roles end today."""
    now = today or date.today()
    start = parse_date(job.start_date, today=now)
    end = now if job.is_currently_working else parse_date(job.end_date, today=now)
    return start, end


def job_interval(job: WorkEntry, today: Optional[date] = None) -> Optional[TimeInterval]:
    """The job's interval, or None when start is not strictly before end."""
    start, end = job_dates(job, today=today)
    if start < end:
        return TimeInterval(start=start, end=end)
    return None


def build_intervals(
    jobs: Sequence[WorkEntry],
    today: Optional[date] = None,
) -> List[TimeInterval]:
    """
    Convert work entries into time intervals.

    Entries whose start is not strictly before their end are dropped.
    Output order follows the input; callers sort as needed.
    """
    now = today or date.today()
    intervals = []
    for job in jobs:
        interval = job_interval(job, today=now)
        if interval is not None:
            intervals.append(interval)
    return intervals


def merge_intervals(
    intervals: Sequence[TimeInterval],
    gap_threshold_days: int = DEFAULT_GAP_THRESHOLD_DAYS,
) -> List[TimeInterval]:
    """
    Merge overlapping and near-adjacent time intervals.

    Algorithm:
    1. Start a period from the first interval
    2. Each next interval starting within `gap_threshold_days` of the
       period's end extends it (end = max of both ends)
    3. Otherwise the period is closed and a new one begins

    Input must already be sorted by start date.

    Args:
        intervals: Intervals sorted ascending by start.
        gap_threshold_days: Largest gap (days) still treated as continuous.

    Returns:
        List of merged TimeInterval objects

    Example:
        >>> merged = merge_intervals([
        ...     TimeInterval(date(2018, 1, 1), date(2019, 12, 31)),
        ...     TimeInterval(date(2020, 1, 20), date(2021, 6, 30)),  # 20-day gap
        ...     TimeInterval(date(2022, 1, 1), date(2023, 1, 1)),
        ... ])
        >>> len(merged)
        2
    """

    def fold(
        merged: Tuple[TimeInterval, ...], interval: TimeInterval
    ) -> Tuple[TimeInterval, ...]:
        if not merged:
            return (interval,)
        last = merged[-1]
        if last.gap_to(interval) <= gap_threshold_days:
            return merged[:-1] + (last.extend_to(interval.end),)
        return merged + (interval,)

    return list(reduce(fold, intervals, ()))


def calculate_total_experience(
    jobs: Sequence[WorkEntry],
    today: Optional[date] = None,
    gap_threshold_days: int = DEFAULT_GAP_THRESHOLD_DAYS,
) -> Duration:
    """
    Calculate total work experience from a work history.

    Concurrent jobs and jobs separated by short breaks are merged before
    summing, so calendar time is never counted twice.

    Args:
        jobs: Work history entries in any order.
        today: Reference date for current roles and unparseable dates.
        gap_threshold_days: Merge adjacency threshold.

    Returns:
        Duration of the merged periods; zero for an empty history.
    """
    if not jobs:
        return days_to_duration(0)

    intervals = sorted(build_intervals(jobs, today=today), key=lambda i: i.start)
    merged = merge_intervals(intervals, gap_threshold_days=gap_threshold_days)

    total_days = sum(period.duration_days for period in merged)
    return days_to_duration(total_days)


def calculate_average_tenure(
    jobs: Sequence[WorkEntry],
    today: Optional[date] = None,
) -> Duration:
    """
    Average tenure per role from raw (unmerged) job durations.

    Jobs with invalid intervals are left out of both the sum and the count.
    """
    durations = [i.duration_days for i in build_intervals(jobs, today=today)]
    if not durations:
        return days_to_duration(0)
    return days_to_duration(sum(durations) / len(durations))


def calculate_average_company_tenure(
    jobs: Sequence[WorkEntry],
    today: Optional[date] = None,
    unknown_company: str = UNKNOWN_COMPANY,
) -> Tenure:
    """
    Average tenure per employer.

    Each company's total is the sum of its jobs' whole months
    (years * 12 + months of each per-job Duration). The result is the
    mean of those company totals, so a company counts once no matter
    how many roles were held there.
    """
    now = today or date.today()
    company_months: Dict[str, int] = {}

    for job in jobs:
        interval = job_interval(job, today=now)
        if interval is None:
            continue
        duration = days_to_duration(interval.duration_days)
        company = job.company_name or unknown_company
        company_months[company] = (
            company_months.get(company, 0) + duration.years * 12 + duration.months
        )

    if not company_months:
        return Tenure(years=0, months=0)

    average_months = sum(company_months.values()) / len(company_months)
    return Tenure(
        years=math.floor(average_months / 12),
        months=math.floor(average_months % 12),
    )


def calculate_experience(
    start_text: Optional[str],
    end_text: Optional[str],
    today: Optional[date] = None,
) -> Duration:
    """
    Experience between two free-text dates, regardless of their order.

    Used for a single job card, e.g. ("2020-01-01", "Present").
    """
    now = today or date.today()
    start = parse_date(start_text, today=now)
    end = parse_date(end_text, today=now)
    return days_to_duration(abs((end - start).days))


def job_experience(job: WorkEntry, today: Optional[date] = None) -> Duration:
    """Per-job experience; current roles run until today."""
    end_text = None if job.is_currently_working else job.end_date
    return calculate_experience(job.start_date, end_text, today=today)
