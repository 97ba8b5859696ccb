"""
Employment history analyzer.

Runs the analytics for one work history against a single reference date so
that every figure in a report agrees on what "today" is. Each operation is
timed; timings go to the debug log and, optionally, to an `on_timing`
callback for callers that collect metrics.
"""

import logging
import time
from datetime import date
from typing import Callable, List, Optional, Sequence

from app.config import Settings, get_settings
from app.schemas.experience import (
    Duration,
    EmploymentTimeline,
    ExperienceReport,
    JobSummary,
    Tenure,
)
from app.schemas.resume import WorkEntry
from app.services.utils.classifier import is_trainee_or_intern
from app.services.utils.experience import (
    calculate_average_company_tenure,
    calculate_average_tenure,
    calculate_total_experience,
    job_dates,
    job_experience,
)
from app.services.utils.timeline import detect_gaps_and_overlaps

logger = logging.getLogger(__name__)

TimingHook = Callable[[str, float], None]


class ExperienceAnalyzer:
    """Computes experience metrics for parsed work histories."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], date] = date.today,
        on_timing: Optional[TimingHook] = None,
    ):
        self.settings = settings or get_settings()
        self._clock = clock
        self._on_timing = on_timing

    def _timed(self, operation: str, fn: Callable, *args, **kwargs):
        started = time.perf_counter()
        result = fn(*args, **kwargs)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"{operation} took {elapsed_ms:.2f}ms")
        if self._on_timing is not None:
            try:
                self._on_timing(operation, elapsed_ms)
            except Exception as e:
                logger.warning(f"Timing hook failed for {operation}: {e}")
        return result

    def _today(self, today: Optional[date]) -> date:
        return today or self._clock()

    def total_experience(
        self, jobs: Sequence[WorkEntry], today: Optional[date] = None
    ) -> Duration:
        """Total experience with overlapping/adjacent roles merged."""
        return self._timed(
            "total_experience",
            calculate_total_experience,
            jobs,
            today=self._today(today),
            gap_threshold_days=self.settings.gap_threshold_days,
        )

    def average_tenure(
        self, jobs: Sequence[WorkEntry], today: Optional[date] = None
    ) -> Duration:
        """Average tenure per role."""
        return self._timed(
            "average_tenure",
            calculate_average_tenure,
            jobs,
            today=self._today(today),
        )

    def average_company_tenure(
        self, jobs: Sequence[WorkEntry], today: Optional[date] = None
    ) -> Tenure:
        """Average tenure per company."""
        return self._timed(
            "average_company_tenure",
            calculate_average_company_tenure,
            jobs,
            today=self._today(today),
            unknown_company=self.settings.unknown_company_label,
        )

    def timeline(
        self,
        jobs: Sequence[WorkEntry],
        exclude_trainee_from_gaps: Optional[bool] = None,
        today: Optional[date] = None,
    ) -> EmploymentTimeline:
        """Gaps and overlaps between adjacent roles."""
        if exclude_trainee_from_gaps is None:
            exclude_trainee_from_gaps = self.settings.exclude_trainee_from_gaps
        return self._timed(
            "timeline",
            detect_gaps_and_overlaps,
            jobs,
            exclude_trainee_from_gaps=exclude_trainee_from_gaps,
            today=self._today(today),
            gap_threshold_days=self.settings.gap_threshold_days,
            overlap_tolerance_days=self.settings.overlap_tolerance_days,
            trainee_keywords=self.settings.trainee_keywords,
            trainee_max_days=self.settings.trainee_max_days,
        )

    def job_summaries(
        self, jobs: Sequence[WorkEntry], today: Optional[date] = None
    ) -> List[JobSummary]:
        """Per-job dates, duration and flags in input order."""
        now = self._today(today)
        summaries = []
        for job in jobs:
            start, end = job_dates(job, today=now)
            summaries.append(
                JobSummary(
                    title=job.title,
                    company=job.company_name,
                    employment_type=job.employment_type,
                    location=job.work_location,
                    start_date=start,
                    end_date=end,
                    experience=job_experience(job, today=now),
                    is_current=job.is_currently_working,
                    is_trainee=is_trainee_or_intern(
                        job,
                        keywords=self.settings.trainee_keywords,
                        max_days=self.settings.trainee_max_days,
                        today=now,
                    ),
                    has_date_issue=start >= end,
                )
            )
        return summaries

    def analyze(
        self,
        jobs: Sequence[WorkEntry],
        exclude_trainee_from_gaps: Optional[bool] = None,
        today: Optional[date] = None,
    ) -> ExperienceReport:
        """
        Run every analytics operation on one work history.

        Args:
            jobs: Parsed work history.
            exclude_trainee_from_gaps: Overrides the configured default.
            today: Reference date; defaults to the analyzer clock.

        Returns:
            ExperienceReport with totals, averages, timeline and job cards.
        """
        now = self._today(today)
        logger.debug(f"Analyzing work history with {len(jobs)} entries")

        report = ExperienceReport(
            total_experience=self.total_experience(jobs, today=now),
            average_tenure=self.average_tenure(jobs, today=now),
            average_company_tenure=self.average_company_tenure(jobs, today=now),
            timeline=self.timeline(
                jobs, exclude_trainee_from_gaps=exclude_trainee_from_gaps, today=now
            ),
            jobs=self.job_summaries(jobs, today=now),
        )

        logger.info(
            f"Experience: {report.total_experience.years}y "
            f"{report.total_experience.months}m, "
            f"{len(report.timeline.gaps)} gaps, "
            f"{len(report.timeline.overlaps)} overlaps"
        )
        return report


# Singleton instance
_analyzer: Optional[ExperienceAnalyzer] = None


def get_analyzer() -> ExperienceAnalyzer:
    """Get the global analyzer instance."""
    global _analyzer
    if _analyzer is None:
        _analyzer = ExperienceAnalyzer()
    return _analyzer
