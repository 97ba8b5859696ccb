"""
Tests for the Experience Calculation (Merge Intervals Algorithm).
"""

import pytest
from datetime import date

from app.schemas.experience import Duration, Tenure
from app.schemas.resume import WorkEntry
from app.services.utils.experience import (
    TimeInterval,
    build_intervals,
    calculate_average_company_tenure,
    calculate_average_tenure,
    calculate_experience,
    calculate_total_experience,
    days_to_duration,
    job_experience,
    merge_intervals,
)

TODAY = date(2026, 2, 1)


def make_job(title, start, end=None, current=False, company=None):
    return WorkEntry(
        title=title,
        work_company_name=company,
        work_start_date=start,
        work_end_date=end,
        is_currently_working=current,
    )


@pytest.fixture
def three_jobs():
    """Three roles separated by 31-day breaks, the last one ongoing."""
    return [
        make_job("Software Engineer", "2020-01-01", "2022-01-01", company="Test Company 1"),
        make_job("Senior Developer", "2022-02-01", "2024-01-01", company="Test Company 2"),
        make_job("Lead Developer", "2024-02-01", "Present", current=True, company="Test Company 3"),
    ]


class TestDaysToDuration:
    """Tests for the years/months conversion."""

    def test_two_years(self):
        """731 days is 2 years and 0 months (731 mod 365.25 = 0.5)."""
        assert days_to_duration(731) == Duration(years=2, months=0, total_days=731)

    def test_just_under_a_year(self):
        """365 days stays under 365.25, so it is 11 months."""
        assert days_to_duration(365) == Duration(years=0, months=11, total_days=365)

    def test_years_and_months(self):
        duration = days_to_duration(400)
        assert duration.years == 1
        assert duration.months == 1

    def test_zero_and_negative(self):
        """Non-positive day counts give a zeroed duration."""
        assert days_to_duration(0) == Duration(years=0, months=0, total_days=0)
        assert days_to_duration(-5) == Duration(years=0, months=0, total_days=0)

    @pytest.mark.parametrize("days", [1, 30, 31, 364, 366, 1000, 3653, 10000])
    def test_formula(self, days):
        """years = floor(d / 365.25), months = floor((d mod 365.25) / 30.44)."""
        duration = days_to_duration(days)
        assert duration.years == int(days // 365.25)
        assert duration.months == int((days % 365.25) // 30.44)
        assert duration.years >= 0 and duration.months >= 0
        assert duration.months <= 12


class TestBuildIntervals:
    """Tests for build_intervals function."""

    def test_valid_jobs(self, three_jobs):
        intervals = build_intervals(three_jobs, today=TODAY)

        assert len(intervals) == 3
        assert intervals[0] == TimeInterval(date(2020, 1, 1), date(2022, 1, 1))
        assert intervals[2].end == TODAY

    def test_inverted_range_dropped(self):
        """Start after end is excluded."""
        jobs = [make_job("Backwards", "2022-01-01", "2020-01-01")]
        assert build_intervals(jobs, today=TODAY) == []

    def test_zero_length_dropped(self):
        """Start must be strictly before end."""
        jobs = [make_job("Same day", "2021-05-05", "2021-05-05")]
        assert build_intervals(jobs, today=TODAY) == []

    def test_current_flag_overrides_end_text(self):
        """is_currently_working ends the role today whatever end_date says."""
        jobs = [make_job("Ongoing", "2025-01-01", "2025-06-01", current=True)]
        intervals = build_intervals(jobs, today=TODAY)

        assert intervals[0].end == TODAY

    def test_unparseable_start_defaults_to_today(self):
        """An unreadable start becomes today, which is after the end."""
        jobs = [make_job("Mystery", "sometime", "2020-01-01")]
        assert build_intervals(jobs, today=TODAY) == []


class TestMergeIntervals:
    """Tests for merge_intervals function."""

    def test_single_interval(self):
        """Single interval should return as-is."""
        intervals = [TimeInterval(date(2020, 1, 1), date(2022, 12, 31))]
        merged = merge_intervals(intervals)

        assert merged == intervals

    def test_non_overlapping_intervals(self):
        """Intervals far apart should remain separate."""
        intervals = [
            TimeInterval(date(2018, 1, 1), date(2018, 12, 31)),
            TimeInterval(date(2020, 1, 1), date(2020, 12, 31)),
        ]
        merged = merge_intervals(intervals)

        assert merged == intervals
        assert sum(m.duration_days for m in merged) == sum(
            i.duration_days for i in intervals
        )

    def test_overlapping_intervals(self):
        """Overlapping intervals should be merged."""
        intervals = [
            TimeInterval(date(2018, 1, 1), date(2020, 12, 31)),
            TimeInterval(date(2019, 6, 1), date(2021, 6, 30)),
        ]
        merged = merge_intervals(intervals)

        assert merged == [TimeInterval(date(2018, 1, 1), date(2021, 6, 30))]

    def test_contained_interval(self):
        """An interval contained within another should not shrink it."""
        intervals = [
            TimeInterval(date(2018, 1, 1), date(2022, 12, 31)),
            TimeInterval(date(2019, 6, 1), date(2020, 6, 30)),
        ]
        merged = merge_intervals(intervals)

        assert merged == [TimeInterval(date(2018, 1, 1), date(2022, 12, 31))]

    def test_twenty_day_gap_merges(self):
        """A 20-day break is continuous employment."""
        intervals = [
            TimeInterval(date(2019, 1, 1), date(2019, 12, 31)),
            TimeInterval(date(2020, 1, 20), date(2020, 12, 31)),
        ]
        merged = merge_intervals(intervals)

        assert merged == [TimeInterval(date(2019, 1, 1), date(2020, 12, 31))]

    def test_forty_five_day_gap_stays_separate(self):
        intervals = [
            TimeInterval(date(2019, 1, 1), date(2019, 12, 31)),
            TimeInterval(date(2020, 2, 14), date(2020, 12, 31)),
        ]
        merged = merge_intervals(intervals)

        assert len(merged) == 2

    def test_threshold_boundary(self):
        """Exactly 30 days merges, 31 days does not."""
        first = TimeInterval(date(2019, 1, 1), date(2019, 12, 31))

        thirty = merge_intervals([first, TimeInterval(date(2020, 1, 30), date(2020, 6, 1))])
        thirty_one = merge_intervals([first, TimeInterval(date(2020, 1, 31), date(2020, 6, 1))])

        assert len(thirty) == 1
        assert len(thirty_one) == 2

    def test_custom_threshold(self):
        intervals = [
            TimeInterval(date(2019, 1, 1), date(2019, 12, 31)),
            TimeInterval(date(2020, 2, 14), date(2020, 12, 31)),
        ]
        assert len(merge_intervals(intervals, gap_threshold_days=60)) == 1

    def test_input_not_modified(self):
        """Merging builds new intervals instead of extending the input."""
        intervals = [
            TimeInterval(date(2018, 1, 1), date(2020, 12, 31)),
            TimeInterval(date(2019, 6, 1), date(2021, 6, 30)),
        ]
        snapshot = list(intervals)

        merge_intervals(intervals)

        assert intervals == snapshot

    def test_empty_intervals(self):
        """Empty list should return empty."""
        assert merge_intervals([]) == []


class TestCalculateTotalExperience:
    """Tests for calculate_total_experience function."""

    def test_three_jobs_with_31_day_breaks(self, three_jobs):
        """31-day breaks exceed the threshold: 731 + 699 + 731 days."""
        total = calculate_total_experience(three_jobs, today=TODAY)

        assert total == Duration(years=5, months=10, total_days=2161)

    def test_30_day_break_merges(self, three_jobs):
        """Starting the second role one day earlier closes the first break."""
        jobs = [
            three_jobs[0],
            make_job("Senior Developer", "2022-01-31", "2024-01-01"),
            three_jobs[2],
        ]
        total = calculate_total_experience(jobs, today=TODAY)

        # 2020-01-01..2024-01-01 (1461) + 731
        assert total == Duration(years=6, months=0, total_days=2192)

    def test_overlapping_jobs_no_double_count(self):
        """Overlapping jobs should NOT be double-counted."""
        jobs = [
            make_job("A", "2018-01-01", "2020-06-30"),
            make_job("B", "2020-01-01", "2021-12-31"),
        ]
        total = calculate_total_experience(jobs, today=TODAY)

        assert total == Duration(years=3, months=11, total_days=1460)

    def test_unsorted_input(self, three_jobs):
        """Order of the work history does not matter."""
        shuffled = [three_jobs[2], three_jobs[0], three_jobs[1]]

        assert calculate_total_experience(shuffled, today=TODAY) == (
            calculate_total_experience(three_jobs, today=TODAY)
        )

    def test_invalid_jobs_ignored(self, three_jobs):
        jobs = three_jobs + [make_job("Backwards", "2019-01-01", "2018-01-01")]

        assert calculate_total_experience(jobs, today=TODAY).total_days == 2161

    def test_empty_list_returns_zero(self):
        """Empty list should return zero duration."""
        assert calculate_total_experience([], today=TODAY) == Duration(
            years=0, months=0, total_days=0
        )

    def test_idempotent(self, three_jobs):
        first = calculate_total_experience(three_jobs, today=TODAY)
        second = calculate_total_experience(three_jobs, today=TODAY)

        assert first == second


class TestAverageTenure:
    """Tests for role-level and company-level average tenure."""

    def test_average_per_role(self, three_jobs):
        """Raw durations 731, 699, 731 days average to 720.33 days."""
        average = calculate_average_tenure(three_jobs, today=TODAY)

        assert average == Duration(years=1, months=11, total_days=720)

    def test_invalid_jobs_not_counted_as_zero(self):
        jobs = [
            make_job("Valid", "2020-01-01", "2022-01-01"),
            make_job("Backwards", "2022-01-01", "2020-01-01"),
        ]
        average = calculate_average_tenure(jobs, today=TODAY)

        assert average == Duration(years=2, months=0, total_days=731)

    def test_no_valid_jobs(self):
        jobs = [make_job("Backwards", "2022-01-01", "2020-01-01")]

        assert calculate_average_tenure(jobs, today=TODAY) == Duration(
            years=0, months=0, total_days=0
        )
        assert calculate_average_tenure([], today=TODAY).total_days == 0

    def test_average_per_company(self, three_jobs):
        """24, 22 and 24 months across three companies average to 23.33."""
        average = calculate_average_company_tenure(three_jobs, today=TODAY)

        assert average == Tenure(years=1, months=11)

    def test_company_counted_once(self, three_jobs):
        """Three roles at one employer form a single 70-month tenure."""
        jobs = [
            make_job(j.title, j.start_date, j.end_date, j.is_currently_working, "Acme")
            for j in three_jobs
        ]
        average = calculate_average_company_tenure(jobs, today=TODAY)

        assert average == Tenure(years=5, months=10)

    def test_missing_company_grouped(self):
        """Roles without a company share the unknown bucket."""
        jobs = [
            make_job("A", "2018-01-01", "2019-01-01"),  # 365 days -> 11 months
            make_job("B", "2019-01-01", "2020-01-01"),  # 365 days -> 11 months
            make_job("C", "2020-01-01", "2022-01-01", company="Acme"),  # 24 months
        ]
        average = calculate_average_company_tenure(jobs, today=TODAY)

        # (22 + 24) / 2 = 23 months
        assert average == Tenure(years=1, months=11)

    def test_no_companies(self):
        assert calculate_average_company_tenure([], today=TODAY) == Tenure(
            years=0, months=0
        )


class TestCalculateExperience:
    """Tests for single job card experience."""

    def test_between_dates(self):
        assert calculate_experience("2020-01-01", "2022-01-01", today=TODAY) == Duration(
            years=2, months=0, total_days=731
        )

    def test_order_independent(self):
        assert calculate_experience("2022-01-01", "2020-01-01", today=TODAY).total_days == 731

    def test_job_card_matches_free_text_dates(self):
        """Current roles are measured like an end date of "Present"."""
        job = WorkEntry(
            title="Lead Developer",
            work_start_date="Feb 2024",
            work_end_date="2024-06-01",
            is_currently_working=True,
        )

        assert job_experience(job, today=TODAY) == calculate_experience(
            "Feb 2024", "Present", today=TODAY
        )
        assert job_experience(job, today=TODAY).total_days == 731

    def test_present_end(self):
        duration = calculate_experience("2024-02-01", "Present", today=TODAY)

        assert duration.total_days == 731


class TestTimeInterval:
    """Tests for TimeInterval dataclass."""

    def test_duration_days(self):
        """Test duration calculation in days."""
        interval = TimeInterval(
            start=date(2020, 1, 1),
            end=date(2020, 12, 31),
        )
        assert interval.duration_days == 365

    def test_gap_to(self):
        first = TimeInterval(date(2020, 1, 1), date(2020, 6, 30))
        second = TimeInterval(date(2020, 7, 31), date(2020, 12, 31))

        assert first.gap_to(second) == 31

    def test_extend_to(self):
        """Extending keeps the later end date."""
        interval = TimeInterval(date(2018, 1, 1), date(2020, 12, 31))

        assert interval.extend_to(date(2022, 12, 31)).end == date(2022, 12, 31)
        assert interval.extend_to(date(2019, 1, 1)).end == date(2020, 12, 31)
