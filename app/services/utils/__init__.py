"""Utility services initialization."""

from app.services.utils.analyzer import ExperienceAnalyzer, get_analyzer
from app.services.utils.classifier import is_trainee_or_intern
from app.services.utils.dates import parse_date
from app.services.utils.experience import (
    build_intervals,
    calculate_average_company_tenure,
    calculate_average_tenure,
    calculate_total_experience,
    merge_intervals,
)
from app.services.utils.timeline import detect_gaps_and_overlaps

__all__ = [
    "ExperienceAnalyzer",
    "get_analyzer",
    "is_trainee_or_intern",
    "parse_date",
    "build_intervals",
    "calculate_average_company_tenure",
    "calculate_average_tenure",
    "calculate_total_experience",
    "merge_intervals",
    "detect_gaps_and_overlaps",
]
