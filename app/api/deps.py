"""API dependencies for route handlers."""

from app.services.utils.analyzer import ExperienceAnalyzer, get_analyzer


def get_analyzer_dep() -> ExperienceAnalyzer:
    """Dependency to get the experience analyzer."""
    return get_analyzer()
