"""Static fixtures served when the catalog cannot provide content."""

from serviceflow.fixtures.fallback_goals import FALLBACK_GOALS

__all__ = ["FALLBACK_GOALS"]
