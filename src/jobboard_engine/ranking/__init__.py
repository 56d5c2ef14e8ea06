"""Ranking of candidates for jobs and jobs for candidates."""

from .service import RankingService, top_matches

__all__ = ["RankingService", "top_matches"]
