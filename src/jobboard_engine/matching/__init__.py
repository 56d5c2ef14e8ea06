"""Candidate and job post matching."""

from .engine import (
    MatchingEngine,
    default_engine,
    rank_candidates,
    rank_jobs,
    score
)

__all__ = [
    "MatchingEngine",
    "default_engine",
    "rank_candidates",
    "rank_jobs",
    "score"
]
