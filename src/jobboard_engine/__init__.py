"""
Job Board Engine: job post lifecycle rules and candidate/job matching.

This package holds the decision logic behind a job-board backend: which role
may move a job post between statuses, how a job post and a candidate profile
are scored against each other, how match lists are ranked, and whether a
candidate may apply. It performs no I/O; persistence and transport belong to
the caller.
"""

__version__ = "0.1.0"

from jobboard_engine.applications.gate import ApplicationDecision, ApplicationGate, can_apply
from jobboard_engine.core.errors import ErrorCode, JobBoardError
from jobboard_engine.core.models import (
    CandidateDescriptor,
    JobAction,
    JobPostDescriptor,
    JobStatus,
    MatchResult,
    Role,
)
from jobboard_engine.lifecycle.status import can_perform_action, is_valid_transition, transition
from jobboard_engine.matching.engine import MatchingEngine, rank_candidates, rank_jobs, score
from jobboard_engine.ranking.service import RankingService, top_matches

__all__ = [
    "ApplicationDecision",
    "ApplicationGate",
    "can_apply",
    "ErrorCode",
    "JobBoardError",
    "CandidateDescriptor",
    "JobAction",
    "JobPostDescriptor",
    "JobStatus",
    "MatchResult",
    "Role",
    "can_perform_action",
    "is_valid_transition",
    "transition",
    "MatchingEngine",
    "rank_candidates",
    "rank_jobs",
    "score",
    "RankingService",
    "top_matches",
]
