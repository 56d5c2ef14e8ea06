"""Job post lifecycle rules."""

from .status import (
    SOFT_DELETED,
    STATUS_RULES,
    TRANSITION_EDGES,
    RuleEffect,
    StatusRule,
    TransitionOutcome,
    accepts_applications,
    allowed_actions,
    can_perform,
    coerce_role,
    can_perform_action,
    is_valid_transition,
    transition
)
from .cloning import clone_job, generate_job_code
from .sweeper import find_stale_posts

__all__ = [
    "SOFT_DELETED",
    "STATUS_RULES",
    "TRANSITION_EDGES",
    "RuleEffect",
    "StatusRule",
    "TransitionOutcome",
    "accepts_applications",
    "allowed_actions",
    "can_perform",
    "coerce_role",
    "can_perform_action",
    "is_valid_transition",
    "transition",
    "clone_job",
    "generate_job_code",
    "find_stale_posts"
]
