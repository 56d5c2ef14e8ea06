"""Job post lifecycle: who may do what to a job post, and which moves are legal.

Every rule lives in ``STATUS_RULES``, keyed by ``(role, action)``. The
role-aware permission check and the role-agnostic transition check are both
read off that one table, so they cannot disagree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Type, TypeVar, Union

from jobboard_engine.core.errors import ErrorCode, UnknownRoleError, error_for
from jobboard_engine.core.models import (
    JobAction,
    JobPostDescriptor,
    JobStatus,
    Role,
    StatusWrite,
    TransitionRequest,
)
from jobboard_engine.utils.logging import get_logger, log_decision

logger = get_logger(__name__)

# Pseudo-target for soft deletion, which flips the deleted flag instead of the status.
SOFT_DELETED = "SOFT_DELETED"

ALL_STATUSES: FrozenSet[JobStatus] = frozenset(JobStatus)

# Statuses in which a post is shown to candidates, matched and applied to.
OPEN_STATUSES: FrozenSet[JobStatus] = frozenset({JobStatus.ACTIVE})


class RuleEffect(Enum):
    """What a permitted action does to the post it targets."""
    STAY = "stay"
    MOVE = "move"
    SOFT_DELETE = "soft_delete"
    NEW_POST = "new_post"


@dataclass(frozen=True)
class StatusRule:
    """Source statuses an action is allowed from and where it leads."""
    sources: FrozenSet[JobStatus]
    effect: RuleEffect
    target: Optional[JobStatus] = None
    needs_source: bool = True
    owner_only: bool = False


def _rule(sources, effect, target=None, **kwargs) -> StatusRule:
    return StatusRule(sources=frozenset(sources), effect=effect, target=target, **kwargs)


_NOT_FULFILLED = ALL_STATUSES - {JobStatus.FULFILLED}

STATUS_RULES: Dict[Tuple[Role, JobAction], StatusRule] = {
    # admin
    (Role.ADMIN, JobAction.CREATE): _rule((), RuleEffect.NEW_POST, JobStatus.PENDING, needs_source=False),
    (Role.ADMIN, JobAction.EDIT): _rule(ALL_STATUSES, RuleEffect.STAY),
    (Role.ADMIN, JobAction.ACTIVATE): _rule(
        {JobStatus.PENDING, JobStatus.ON_HOLD}, RuleEffect.MOVE, JobStatus.ACTIVE
    ),
    (Role.ADMIN, JobAction.DEACTIVATE): _rule({JobStatus.ACTIVE}, RuleEffect.MOVE, JobStatus.PENDING),
    (Role.ADMIN, JobAction.HOLD): _rule({JobStatus.ACTIVE}, RuleEffect.MOVE, JobStatus.ON_HOLD),
    (Role.ADMIN, JobAction.FULFILL): _rule({JobStatus.ACTIVE}, RuleEffect.MOVE, JobStatus.FULFILLED),
    (Role.ADMIN, JobAction.REJECT): _rule({JobStatus.PENDING}, RuleEffect.SOFT_DELETE),
    (Role.ADMIN, JobAction.DELETE): _rule(ALL_STATUSES, RuleEffect.SOFT_DELETE),
    (Role.ADMIN, JobAction.CLONE): _rule(ALL_STATUSES, RuleEffect.NEW_POST, JobStatus.PENDING),
    # employer: only on posts they own, and never out of an admin hold
    (Role.EMPLOYER, JobAction.CREATE): _rule((), RuleEffect.NEW_POST, JobStatus.PENDING, needs_source=False),
    (Role.EMPLOYER, JobAction.EDIT): _rule(_NOT_FULFILLED, RuleEffect.STAY, owner_only=True),
    (Role.EMPLOYER, JobAction.ACTIVATE): _rule(
        {JobStatus.PENDING}, RuleEffect.MOVE, JobStatus.ACTIVE, owner_only=True
    ),
    (Role.EMPLOYER, JobAction.FULFILL): _rule(
        {JobStatus.ACTIVE}, RuleEffect.MOVE, JobStatus.FULFILLED, owner_only=True
    ),
    (Role.EMPLOYER, JobAction.DELETE): _rule(_NOT_FULFILLED, RuleEffect.SOFT_DELETE, owner_only=True),
    (Role.EMPLOYER, JobAction.CLONE): _rule(
        ALL_STATUSES, RuleEffect.NEW_POST, JobStatus.PENDING, owner_only=True
    ),
}


def _derive_edges(rules: Dict[Tuple[Role, JobAction], StatusRule]) -> FrozenSet[Tuple[JobStatus, str]]:
    edges = set()
    for rule in rules.values():
        if rule.effect is RuleEffect.MOVE:
            edges.update((source, rule.target) for source in rule.sources if source != rule.target)
        elif rule.effect is RuleEffect.SOFT_DELETE:
            edges.update((source, SOFT_DELETED) for source in rule.sources)
    return frozenset(edges)


TRANSITION_EDGES = _derive_edges(STATUS_RULES)


E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Map a raw value onto an enum member, or None if it is not one."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def coerce_role(role: Any) -> Role:
    """Map a raw role onto Role; unknown roles are a caller bug and raise."""
    coerced = _coerce(Role, role)
    if coerced is None:
        raise UnknownRoleError(f"Unknown role: {role!r}")
    return coerced


def get_rule(role: Union[Role, str], action: Union[JobAction, str]) -> Optional[StatusRule]:
    """Look up the rule for a role/action pair; None if the pair is never allowed."""
    coerced_role = coerce_role(role)
    coerced_action = _coerce(JobAction, action)
    if coerced_action is None:
        return None
    return STATUS_RULES.get((coerced_role, coerced_action))


def can_perform_action(
    role: Union[Role, str],
    current_status: Union[JobStatus, str, None],
    action: Union[JobAction, str],
    deleted: bool = False,
    *,
    is_owner: bool = True,
) -> bool:
    """
    Decide whether ``role`` may perform ``action`` on a post in ``current_status``.

    A deleted post is frozen: nothing is allowed. Unrecognized actions and
    statuses are refused rather than raised on; an unrecognized role raises
    UnknownRoleError.
    """
    rule = get_rule(role, action)
    if deleted or rule is None:
        return False
    if rule.owner_only and not is_owner:
        return False
    status = _coerce(JobStatus, current_status)
    if not rule.needs_source:
        return current_status is None or status is not None
    return status is not None and status in rule.sources


def is_valid_transition(
    current_status: Union[JobStatus, str, None],
    target_status: Union[JobStatus, str, None],
    deleted: bool = False,
) -> bool:
    """
    Role-agnostic guard run before a status write is committed.

    ``target_status`` may be SOFT_DELETED to check a soft delete. Self
    transitions are never legal and a deleted post accepts nothing.
    """
    if deleted:
        return False
    current = _coerce(JobStatus, current_status)
    if current is None:
        return False
    target = SOFT_DELETED if target_status == SOFT_DELETED else _coerce(JobStatus, target_status)
    if target is None:
        return False
    return (current, target) in TRANSITION_EDGES


def allowed_actions(
    role: Union[Role, str],
    current_status: Union[JobStatus, str, None],
    deleted: bool = False,
    *,
    is_owner: bool = True,
) -> List[JobAction]:
    """Every action ``role`` may take on a post in this state, in declaration order."""
    return [
        action for action in JobAction
        if can_perform_action(role, current_status, action, deleted, is_owner=is_owner)
    ]


def accepts_applications(status: Union[JobStatus, str, None], deleted: bool = False) -> bool:
    """Whether a post in this state is open for matching and applications."""
    return not deleted and _coerce(JobStatus, status) in OPEN_STATUSES


def can_perform(request: TransitionRequest) -> bool:
    """Evaluate a TransitionRequest against the rule table."""
    return can_perform_action(
        request.role, request.status, request.action, request.deleted, is_owner=request.is_owner
    )


@dataclass(frozen=True)
class TransitionOutcome:
    """Result of asking the engine to apply an action to a post."""
    role: Role
    action: str
    allowed: bool
    job: JobPostDescriptor
    write: Optional[StatusWrite] = None
    error: Optional[ErrorCode] = None

    def raise_for_error(self) -> None:
        """Raise the matching JobBoardError if the transition was refused."""
        if self.error is not None:
            raise error_for(
                self.error,
                job_id=self.job.id,
                role=self.role.value,
                action=self.action,
                status=self.job.status.value,
            )


def _commit(job: JobPostDescriptor, status: JobStatus, deleted: bool) -> Tuple[JobPostDescriptor, StatusWrite]:
    """The single place a status change is applied and its write derived."""
    updated = job.model_copy(update={"status": status, "deleted": deleted})
    return updated, StatusWrite(status=updated.status, on_hold=updated.on_hold, deleted=updated.deleted)


def transition(
    job: JobPostDescriptor,
    role: Union[Role, str],
    action: Union[JobAction, str],
    *,
    is_owner: bool = True,
) -> TransitionOutcome:
    """
    Apply ``action`` to ``job`` if both the permission and transition checks pass.

    Edits, creates and clones leave the post's status columns alone, so the
    outcome carries no write for them. The caller must persist ``write`` in the
    same serializable operation in which it re-reads the post.
    """
    coerced_role = coerce_role(role)
    action_name = action.value if isinstance(action, JobAction) else str(action)
    permitted = can_perform_action(coerced_role, job.status, action, job.deleted, is_owner=is_owner)
    rule = get_rule(coerced_role, action)

    write = None
    updated = job
    if permitted and rule.effect is RuleEffect.MOVE:
        permitted = is_valid_transition(job.status, rule.target, job.deleted)
        if permitted:
            updated, write = _commit(job, rule.target, job.deleted)
    elif permitted and rule.effect is RuleEffect.SOFT_DELETE:
        permitted = is_valid_transition(job.status, SOFT_DELETED, job.deleted)
        if permitted:
            updated, write = _commit(job, job.status, True)

    if not permitted:
        logger.info(
            "Job transition refused",
            job_id=job.id,
            **log_decision(
                "transition", False,
                role=coerced_role.value, action=action_name, status=job.status.value, deleted=job.deleted,
            ),
        )
        return TransitionOutcome(
            role=coerced_role, action=action_name, allowed=False, job=job, error=ErrorCode.INVALID_TRANSITION
        )

    logger.debug(
        "Job transition applied",
        job_id=job.id,
        new_status=updated.status.value,
        **log_decision(
            "transition", True,
            role=coerced_role.value, action=action_name, status=job.status.value, deleted=updated.deleted,
        ),
    )
    return TransitionOutcome(role=coerced_role, action=action_name, allowed=True, job=updated, write=write)
