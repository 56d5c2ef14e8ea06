"""Cloning job posts into fresh pending drafts."""

import random
import string
import time
from typing import Optional, Union

from jobboard_engine.core.errors import InvalidTransitionError
from jobboard_engine.core.models import (
    JobAction,
    JobPostDescriptor,
    JobStatus,
    Role,
    TransitionRequest,
)
from jobboard_engine.lifecycle.status import can_perform, coerce_role
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_job_code(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Build a job code like ``JOB-123456-AB12``."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = rng or random
    suffix = "".join(rng.choice(_CODE_ALPHABET) for _ in range(4))
    return f"JOB-{str(now_ms)[-6:]}-{suffix}"


def clone_job(
    job: JobPostDescriptor,
    role: Union[Role, str],
    *,
    new_id: Union[int, str],
    employer_id: Optional[Union[int, str]] = None,
    is_owner: bool = True,
    job_code: Optional[str] = None,
) -> JobPostDescriptor:
    """
    Copy a job post into a new pending post.

    Args:
        job: Post to copy
        role: Role asking for the clone
        new_id: Identifier the entity store assigned to the copy
        employer_id: Employer to own the copy (admins may reassign); defaults to the source's
        is_owner: Whether an employer caller owns the source post
        job_code: Code for the copy; generated when omitted

    Returns:
        The new post, in PENDING, not deleted, with no applications

    Raises:
        InvalidTransitionError: if the clone rule refuses the request
        UnknownRoleError: if ``role`` is not a known role
    """
    request = TransitionRequest(
        role=coerce_role(role),
        action=JobAction.CLONE,
        status=job.status,
        deleted=job.deleted,
        is_owner=is_owner,
    )
    if not can_perform(request):
        logger.info("Clone refused", job_id=job.id, role=request.role.value, deleted=job.deleted)
        raise InvalidTransitionError("Cannot clone this job post", job_id=job.id)

    clone = job.model_copy(
        update={
            "id": new_id,
            "title": f"Copy of {job.title}",
            "employer_id": employer_id if employer_id is not None else job.employer_id,
            "job_code": job_code or generate_job_code(),
            "status": JobStatus.PENDING,
            "deleted": False,
            "applications_count": 0,
            "created_at": None,
        }
    )
    logger.debug("Job post cloned", source_id=job.id, clone_id=new_id)
    return clone
