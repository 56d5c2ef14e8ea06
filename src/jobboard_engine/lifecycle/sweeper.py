"""Periodic sweep that sends long-running active posts back for review."""

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from jobboard_engine.config import settings
from jobboard_engine.core.models import JobAction, JobPostDescriptor, JobStatus, Role
from jobboard_engine.lifecycle.status import TransitionOutcome, transition
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def find_stale_posts(
    jobs: Iterable[JobPostDescriptor],
    now: Optional[datetime] = None,
    max_age_days: Optional[int] = None,
) -> List[TransitionOutcome]:
    """
    Plan deactivation of active posts older than ``max_age_days``.

    Posts without a creation time are skipped. Each returned outcome carries
    the StatusWrite the scheduler must persist; the sweep itself writes nothing.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    max_age_days = settings.stale_post_days if max_age_days is None else max_age_days
    cutoff = now - timedelta(days=max_age_days)

    planned = []
    for job in jobs:
        if job.deleted or job.status != JobStatus.ACTIVE or job.created_at is None:
            continue
        if _as_utc(job.created_at) >= cutoff:
            continue
        outcome = transition(job, Role.ADMIN, JobAction.DEACTIVATE)
        if outcome.allowed:
            planned.append(outcome)

    logger.info("Stale post sweep planned", cutoff=cutoff.isoformat(), deactivations=len(planned))
    return planned
