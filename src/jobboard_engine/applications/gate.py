"""Gate deciding whether a candidate may apply to a job post."""

from dataclasses import dataclass
from typing import Optional

from jobboard_engine.core.errors import ErrorCode, error_for
from jobboard_engine.core.models import CandidateDescriptor, JobPostDescriptor
from jobboard_engine.lifecycle.status import accepts_applications
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ApplicationDecision:
    """Outcome of an application check.

    On success ``increment_application_count`` tells the caller to bump the
    job's application counter in the same transaction that inserts the
    application record. The gate never performs the write itself.
    """
    allowed: bool
    candidate_id: object
    job_id: object
    error: Optional[ErrorCode] = None
    increment_application_count: bool = False

    def raise_for_error(self) -> None:
        """Raise the matching JobBoardError if the application was refused."""
        if self.error is not None:
            raise error_for(self.error, candidate_id=self.candidate_id, job_id=self.job_id)


class ApplicationGate:
    """Checks candidate eligibility, job openness and duplicates, in that order."""

    def __init__(self):
        self.logger = logger.bind(component="application_gate")

    def can_apply(
        self,
        candidate: CandidateDescriptor,
        job: JobPostDescriptor,
        has_existing_application: bool
    ) -> ApplicationDecision:
        """
        Decide whether ``candidate`` may submit an application to ``job``.

        Args:
            candidate: Applying candidate
            job: Target job post
            has_existing_application: Whether the store already holds an
                application for this candidate and job

        Returns:
            ApplicationDecision with the refusal code, if any
        """
        error = None
        if candidate.deleted or not candidate.is_verified:
            error = ErrorCode.NOT_ELIGIBLE
        elif not accepts_applications(job.status, job.deleted):
            error = ErrorCode.JOB_NOT_ACCEPTING_APPLICATIONS
        elif has_existing_application:
            error = ErrorCode.DUPLICATE_APPLICATION

        if error is not None:
            self.logger.info(
                "Application refused",
                candidate_id=candidate.id,
                job_id=job.id,
                reason=error.value
            )
            return ApplicationDecision(allowed=False, candidate_id=candidate.id, job_id=job.id, error=error)

        return ApplicationDecision(
            allowed=True,
            candidate_id=candidate.id,
            job_id=job.id,
            increment_application_count=True
        )


default_gate = ApplicationGate()


def can_apply(
    candidate: CandidateDescriptor,
    job: JobPostDescriptor,
    has_existing_application: bool
) -> ApplicationDecision:
    return default_gate.can_apply(candidate, job, has_existing_application)
