"""Error taxonomy shared by the lifecycle engine and the application gate."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Expected, recoverable refusals reported back to the caller."""
    INVALID_TRANSITION = "invalid_transition"
    NOT_ELIGIBLE = "not_eligible"
    JOB_NOT_ACCEPTING_APPLICATIONS = "job_not_accepting_applications"
    DUPLICATE_APPLICATION = "duplicate_application"


class JobBoardError(Exception):
    """Base class for refusals raised by callers that prefer exceptions."""

    code: ErrorCode
    http_status: int = 400
    default_message: str = "Request refused"

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error": self.code.value,
            "message": self.message,
            "context": self.context,
        }


class InvalidTransitionError(JobBoardError):
    code = ErrorCode.INVALID_TRANSITION
    http_status = 400
    default_message = "Invalid status transition"


class NotEligibleError(JobBoardError):
    code = ErrorCode.NOT_ELIGIBLE
    http_status = 403
    default_message = "Candidate is not eligible"


class JobNotAcceptingApplicationsError(JobBoardError):
    code = ErrorCode.JOB_NOT_ACCEPTING_APPLICATIONS
    http_status = 400
    default_message = "Job is not accepting applications"


class DuplicateApplicationError(JobBoardError):
    code = ErrorCode.DUPLICATE_APPLICATION
    http_status = 409
    default_message = "Already applied"


class UnknownRoleError(ValueError):
    """A role outside the known set reached the engine. This is a caller bug."""


_ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        InvalidTransitionError,
        NotEligibleError,
        JobNotAcceptingApplicationsError,
        DuplicateApplicationError,
    )
}


def error_for(code: ErrorCode, message: Optional[str] = None, **context: Any) -> JobBoardError:
    """Build the exception matching an error code."""
    return _ERRORS_BY_CODE[code](message, **context)
