"""Error taxonomy shared by repositories and managers."""

from typing import Optional


class TaskFlowError(Exception):
    """Base class for all TaskFlow errors."""


class ValidationError(TaskFlowError):
    """Client-side validation failure, raised before any remote call.

    Attributes:
        field: Name of the offending field, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RemoteError(TaskFlowError):
    """Any record store failure: network, auth, server or malformed reply.

    Attributes:
        status_code: HTTP status of the failed response, if there was one
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
