"""
Exceptions raised by the LDlink client.
"""

from typing import Optional


class LDlinkError(Exception):
    """Base class for LDlink client errors."""


class InvalidArgument(LDlinkError, ValueError):
    """An argument failed pre-flight validation. Raised before any network I/O."""


class RemoteError(LDlinkError):
    """
    The LDlink service rejected the request.

    Raised for an HTTP error status on the main call, a transport failure,
    or an error/warning message returned in the last row of the response.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
