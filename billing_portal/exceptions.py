"""
Billing Portal Exceptions

Custom exception classes for login, portal API and identity store errors.
"""

from typing import Optional


class PortalError(Exception):
    """Base exception for billing portal errors"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class NotFoundError(PortalError):
    """Exception for lookups that matched no record"""
    pass


class InvalidCredentialsError(PortalError):
    """Exception for a password that does not match the stored one"""
    pass


class ValidationError(PortalError):
    """Exception for missing user input, raised before any network call"""
    pass


class TransportError(PortalError):
    """Exception for failed reads (network error or non-2xx status)"""
    pass


class SubmitError(PortalError):
    """Exception for rejected writes; ``response`` holds the backend's body text"""
    pass


class UnexpectedError(PortalError):
    """Exception for anything else"""
    pass
