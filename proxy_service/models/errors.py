"""
Error models for the proxy gateway
"""

from typing import Optional

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    """JSON body returned for locally synthesized failures"""
    error: str
    details: Optional[str] = None


class GatewayError(Exception):
    """Base error rendered as an ErrorEnvelope"""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.error, details=self.details)


class InvalidIdentifierError(GatewayError):
    """Path identifier is missing, a placeholder, or not a positive integer"""
    status_code = 400


class InvalidPathError(GatewayError):
    status_code = 400


class InvalidRequestBodyError(GatewayError):
    """Write body that must be JSON but does not parse"""
    status_code = 400


class MissingAuthorizationError(GatewayError):
    """No bearer token on a route that requires one"""
    status_code = 401


class UpstreamRequestError(GatewayError):
    """The backend could not be reached or did not answer in time"""
    status_code = 500
