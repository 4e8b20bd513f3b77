"""
Application-level exceptions.

Every error the service can surface derives from MerchantError and carries the
HTTP status the API answers with. The message is shown to the user as-is, so
it mirrors what the upstream said rather than wrapping it.
"""

from __future__ import annotations


class MerchantError(Exception):
    """Base class for errors rendered as {"success": false, "error": ...}."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(MerchantError):
    """Missing or malformed request parameters."""

    status_code = 400


class AccountNotFoundError(MerchantError):
    """Horizon answered 404: the account has not been funded/activated."""

    status_code = 404
    default_message = "Account not found. It has not been activated on the network yet."

    def __init__(self, public_key: str, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.public_key = public_key


class UpstreamError(MerchantError):
    """Horizon (or another upstream) failed with a non-2xx status or a transport error."""

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code)
        self.upstream_status = upstream_status

    @classmethod
    def from_status(cls, upstream_status: int, **kwargs) -> "UpstreamError":
        return cls(f"HTTP error! status: {upstream_status}", upstream_status=upstream_status, **kwargs)


class SigningServiceError(UpstreamError):
    """The signing microservice failed."""


class ServiceUnavailableError(MerchantError):
    """A required upstream is not configured (e.g. no signing service URL)."""

    status_code = 503
