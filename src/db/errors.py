"""
Database error types.

Wraps PostgREST and transport failures into a single SupabaseError so callers
can branch on a stable error code instead of library-specific exceptions.
"""

from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError

CONNECTION_ERROR_CODES = ("NETWORK_ERROR", "CONNECTION_ERROR", "TIMEOUT_ERROR")
PERMISSION_ERROR_CODES = ("INSUFFICIENT_PRIVILEGE", "ROW_LEVEL_SECURITY_VIOLATION")

# Postgres SQLSTATE codes that mean the same thing as our permission codes
_SQLSTATE_ALIASES = {
    "42501": "INSUFFICIENT_PRIVILEGE",
}


class SupabaseError(Exception):
    """Error raised by database reads and writes."""

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Any = None,
        hint: Optional[str] = None,
    ):
        self.message = message or "An unknown database error occurred"
        self.code = code or "UNKNOWN_ERROR"
        self.details = details
        self.hint = hint
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"SupabaseError(code={self.code!r}, message={self.message!r})"

    def is_auth_error(self) -> bool:
        return self.code.startswith("AUTH_")

    def is_connection_error(self) -> bool:
        return self.code in CONNECTION_ERROR_CODES

    def is_permission_error(self) -> bool:
        return self.code in PERMISSION_ERROR_CODES

    def to_dict(self) -> dict:
        """Serializable form for API responses."""
        data = {"error": self.message, "code": self.code}
        if self.hint:
            data["hint"] = self.hint
        return data

    @classmethod
    def from_exception(cls, exc: BaseException) -> "SupabaseError":
        """
        Convert any exception raised while talking to Supabase.

        Args:
            exc: The original exception

        Returns:
            A SupabaseError (the same object if it already is one)
        """
        if isinstance(exc, SupabaseError):
            return exc

        if isinstance(exc, APIError):
            code = exc.code or "UNKNOWN_ERROR"
            return cls(
                message=exc.message,
                code=_SQLSTATE_ALIASES.get(code, code),
                details=exc.details,
                hint=exc.hint,
            )

        if isinstance(exc, httpx.TimeoutException):
            return cls(message=str(exc) or "Request timed out", code="TIMEOUT_ERROR")

        if isinstance(exc, httpx.HTTPError):
            return cls(message=str(exc) or "Network error", code="NETWORK_ERROR")

        # Anything else happened on the way to the database
        return cls(message=str(exc) or type(exc).__name__, code="NETWORK_ERROR")


class NoDataError(SupabaseError):
    """A query completed but returned no data payload."""

    def __init__(self, message: str = "No data returned from query"):
        super().__init__(message=message, code="NO_DATA")
