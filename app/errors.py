"""Error taxonomy for request handling.

Every failure surfaces as an ``HTTPException`` subclass so that routers and
dependencies can raise it directly; the application renders all of them with
the ``{"ok": false, "error": ...}`` envelope.
"""

from fastapi import HTTPException, status

INVALID_JSON_MESSAGE = "Invalid JSON body"


class Unauthenticated(HTTPException):
    """No valid session accompanied the request."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NoTenant(HTTPException):
    """The caller has no resolvable organization."""

    def __init__(self, detail: str = "No organization") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Forbidden(HTTPException):
    """Target resource is missing or belongs to another organization."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidInput(HTTPException):
    """A required field is missing or malformed."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class StoreError(HTTPException):
    """The underlying store rejected an operation."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
