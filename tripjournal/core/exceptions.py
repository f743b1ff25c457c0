"""
Error taxonomy shared by services and routes.

Each error is an HTTPException so it can be raised from a service and reach
the client with the right status code without extra mapping.
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Referenced entity does not exist."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenError(HTTPException):
    """Entity exists but the caller lacks the required relationship."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ValidationError(HTTPException):
    """Payload or referential check failed."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UpstreamUnavailableError(HTTPException):
    """An external collaborator could not be reached or answered badly."""

    def __init__(self, detail: str = "Upstream service unavailable"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
