"""Centralized error transformation for API routes.

Maps Cutout errors (domain and infrastructure) to a status code and a JSON
body that always carries ``error`` and, when known, ``details``.
"""

from typing import Any

from cutout.domain.shared.error import (
    ClientInputError,
    CutoutError,
    DomainError,
    InfrastructureError,
    OwnershipError,
    UnsupportedActionError,
    UpstreamServiceError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    ClientInputError: 400,
    OwnershipError: 403,
    UnsupportedActionError: 405,
}


def error_body(error: CutoutError) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": error.message,
        "code": error.code,
    }
    if error.details is not None:
        body["details"] = error.details
    if isinstance(error, ClientInputError) and error.field is not None:
        body["field"] = error.field
    return body


def map_error(error: CutoutError) -> tuple[int, dict[str, Any]]:
    """Map a Cutout error to an HTTP status code and response body."""
    body = error_body(error)

    if isinstance(error, DomainError):
        return DOMAIN_ERROR_STATUS_MAP.get(type(error), 400), body

    if isinstance(error, UpstreamServiceError):
        return 502, body

    if isinstance(error, InfrastructureError):
        return 500, body

    # UnexpectedServerError and unknown subclasses
    return 500, body
