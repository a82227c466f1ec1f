"""Error hierarchy for Cutout.

Error layers:
- CutoutError: Base class for all Cutout errors
- DomainError: Bad input, ownership violations, unroutable requests (4xx responses)
- InfrastructureError: Failures of the remover, the image codec or the blob store (5xx responses)

These errors are mapped to HTTP responses by the exception handler in app.py.
"""


class CutoutError(Exception):
    """Base class for all Cutout errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: str | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details
        super().__init__(message)


# =============================================================================
# Domain Errors (request violates a rule - 4xx)
# =============================================================================


class DomainError(CutoutError):
    """Base class for errors caused by the request itself."""


class ClientInputError(DomainError):
    """Missing or malformed request data."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="invalid_input")
        self.field = field


class OwnershipError(DomainError):
    """Target key lies outside the caller's namespace."""

    def __init__(self, message: str = "Not your file") -> None:
        super().__init__(message, code="not_owner")


class UnsupportedActionError(DomainError):
    """Method/action combination the endpoint does not serve."""

    def __init__(self, method: str, action: str) -> None:
        super().__init__("Unsupported method/action", code="unsupported_action")
        self.method = method
        self.action = action


# =============================================================================
# Infrastructure Errors (collaborator failed - 5xx)
# =============================================================================


class InfrastructureError(CutoutError):
    """Base class for infrastructure/system errors."""


class UpstreamServiceError(InfrastructureError):
    """The background-removal service failed or was unreachable."""


class StorageError(InfrastructureError):
    """The blob store rejected or failed an operation."""


class TransformError(InfrastructureError):
    """The image could not be decoded, mirrored or encoded."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class UnexpectedServerError(CutoutError):
    """Any other fault, caught at the request boundary."""
