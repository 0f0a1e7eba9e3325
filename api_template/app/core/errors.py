"""
Application error types.

Services raise these instead of ``HTTPException`` so that business
logic stays independent of the web framework.  ``create_app`` maps
``ServiceUnavailableError`` and ``UnsupportedApiVersionError`` to HTTP
responses globally; ``ConflictError`` is translated by the endpoints
themselves.  "Not found" is not an exception: services return
``None``/``False`` and the endpoints answer 404.
"""

from typing import List, Optional


class ApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(ApiError):
    """A write was rejected because ``name`` is already taken."""

    status_code = 409

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"An entity with the name '{name}' already exists.")
        self.name = name


class ServiceUnavailableError(ApiError):
    """The persistence layer could not be reached."""

    status_code = 503


class UnsupportedApiVersionError(ApiError):
    status_code = 400

    def __init__(self, requested: str, supported: List[str]) -> None:
        super().__init__(f"Unsupported API version '{requested}'")
        self.requested = requested
        self.supported = list(supported)
