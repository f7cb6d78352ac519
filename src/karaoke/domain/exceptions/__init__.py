"""Domain exceptions.

Each exception maps to exactly one HTTP status in
``karaoke.api.exception_handlers``. Raise the specific subclass, never
``DomainException`` itself.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, we store message as an attribute so handlers can return it without
    # parsing str(exception). Always raise a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found.

    HTTP Status: 404
    """

    # entity_type/entity_id are kept separately so the handler can log them structured.
    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationException(DomainException):
    """Raised when input fails a domain validation rule.

    HTTP Status: 422

    Example:
        raise ValidationException("Performer note cannot be empty.")
    """

    pass


class BusinessRuleViolation(DomainException):
    """A business rule was violated.

    HTTP Status: 400
    """

    pass


class InvalidQueryError(BusinessRuleViolation):
    """A catalog query is missing the filters needed to run it.

    The catalog is too big to browse unfiltered, so listing requires either a
    search string of a minimum length or the favorites filter.

    HTTP Status: 400

    Example:
        raise InvalidQueryError("Must be logged in to view favorites")
    """

    pass


class ConfigurationError(DomainException):
    """The application is misconfigured and cannot start.

    Raised during startup only, never mapped to an HTTP response.
    """

    pass


class AuthenticationError(DomainException):
    """Caller identity is missing or the token is unknown.

    HTTP Status: 401
    """

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class AuthorizationError(DomainException):
    """Caller is authenticated but lacks the required role.

    HTTP Status: 403

    Example:
        raise AuthorizationError("User is not authorized to log Karaoke song performances.")
    """

    pass


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "BusinessRuleViolation",
    "ConfigurationError",
    "DomainException",
    "EntityNotFoundException",
    "InvalidQueryError",
    "ValidationException",
]
