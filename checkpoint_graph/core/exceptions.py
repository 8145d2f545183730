"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")

    def to_problem(self) -> dict[str, Any]:
        """Render the exception as an RFC 7807 problem document."""
        problem: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if self.instance:
            problem["instance"] = self.instance
        problem.update(self.extra)
        return problem


class NotFoundException(AppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class ValidationException(AppException):
    """Exception raised for validation errors."""

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class EntityNotFoundError(NotFoundException):
    """A requested id is absent from the backing store.

    Instances are used as the per-key not-found marker of the entity
    loaders: the batch function places one in the slot of every missing id,
    which keeps it apart from both real records and transport errors.

    The ``extensions`` attribute is picked up by graphql-core when the error
    surfaces from a resolver, so clients receive ``code: NOT_FOUND``.

    Example:
        try:
            record = await loader.load("0x1")
        except EntityNotFoundError as exc:
            print(exc.entity, exc.id)
    """

    def __init__(self, entity: str, id: Any) -> None:
        self.entity = entity
        self.id = id
        super().__init__(
            detail=f"Row not found: {id}",
            type="entity-not-found",
            extra={"entity": entity, "id": str(id)},
        )

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": "NOT_FOUND", "entity": self.entity, "id": str(self.id)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityNotFoundError):
            return NotImplemented
        return (self.entity, str(self.id)) == (other.entity, str(other.id))

    def __hash__(self) -> int:
        return hash((self.entity, str(self.id)))


class InvalidEntityNameError(ValidationException):
    """Entity name cannot be used to derive a table name."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(
            detail=f"Invalid entity name: {entity!r}",
            type="invalid-entity-name",
            extra={"entity": entity},
        )

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": "VALIDATION_ERROR", "entity": self.entity}


__all__ = [
    "AppException",
    "EntityNotFoundError",
    "InvalidEntityNameError",
    "NotFoundException",
    "ValidationException",
]
