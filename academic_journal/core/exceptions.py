"""Custom exception classes and error handling."""

from http import HTTPStatus
from typing import Any


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render the standard error envelope."""
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            },
        }


# ==========================================
# Journal workflow errors
# ==========================================

class ReferenceNotFoundError(AppException):
    """A referenced lecture, student or course does not exist."""

    def __init__(self, reference_name: str, message: str | None = None):
        self.reference_name = reference_name
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code="REFERENCE_NOT_FOUND",
            message=message or f"{reference_name.capitalize()} with specified id does not exist.",
            details={"reference": reference_name},
        )


class IncorrectIdError(AppException):
    """Identifier is out of the allowed range."""

    def __init__(self, name: str, value: int):
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code="INCORRECT_ID",
            message=f"'{name}' must be positive",
            details={"field": name, "value": value},
        )


class UnexpectedDataError(AppException):
    """Store fault or broken referential integrity."""

    def __init__(
        self,
        message: str = "Unexpected data error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="UNEXPECTED_DATA",
            message=message,
            details=details,
        )


# ==========================================
# Store errors
# ==========================================

class DataError(AppException):
    """Storage layer failure wrapping a lower-level error."""

    def __init__(self, message: str = "Unable to access data storage"):
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="DATA_ERROR",
            message=message,
        )


class EntityNotFoundError(AppException):
    """Update target does not exist in the store."""

    def __init__(self, entity: str = "Entity", identifier: int | None = None):
        details = {}
        if identifier is not None:
            details["identifier"] = identifier
        super().__init__(
            status_code=HTTPStatus.NOT_FOUND,
            code="ENTITY_NOT_FOUND",
            message=f"{entity} not found",
            details=details,
        )


class IncorrectIdentifierError(AppException):
    """Store received a negative identifier."""

    def __init__(self, identifier: int):
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code="INCORRECT_IDENTIFIER",
            message=f"Identifier {identifier} is incorrect",
            details={"identifier": identifier},
        )


# ==========================================
# Report formatter errors
# ==========================================

class ArgumentNullError(AppException):
    """Required argument was None."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code="ARGUMENT_NULL",
            message=f"'{argument}' must not be None",
            details={"argument": argument},
        )


class RegistrationNotSupportedError(AppException):
    """Formatter registry is sealed."""

    def __init__(self, message: str = "The storage does not support registering new formatters."):
        super().__init__(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="REGISTRATION_NOT_SUPPORTED",
            message=message,
        )


class DuplicatedFormatterError(AppException):
    """Formatter name is already registered."""

    def __init__(self, name: str):
        super().__init__(
            status_code=HTTPStatus.CONFLICT,
            code="DUPLICATED_FORMATTER",
            message="Formatter with such name is already registered.",
            details={"name": name},
        )


class FormatterNotFoundError(AppException):
    """No formatter registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code="FORMATTER_NOT_FOUND",
            message=f"Requested report formatter for '{name}' cannot be found.",
            details={"name": name},
        )
