"""Error taxonomy and classifier.

Every failure that leaves the service layer is turned into exactly one
``AppError`` variant before the HTTP shell renders it:

- ``ValidationError``: malformed / out-of-range input, with field issues.
- ``NotFoundError``: entity absent for a given id or key.
- ``ConflictError``: duplicate unique-key creation.
- ``ForeignKeyError``: referenced entity missing (or still referenced).
- ``InsufficientStockError``: stock rule violation, carries ``available``.
- ``InternalError``: anything unclassified.

Domain modules keep raising their own exceptions (``ProductNotFound``,
``InsufficientStock`` ...).  They register the mapping to a variant in
their ``AppConfig.ready`` via ``error_classifier.register``; storage
failures (``IntegrityError`` and friends) are mapped here by stable
database error codes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from http import HTTPStatus
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions as drf_exceptions

NON_FIELD = "non_field_errors"


@dataclass(frozen=True)
class FieldIssue:
    """A single field-level validation problem."""

    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class AppError(Exception):
    """Base classified failure.  Subclasses fix ``status_code`` and ``label``."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    label: str = "Application Error"
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, *, label: Optional[str] = None) -> None:
        self.message = message or self.default_message
        if label is not None:
            self.label = label
        super().__init__(self.message)

    @classmethod
    def from_exception(cls, exc: BaseException, **options: Any) -> AppError:
        """Build the variant from a domain exception registered for it."""
        return cls(str(exc) or None, **options)

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.label, "message": self.message}


class ValidationError(AppError):
    status_code = HTTPStatus.BAD_REQUEST
    label = "Validation Error"
    default_message = "Request validation failed"

    def __init__(
        self,
        details: List[FieldIssue],
        message: Optional[str] = None,
        *,
        label: Optional[str] = None,
    ) -> None:
        self.details = list(details)
        super().__init__(message, label=label)

    @classmethod
    def from_exception(cls, exc: BaseException, **options: Any) -> ValidationError:
        field = getattr(exc, "field", NON_FIELD)
        return cls([FieldIssue(field=field, message=str(exc))], **options)

    @classmethod
    def from_drf(cls, detail: Any) -> ValidationError:
        return cls(list(_flatten_drf_detail(detail)))

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> ValidationError:
        issues = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or NON_FIELD
            issues.append(FieldIssue(field=field, message=error.get("msg", "")))
        return cls(issues)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.label,
            "details": [issue.as_dict() for issue in self.details],
        }


class NotFoundError(AppError):
    status_code = HTTPStatus.NOT_FOUND
    label = "Not Found"
    default_message = "Record not found"


class ConflictError(AppError):
    status_code = HTTPStatus.CONFLICT
    label = "Conflict"
    default_message = "A record with this data already exists"


class ForeignKeyError(AppError):
    status_code = HTTPStatus.BAD_REQUEST
    label = "Foreign Key Constraint"
    default_message = "Referenced record does not exist"


class InsufficientStockError(AppError):
    status_code = HTTPStatus.BAD_REQUEST
    label = "Insufficient Stock"
    default_message = "Insufficient stock"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        available: int = 0,
        label: Optional[str] = None,
    ) -> None:
        self.available = available
        super().__init__(message, label=label)

    @classmethod
    def from_exception(cls, exc: BaseException, **options: Any) -> InsufficientStockError:
        return cls(str(exc) or None, available=getattr(exc, "available", 0), **options)

    def to_payload(self) -> Dict[str, Any]:
        return {**super().to_payload(), "available": self.available}


class InternalError(AppError):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    label = "Internal Server Error"


class HTTPError(AppError):
    """Transport-level failure raised by DRF itself (bad JSON, bad method...)."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        try:
            label = HTTPStatus(status_code).phrase
        except ValueError:
            label = "Application Error"
        super().__init__(message, label=label)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

# SQLSTATE (PostgreSQL) and errno (MySQL) codes for integrity violations.
_INTEGRITY_CODES: Dict[str, Type[AppError]] = {
    "23505": ConflictError,
    "1062": ConflictError,
    "23503": ForeignKeyError,
    "1451": ForeignKeyError,
    "1452": ForeignKeyError,
}

# SQLite exposes no code, only the message.
_INTEGRITY_MARKERS: Tuple[Tuple[str, Type[AppError]], ...] = (
    ("unique constraint", ConflictError),
    ("duplicate", ConflictError),
    ("foreign key", ForeignKeyError),
)


class ErrorClassifier:
    """Maps arbitrary exceptions onto the ``AppError`` taxonomy."""

    def __init__(self) -> None:
        self._registry: Dict[Type[BaseException], Tuple[Type[AppError], Dict[str, Any]]] = {}

    def register(
        self,
        exc_class: Type[BaseException],
        error_class: Type[AppError],
        **options: Any,
    ) -> None:
        self._registry[exc_class] = (error_class, options)

    def classify(self, exc: BaseException, *, expose_details: bool = False) -> AppError:
        if isinstance(exc, AppError):
            return exc

        for klass in type(exc).__mro__:
            entry = self._registry.get(klass)
            if entry is not None:
                error_class, options = entry
                return error_class.from_exception(exc, **options)

        if isinstance(exc, PydanticValidationError):
            return ValidationError.from_pydantic(exc)
        if isinstance(exc, drf_exceptions.ValidationError):
            return ValidationError.from_drf(exc.detail)
        if isinstance(exc, (Http404, ObjectDoesNotExist, drf_exceptions.NotFound)):
            return NotFoundError()
        if isinstance(exc, ProtectedError):
            return ForeignKeyError("Record is still referenced by other records")
        if isinstance(exc, IntegrityError):
            return self._classify_integrity(exc, expose_details)
        if isinstance(exc, drf_exceptions.APIException):
            return HTTPError(exc.status_code, str(exc.detail))

        return InternalError(str(exc) if expose_details else None)

    @staticmethod
    def _classify_integrity(exc: IntegrityError, expose_details: bool) -> AppError:
        code = _integrity_code(exc)
        if code in _INTEGRITY_CODES:
            return _INTEGRITY_CODES[code]()

        text = str(exc).lower()
        for marker, error_class in _INTEGRITY_MARKERS:
            if marker in text:
                return error_class()
        return InternalError(str(exc) if expose_details else None)


def _integrity_code(exc: IntegrityError) -> Optional[str]:
    cause = exc.__cause__
    if cause is None:
        return None
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if code:
        return str(code)
    if cause.args and isinstance(cause.args[0], int):
        return str(cause.args[0])
    return None


def _flatten_drf_detail(detail: Any, prefix: str = "") -> Iterator[FieldIssue]:
    if isinstance(detail, dict):
        for key, value in detail.items():
            field = NON_FIELD if key == NON_FIELD else str(key)
            yield from _flatten_drf_detail(value, f"{prefix}.{field}" if prefix else field)
    elif isinstance(detail, list):
        for item in detail:
            yield from _flatten_drf_detail(item, prefix)
    else:
        yield FieldIssue(field=prefix or NON_FIELD, message=str(detail))


# Global classifier instance (singleton)

error_classifier = ErrorClassifier()
