"""
Domain exceptions raised by the service layer and mapped at the transport boundary.

Each exception carries a canonical ``error_code``; REST handlers turn it into an
HTTP status via ``http_status()`` and a JSON body via ``to_payload()``, GraphQL
resolvers copy both into the error ``extensions``.
"""

from typing import Iterable


class VeranstalterError(Exception):
    """
    Base exception for service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names or messages related to the error
    - error_code: canonical short code used by clients
    """

    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "validation_failed": 400,
        "invalid_mime_type": 400,
        "not_acceptable": 406,
        "version_invalid": 412,
        "version_outdated": 412,
        "file_too_large": 413,
        "precondition_required": 428,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        """
        JSON-serializable body:
            {"detail": "...", "code": "not_found", "fields": [...]}
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(VeranstalterError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class ValidationFailedError(VeranstalterError):
    """One entry in ``fields`` per violated constraint, formatted ``path.to.field: message``."""

    def __init__(self, messages: Iterable[str]):
        super().__init__("Fehlerhafte Veranstalterdaten", fields=messages, error_code="validation_failed")


class VersionInvalidError(VeranstalterError):
    def __init__(self, version: str):
        super().__init__(f"Die Versionsnummer {version} ist ungueltig.", error_code="version_invalid")
        self.version = version


class VersionOutdatedError(VeranstalterError):
    def __init__(self, version: int):
        super().__init__(f"Die Versionsnummer {version} ist nicht aktuell.", error_code="version_outdated")
        self.version = version


class PreconditionRequiredError(VeranstalterError):
    def __init__(self, message: str = 'Header "If-Match" fehlt'):
        super().__init__(message, error_code="precondition_required")


class InvalidMimeTypeError(VeranstalterError):
    def __init__(self, mimetype: str | None):
        super().__init__(f"Der MIME-Type {mimetype} ist nicht erlaubt.", error_code="invalid_mime_type")
        self.mimetype = mimetype


class FileTooLargeError(VeranstalterError):
    def __init__(self, size: int):
        super().__init__(f"Die Datei ist zu gross: {size} Bytes.", error_code="file_too_large")
        self.size = size


class NotAcceptableError(VeranstalterError):
    def __init__(self, message: str = "Nur JSON oder HTML werden unterstuetzt."):
        super().__init__(message, error_code="not_acceptable")


__all__ = [
    "VeranstalterError",
    "NotFoundError",
    "ValidationFailedError",
    "VersionInvalidError",
    "VersionOutdatedError",
    "PreconditionRequiredError",
    "InvalidMimeTypeError",
    "FileTooLargeError",
    "NotAcceptableError",
]
