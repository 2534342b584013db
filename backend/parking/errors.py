from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(eq=False)
class AppError(Exception):
    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """A required field is missing or malformed. Raised before any side effect."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(status_code=400, code="validation_error", message=message, details=details)


class UnsupportedMethodError(AppError):
    """The payment method has no payment-intent mapping."""

    def __init__(self, payment_method: Any) -> None:
        super().__init__(
            status_code=400,
            code="unsupported_payment_method",
            message="Invalid payment method",
            details={"paymentMethod": payment_method},
        )


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(status_code=404, code="not_found", message=message, details=details)


class PersistenceError(AppError):
    """The store is unreachable or rejected a read/write."""

    def __init__(self, message: str, error: str) -> None:
        super().__init__(status_code=500, code="persistence_error", message=message, details={"error": error})


class CodeGenerationError(AppError):
    def __init__(self, message: str = "Error generating QR code", error: str = "") -> None:
        super().__init__(status_code=500, code="code_generation_error", message=message, details={"error": error})


class NotificationError(Exception):
    """Email delivery failed. Contained by the notification dispatcher."""


def error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Error body: `message` and `code` always, `error` when an underlying cause is known."""
    body: Dict[str, Any] = {"message": message, "code": code}
    extra = dict(details or {})
    if "error" in extra:
        body["error"] = extra.pop("error")
    if extra:
        body["details"] = extra
    return body
