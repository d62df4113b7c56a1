"""Exceptions raised by the chainhook pipeline."""

from typing import Any, Dict, List, Optional


class ChainhookError(Exception):
    """Base exception for chainhook processing errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class PayloadValidationError(ChainhookError):
    """Raised when a chainhook delivery does not have the expected shape."""

    def __init__(
        self,
        message: str = "Malformed chainhook payload",
        errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.copy()
        if errors is not None:
            details["errors"] = errors
        super().__init__(message, details)
        self.errors = errors or []
