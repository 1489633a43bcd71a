"""
Errors for fetch_key.
"""
from typing import Any, Optional


class SerializationError(ValueError):
    """Error raised when a fetch key part cannot be canonicalized."""

    code = "SERIALIZATION_ERROR"

    def __init__(self, message: str, part: Optional[Any] = None) -> None:
        super().__init__(message)
        self.name = "SerializationError"
        self.part = part
