from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Shape of every response body."""

    success: bool = True
    message: str
    data: T | None = None


def envelope(message: str, data: Any = None) -> dict:
    return {"success": True, "message": message, "data": data}
