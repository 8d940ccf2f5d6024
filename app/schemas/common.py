# app/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope used by every endpoint:

        {"success": true,  "message": "...", "data": {...}}
        {"success": false, "message": "...", "data": null}
    """

    success: bool = True
    message: str
    data: T | None = None
