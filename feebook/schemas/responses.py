"""Envelopes wrapped around every API payload"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from feebook.core.exceptions import FeebookError

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    # Deletes answer with a message and no data
    success: bool = True
    data: Optional[DataT] = None
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Body for rejected requests; ``error.code`` is the FeebookError code"""
    success: bool = False
    error: ErrorDetail

    @classmethod
    def from_error(cls, exc: FeebookError) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=exc.code, message=exc.message))
