from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None

class RequestCodeResponse(BaseModel):
    """
    Returned by POST /api/request. time is the code expiry in epoch milliseconds.
    """
    success: bool = True
    time: int

class VerificationResult(BaseModel):
    """
    Returned by POST /api/verify and POST /api/reset.
    phone is set on success, msg on failure.
    """
    success: bool
    phone: Optional[str] = None
    msg: Optional[str] = None
