from typing import Optional, Any, Dict
from pydantic import BaseModel


class ResponseModel(BaseModel):
    """Standard API response model"""
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[Dict[str, Any]] = None


def error_body(message: str, code: str, details: Any = None) -> Dict[str, Any]:
    """Failure envelope shared by every exception handler"""
    return ResponseModel(
        success=False,
        message=message,
        error={"code": code, "details": details}
    ).model_dump()
