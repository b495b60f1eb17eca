"""
Common Pydantic schemas
Shared response envelopes
"""

from pydantic import BaseModel, Field
from typing import Optional, Any, Dict


class ErrorResponse(BaseModel):
    """Error body returned for failed requests"""
    detail: str = Field(..., description="Human-readable reason")
    error_code: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None

