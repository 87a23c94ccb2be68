from typing import List, Optional
from pydantic import BaseModel

SUCCESS_MESSAGE = "Quote request received successfully."


class QuoteSubmittedResponse(BaseModel):
    success: bool = True
    message: str = SUCCESS_MESSAGE


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    errors: Optional[List[str]] = None
    # Only populated when DEBUG_EMAIL_ERRORS is on
    details: Optional[str] = None
