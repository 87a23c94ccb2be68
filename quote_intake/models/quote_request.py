from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class QuoteRequest(BaseModel):
    """A validated, whitespace-trimmed quote form submission."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    phone: str
    email: str
    company: Optional[str] = None
    pickup: str
    delivery: str
    freight_type: List[str] = Field(..., alias="freightType", min_length=1)


class SubmissionMetadata(BaseModel):
    submitted_at: str
    ip_address: Optional[str] = None
