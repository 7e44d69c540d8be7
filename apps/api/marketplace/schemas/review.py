from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ReviewCreate(BaseModel):
    rating: int  # 1-5, enforced by the review service
    comment: Optional[str] = None


class ReviewResponse(BaseModel):
    id: str
    provider_id: str
    consumer_id: str
    reviewer_name: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
