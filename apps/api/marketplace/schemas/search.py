from typing import Optional

from pydantic import BaseModel


class SearchRequest(BaseModel):
    pincode: str
    category_id: Optional[str] = None  # empty or None means all services
