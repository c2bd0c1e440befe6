from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TokenData(BaseModel):
    """Identity decoded from a verified session token."""

    user_id: str
    email: Optional[str] = None
    exp: datetime
