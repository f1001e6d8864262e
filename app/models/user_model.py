# /app/models/user_model.py

from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    The authenticated teacher, as supplied by the external session provider.

    Only `id` (ownership scoping) and `name` (stamped onto new classes) are
    used by the service layer.
    """
    id: str = Field(..., min_length=1)
    name: str = ""
    email: Optional[str] = None
    school: Optional[str] = None
