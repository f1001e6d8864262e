# /app/core/deps.py

"""
Request-scoped dependencies shared by the routers.

Identity comes from the external session provider as request headers. This
service does not authenticate anyone; it only needs to know which teacher is
asking so it can scope classes and students to them.
"""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from ..models.user_model import User
from ..services.roster_cache import RosterCache


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_name: str = Header(default=""),
    x_user_email: Optional[str] = Header(default=None),
    x_user_school: Optional[str] = Header(default=None),
) -> User:
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No signed-in user. Send the X-User-Id header.",
        )
    return User(id=x_user_id, name=x_user_name, email=x_user_email, school=x_user_school)


def get_roster(request: Request) -> RosterCache:
    """The application-wide roster snapshot built during start-up."""
    return request.app.state.roster
