## Current user dependencies
from typing import Optional

from fastapi import Depends, Request

from pathfinder.agents.schemas import User
from pathfinder.auth.service import AuthService
from pathfinder.auth.sessions import SESSION_COOKIE_NAME
from pathfinder.deps import get_auth
from pathfinder.errors import NotAuthenticated


def get_optional_user(request: Request, auth: AuthService = Depends(get_auth)) -> Optional[User]:
    return auth.user_for_token(request.cookies.get(SESSION_COOKIE_NAME))


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise NotAuthenticated()
    return user
