from fastapi import Depends, HTTPException, Request, status

from bazaar.core.security import get_admin_auth
from bazaar.core.session import SessionState, session_for

ADMIN_GATE = "/admin/auth"


def get_session(request: Request) -> SessionState:
    return session_for(request.session)


def get_language(session: SessionState = Depends(get_session)) -> str:
    return session.language()


def require_admin(session: SessionState = Depends(get_session)) -> dict:
    auth = get_admin_auth(session)
    if not auth:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin session required",
            headers={"Location": ADMIN_GATE},
        )
    return auth


def store_failure(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
