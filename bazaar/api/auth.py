import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bazaar.api.deps import get_session
from bazaar.core.security import clear_admin_auth, get_admin_auth, set_admin_auth, verify_admin_password
from bazaar.core.session import SessionState
from bazaar.i18n import t
from bazaar.models.schemas import AdminLogin

logger = logging.getLogger("bazaar.auth")
logger.setLevel(logging.INFO)

router = APIRouter()


@router.post("/auth")
def login(payload: AdminLogin, session: SessionState = Depends(get_session)):
    if not verify_admin_password(payload.password):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=t("invalid_password", session.language()))
    return set_admin_auth(session)


@router.post("/logout")
def logout(session: SessionState = Depends(get_session)):
    clear_admin_auth(session)
    return {"isAdmin": False}


@router.get("/session")
def current(session: SessionState = Depends(get_session)):
    auth = get_admin_auth(session)
    return auth or {"isAdmin": False}
