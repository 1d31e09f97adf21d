from fastapi import APIRouter, Depends

from bazaar.api.deps import get_session
from bazaar.core.session import SessionState
from bazaar.models.schemas import LanguageIn

router = APIRouter()


@router.get("/language")
def get_language(session: SessionState = Depends(get_session)):
    return {"language": session.language()}


@router.put("/language")
def set_language(payload: LanguageIn, session: SessionState = Depends(get_session)):
    session.save_language(payload.language)
    return {"language": payload.language}
