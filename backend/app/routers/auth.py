import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Response
from pydantic import ValidationError

from app.config import settings
from app.schemas.auth import SuccessResponse, TokenClaims
from app.utils.security import create_access_token

logger = logging.getLogger("app")

router = APIRouter(tags=["auth"])


def _cookie_options() -> dict:
    return {
        "key": settings.cookie_name,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "none",
    }


@router.post("/jwt", response_model=SuccessResponse)
async def issue_token(response: Response, payload: Any = Body(...)):
    # Security: the caller is trusted to have proven its identity upstream
    # (the frontend's sign-in provider); the body is signed as given.
    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="Token payload must include an email") from exc

    token = create_access_token(claims.model_dump())
    response.set_cookie(value=token, max_age=settings.token_ttl_seconds, **_cookie_options())
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response, payload: Any = Body(None)):
    logger.info("logging out %s", payload)
    response.delete_cookie(**_cookie_options())
    return SuccessResponse()
