import logging

from fastapi import HTTPException, Request

from app.config import settings
from app.utils.security import InvalidToken, decode_access_token

logger = logging.getLogger("app")


async def require_token(request: Request) -> str:
    token = request.cookies.get(settings.cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized access")
    try:
        email = decode_access_token(token)
    except InvalidToken as exc:
        logger.warning("Rejected token: %s", exc)
        raise HTTPException(status_code=403, detail="Forbidden access") from exc
    request.state.user = email
    return email


def require_matching_email(email: str | None, user: str):
    # The caller names itself in the query string; it must be the token identity.
    if email != user:
        raise HTTPException(status_code=403, detail="Forbidden access")
