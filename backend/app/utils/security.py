from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings


class InvalidToken(Exception):
    pass


def create_access_token(claims: dict, expires_in: int | None = None) -> str:
    payload = dict(claims)
    ttl = expires_in if expires_in is not None else settings.token_ttl_seconds
    payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    return jwt.encode(payload, settings.jwt_access_token, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Verify signature and expiry, return the ``email`` claim."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_access_token,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise InvalidToken("Token has no email claim")
    return email
