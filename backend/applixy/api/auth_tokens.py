"""Auth Tokens — signed bearer tokens carrying the stable user id.

Invariants:
    - Token subject ("sub") is the account id; nothing else is trusted from the client
    - Expired or tampered tokens raise AuthRequiredError (401)
"""

from datetime import datetime, timedelta, timezone

import jwt

from applixy.config import Settings
from applixy.core.domain_types import UserId
from applixy.core.errors import AuthRequiredError


def issue_token(user_id: str, settings: Settings, anonymous: bool = False) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "anon": anonymous,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_ttl_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> UserId:
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthRequiredError("Session expired, please sign in again")
    except jwt.InvalidTokenError:
        raise AuthRequiredError("Invalid session token")
    user_id = payload.get("sub")
    if not user_id:
        raise AuthRequiredError("Invalid session token")
    return UserId(user_id)
