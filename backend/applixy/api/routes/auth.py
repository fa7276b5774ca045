"""Auth Routes — anonymous sign-in, account creation, email sign-in.

Invariants:
    - Every successful call returns a bearer token whose subject is the account id
    - Anonymous sign-in can be disabled by settings (AuthRequiredError → 401)
    - Bad credentials → 401, duplicate email → 409 (via global error handler)
"""

import logging

from fastapi import APIRouter, Depends, status

from applixy.api.auth_tokens import issue_token
from applixy.api.dependencies import get_account_directory
from applixy.config import Settings, get_settings
from applixy.core.errors import AuthRequiredError
from applixy.infrastructure.identity import AccountDirectory
from applixy.schemas.auth import Credentials, TokenResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/anonymous", response_model=TokenResponse)
async def sign_in_anonymously(
    accounts: AccountDirectory = Depends(get_account_directory),
    settings: Settings = Depends(get_settings),
):
    if not settings.allow_anonymous_sign_in:
        raise AuthRequiredError("Anonymous sign-in is disabled")
    user_id = await accounts.create_anonymous()
    return TokenResponse(
        access_token=issue_token(user_id, settings, anonymous=True),
        user_id=user_id, anonymous=True,
    )


@router.post(
    "/accounts", response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    body: Credentials,
    accounts: AccountDirectory = Depends(get_account_directory),
    settings: Settings = Depends(get_settings),
):
    """Register an email account and sign it in."""
    user_id = await accounts.create(body.email, body.password)
    return TokenResponse(
        access_token=issue_token(user_id, settings), user_id=user_id,
    )


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    body: Credentials,
    accounts: AccountDirectory = Depends(get_account_directory),
    settings: Settings = Depends(get_settings),
):
    user_id = await accounts.verify(body.email, body.password)
    return TokenResponse(
        access_token=issue_token(user_id, settings), user_id=user_id,
    )
