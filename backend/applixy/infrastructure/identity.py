"""Identity — account directory and per-session identity provider.

Invariants:
    - AccountDirectory is the only code that touches the accounts table
    - Passwords are stored only as passlib hashes
    - Emails are case-folded and stripped before lookup or insert
    - SessionIdentity.current_user changes only after a successful sign-in

Design Decisions:
    - pbkdf2_sha256 over bcrypt: pure-python backend, no native build
    - SessionIdentity wraps one signed-in user; the HTTP layer builds one per request
"""

import logging

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from applixy.core.domain_types import UserId
from applixy.core.errors import (
    AccountExistsError, AuthRequiredError, InvalidCredentialsError,
    ValidationFailedError,
)
from applixy.infrastructure.database import DatabaseSessionManager
from applixy.models.account import Account

logger = logging.getLogger(__name__)

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def normalize_email(email: str) -> str:
    return email.strip().casefold()


class AccountDirectory:
    """Creates and verifies accounts."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def create_anonymous(self) -> UserId:
        account = Account(is_anonymous=True)
        async with self._manager.session() as db:
            db.add(account)
            await db.commit()
        logger.info("Anonymous account created", extra={"user_id": account.id})
        return UserId(account.id)

    async def create(self, email: str, password: str) -> UserId:
        email = normalize_email(email)
        missing = [name for name, value in (("email", email), ("password", password)) if not value]
        if missing:
            raise ValidationFailedError(missing)
        account = Account(email=email, password_hash=PWD_CTX.hash(password))
        try:
            async with self._manager.session() as db:
                db.add(account)
                await db.commit()
        except IntegrityError:
            raise AccountExistsError(email)
        logger.info("Account created", extra={"user_id": account.id})
        return UserId(account.id)

    async def verify(self, email: str, password: str) -> UserId:
        email = normalize_email(email)
        async with self._manager.session() as db:
            result = await db.execute(select(Account).where(Account.email == email))
            account = result.scalar_one_or_none()
        if account is None or not account.password_hash:
            raise InvalidCredentialsError()
        if not PWD_CTX.verify(password, account.password_hash):
            raise InvalidCredentialsError()
        return UserId(account.id)

    async def exists(self, user_id: str) -> bool:
        async with self._manager.session() as db:
            return await db.get(Account, user_id) is not None


class SessionIdentity:
    """IdentityProvider for one client session."""

    def __init__(
        self,
        directory: AccountDirectory,
        user_id: UserId | None = None,
        allow_anonymous: bool = True,
    ):
        self._directory = directory
        self._user_id = user_id
        self._allow_anonymous = allow_anonymous

    @property
    def current_user(self) -> UserId | None:
        return self._user_id

    async def sign_in_anonymously(self) -> UserId:
        if not self._allow_anonymous:
            raise AuthRequiredError("Anonymous sign-in is disabled")
        self._user_id = await self._directory.create_anonymous()
        return self._user_id

    async def sign_in(self, email: str, password: str) -> UserId:
        self._user_id = await self._directory.verify(email, password)
        return self._user_id

    async def create_account(self, email: str, password: str) -> UserId:
        self._user_id = await self._directory.create(email, password)
        return self._user_id
