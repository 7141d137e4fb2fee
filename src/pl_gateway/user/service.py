"""User domain service: register, login, refresh, lookup.

All DB operations use the injected AsyncSession. Transactions are managed
by the caller (router layer) via `async with db.begin()`.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
)
from src.pl_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.pl_gateway.auth.password import hash_password, verify_password
from src.pl_gateway.user.db_models import UserModel


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        email = _normalize_email(email)
        # Early check for a friendly error; the UNIQUE constraint is the final guard
        if await self.find_by_email(email, db) is not None:
            raise EmailExistsError()

        user = UserModel(
            name=name,
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            raise EmailExistsError() from None
        await db.refresh(user)
        return user

    async def login(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Authenticate and return (user, access_token, refresh_token).

        Unknown email and wrong password raise the same error.
        """
        user = await self.find_by_email(email, db)

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return user, *self.issue_tokens(user)

    async def refresh(self, refresh_token: str) -> str:
        payload = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(payload["sub"]))

    def issue_tokens(self, user: UserModel) -> tuple[str, str]:
        return create_access_token(str(user.id)), create_refresh_token(str(user.id))

    async def find_by_email(self, email: str, db: AsyncSession) -> UserModel | None:
        result = await db.execute(
            select(UserModel).where(UserModel.email == _normalize_email(email))
        )
        return result.scalar_one_or_none()
