"""Repository for User model operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from report_tracker.models.user import User
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


class UserRepository:
    """Repository for User lookups used by authentication."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by UUID."""
        log.debug("query user by id", user_id=str(user_id))
        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        log.debug("query result", found=user is not None)
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        log.debug("query user by email", email=email)
        result = await self.session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        log.debug("query result", found=user is not None)
        return user

    async def create(self, email: str, password_hash: str, role: str = "USER") -> User:
        """
        Create a new user with an already-hashed password.

        Caller is responsible for committing the transaction.
        """
        user = User(email=email, password_hash=password_hash, role=role)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        log.info("user created", email=email, role=role)
        return user
