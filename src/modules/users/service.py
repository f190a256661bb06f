"""Directory lookups for nurses."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import run_query
from src.modules.users.models import User
from src.shared.enums import UserRole


class DirectoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_nurses(self) -> list[User]:
        stmt = (
            select(User)
            .where(User.role == UserRole.NURSE, User.is_active.is_(True))
            .order_by(User.name, User.user_id)
        )
        result = await run_query(self.db, stmt)
        return list(result.scalars().all())

    async def get_nurse(self, nurse_id: str) -> User | None:
        stmt = select(User).where(
            User.user_id == nurse_id,
            User.role == UserRole.NURSE,
            User.is_active.is_(True),
        )
        result = await run_query(self.db, stmt)
        return result.scalar_one_or_none()
