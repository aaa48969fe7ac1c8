import logging
import uuid
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.base import utcnow
from merchnexus.db.models.user import User
from merchnexus.db.store import transaction
from merchnexus.errors import UserNotFound
from merchnexus.schemas import UserOut, UserProfileUpdate

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    async def get(db: AsyncSession, user_id: uuid.UUID) -> Optional[UserOut]:
        async with transaction(db):
            user = await db.scalar(sa.select(User).where(User.id == user_id))

        return UserOut.model_validate(user) if user else None

    @staticmethod
    async def update(db: AsyncSession, user_id: uuid.UUID, changes: UserProfileUpdate) -> UserOut:
        values = changes.changes()

        async with transaction(db):
            user = await db.scalar(sa.select(User).where(User.id == user_id))
            if user is None:
                raise UserNotFound("User not found.")

            if "full_name" in values:
                user.full_name = values["full_name"]
            if "avatar_url" in values:
                user.avatar_url = values["avatar_url"]
            user.updated_at = utcnow()

            await db.flush()
            await db.refresh(user)
            result = UserOut.model_validate(user)

        logger.info("User %s updated profile (%s)", user_id, ", ".join(values) or "touch")
        return result
