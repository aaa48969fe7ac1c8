import logging
import uuid
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.base import utcnow
from merchnexus.db.models.product import Product
from merchnexus.db.models.saved_product import SavedProduct
from merchnexus.db.models.user import User
from merchnexus.db.store import transaction
from merchnexus.errors import ProductNotFound, SavedProductNotFound, UserNotFound
from merchnexus.schemas import SavedProductCreate, SavedProductOut, SavedProductUpdate
from merchnexus.services.collection_service import CollectionService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("collection_id", "notes", "tags")


class SavedProductService:
    @staticmethod
    async def _exists(db: AsyncSession, column: sa.Column, value: uuid.UUID) -> bool:
        return await db.scalar(sa.select(sa.exists().where(column == value))) or False

    @classmethod
    async def save(cls, db: AsyncSession, user_id: uuid.UUID, data: SavedProductCreate) -> SavedProductOut:
        async with transaction(db):
            if not await cls._exists(db, User.id, user_id):
                raise UserNotFound("User not found.")

            if not await cls._exists(db, Product.id, data.product_id):
                raise ProductNotFound("Product not found.")

            if data.collection_id is not None:
                await CollectionService.get_owned(db, user_id, data.collection_id)

            saved = SavedProduct(
                user_id=user_id,
                product_id=data.product_id,
                collection_id=data.collection_id,
                notes=data.notes,
                tags=list(data.tags or []),
            )
            db.add(saved)
            await db.flush()
            await db.refresh(saved)
            result = SavedProductOut.model_validate(saved)

        logger.info("User %s saved product %s as %s", user_id, data.product_id, result.id)
        return result

    @staticmethod
    async def list(
        db: AsyncSession,
        user_id: uuid.UUID,
        collection_id: Optional[uuid.UUID] = None,
    ) -> List[SavedProductOut]:
        stmt = sa.select(SavedProduct).where(SavedProduct.user_id == user_id)
        if collection_id is not None:
            stmt = stmt.where(SavedProduct.collection_id == collection_id)

        async with transaction(db):
            rows = (await db.scalars(stmt.order_by(SavedProduct.created_at, SavedProduct.id))).all()

        return [SavedProductOut.model_validate(row) for row in rows]

    @classmethod
    async def update(
        cls,
        db: AsyncSession,
        user_id: uuid.UUID,
        saved_product_id: uuid.UUID,
        changes: SavedProductUpdate,
    ) -> SavedProductOut:
        values = changes.changes()

        async with transaction(db):
            saved = await db.scalar(
                sa.select(SavedProduct).where(
                    SavedProduct.id == saved_product_id,
                    SavedProduct.user_id == user_id
                )
            )
            if saved is None:
                logger.warning("Saved product %s not found for user %s", saved_product_id, user_id)
                raise SavedProductNotFound("Saved product not found.")

            # Target collection must belong to the same user, even on reassignment.
            if values.get("collection_id") is not None:
                await CollectionService.get_owned(db, user_id, values["collection_id"])

            for field in UPDATABLE_FIELDS:
                if field in values:
                    value = values[field]
                    if field == "tags":
                        value = list(value or [])
                    setattr(saved, field, value)
            saved.updated_at = utcnow()

            await db.flush()
            await db.refresh(saved)
            result = SavedProductOut.model_validate(saved)

        logger.info("User %s updated saved product %s (%s)", user_id, saved_product_id, ", ".join(values) or "touch")
        return result

    @staticmethod
    async def remove(db: AsyncSession, user_id: uuid.UUID, saved_product_id: uuid.UUID) -> None:
        async with transaction(db):
            removed = await db.execute(
                sa.delete(SavedProduct).where(
                    SavedProduct.id == saved_product_id,
                    SavedProduct.user_id == user_id
                )
            )

        logger.info("User %s removed saved product %s (rows=%d)", user_id, saved_product_id, removed.rowcount)
