import logging
import uuid
from typing import List

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.base import utcnow
from merchnexus.db.models.collection import Collection
from merchnexus.db.models.saved_product import SavedProduct
from merchnexus.db.store import transaction
from merchnexus.errors import CollectionNotFoundOrForbidden, ValidationError
from merchnexus.schemas import CollectionCreate, CollectionOut, CollectionUpdate

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "color")


def _require_name(name) -> str:
    if name is None or not name.strip():
        raise ValidationError("Collection name must not be empty.")
    return name


class CollectionService:
    @staticmethod
    async def get_owned(db: AsyncSession, owner_id: uuid.UUID, collection_id: uuid.UUID) -> Collection:
        """Load a collection only if ``owner_id`` owns it."""
        collection = await db.scalar(
            sa.select(Collection).where(
                Collection.id == collection_id,
                Collection.user_id == owner_id
            )
        )

        if collection is None:
            logger.warning("Collection %s not found for user %s", collection_id, owner_id)
            raise CollectionNotFoundOrForbidden("Collection not found.")

        return collection

    @staticmethod
    async def create(db: AsyncSession, owner_id: uuid.UUID, data: CollectionCreate) -> CollectionOut:
        name = _require_name(data.name)

        collection = Collection(
            user_id=owner_id,
            name=name,
            description=data.description,
            color=data.color,
        )

        async with transaction(db):
            db.add(collection)
            await db.flush()
            await db.refresh(collection)
            result = CollectionOut.model_validate(collection)

        logger.info("User %s created collection %s", owner_id, result.id)
        return result

    @staticmethod
    async def list(db: AsyncSession, owner_id: uuid.UUID) -> List[CollectionOut]:
        async with transaction(db):
            collections = (
                await db.scalars(
                    sa.select(Collection)
                    .where(Collection.user_id == owner_id)
                    .order_by(Collection.created_at, Collection.id)
                )
            ).all()

        return [CollectionOut.model_validate(collection) for collection in collections]

    @classmethod
    async def update(
        cls,
        db: AsyncSession,
        owner_id: uuid.UUID,
        collection_id: uuid.UUID,
        changes: CollectionUpdate,
    ) -> CollectionOut:
        values = changes.changes()
        if "name" in values:
            _require_name(values["name"])

        async with transaction(db):
            collection = await cls.get_owned(db, owner_id, collection_id)

            for field in UPDATABLE_FIELDS:
                if field in values:
                    setattr(collection, field, values[field])
            collection.updated_at = utcnow()

            await db.flush()
            await db.refresh(collection)
            result = CollectionOut.model_validate(collection)

        logger.info("User %s updated collection %s (%s)", owner_id, collection_id, ", ".join(values) or "touch")
        return result

    @classmethod
    async def delete(cls, db: AsyncSession, owner_id: uuid.UUID, collection_id: uuid.UUID) -> None:
        """
        Delete a collection and detach the saved products that referenced it.

        Both steps share one transaction: saved products are never left
        pointing at a deleted collection and the collection never outlives
        the detach.
        """
        async with transaction(db):
            collection = await cls.get_owned(db, owner_id, collection_id)

            detached = await db.execute(
                sa.update(SavedProduct)
                .where(SavedProduct.collection_id == collection.id)
                .values(collection_id=None)
            )
            await db.delete(collection)

        logger.info(
            "User %s deleted collection %s, detached %d saved products",
            owner_id, collection_id, detached.rowcount,
        )
