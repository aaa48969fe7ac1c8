import logging
import uuid
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.models.product import Product
from merchnexus.db.store import transaction
from merchnexus.schemas import ProductOut, SearchCriteria, SearchResult

logger = logging.getLogger(__name__)


class CatalogService:
    @staticmethod
    def build_filters(criteria: SearchCriteria) -> List[sa.ColumnElement[bool]]:
        """
        Translate search criteria into a list of predicates to be ANDed.

        Each bound is applied on its own, so ``min_price > max_price`` simply
        matches nothing. A NULL rating never satisfies ``min_rating``.
        """
        filters: List[sa.ColumnElement[bool]] = []

        if criteria.query:
            filters.append(Product.title.icontains(criteria.query, autoescape=True))
        if criteria.category:
            filters.append(Product.category == criteria.category)
        if criteria.min_price is not None:
            filters.append(Product.price >= criteria.min_price)
        if criteria.max_price is not None:
            filters.append(Product.price <= criteria.max_price)
        if criteria.min_rating is not None:
            filters.append(Product.rating.is_not(None))
            filters.append(Product.rating >= criteria.min_rating)
        if criteria.competition_level is not None:
            filters.append(Product.competition_level == criteria.competition_level)

        return filters

    @classmethod
    async def search(cls, db: AsyncSession, criteria: SearchCriteria) -> SearchResult:
        filters = cls.build_filters(criteria)

        page_stmt = (
            sa.select(Product)
            .where(*filters)
            .order_by(Product.created_at.desc(), Product.seq)
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        count_stmt = sa.select(sa.func.count()).select_from(Product).where(*filters)

        async with transaction(db):
            products = (await db.scalars(page_stmt)).all()
            total = await db.scalar(count_stmt)

        logger.debug(
            "Catalog search page=%d limit=%d filters=%d -> %d/%d",
            criteria.page, criteria.limit, len(filters), len(products), total,
        )
        return SearchResult(
            products=[ProductOut.model_validate(product) for product in products],
            total=total or 0,
        )

    @staticmethod
    async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Optional[ProductOut]:
        async with transaction(db):
            product = await db.scalar(sa.select(Product).where(Product.id == product_id))

        if product is None:
            return None

        return ProductOut.model_validate(product)
