"""
Tests for the product catalog query engine: predicate composition, totals
that ignore pagination, ordering, and numeric/array normalization.
"""

import uuid

import pytest
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from merchnexus.errors import StoreUnavailable
from merchnexus.schemas import MAX_PAGE_SIZE, SearchCriteria
from merchnexus.services.catalog_service import CatalogService
from tests.factories import add_product


def titles(result):
    return [product.title for product in result.products]


class TestSearchFilters:
    async def test_no_criteria_returns_everything_newest_first(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria())

        assert result.total == 3
        assert titles(result) == ["Gaming Mouse", "Wireless Headphones", "iPhone Case Premium"]

    async def test_category_and_min_price(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(category="Electronics", min_price=100))

        assert titles(result) == ["Wireless Headphones"]
        assert result.total == 1

    async def test_min_rating_skips_unrated_products(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(min_rating=4.5))

        assert titles(result) == ["Wireless Headphones"]
        assert result.total == 1

    async def test_min_rating_is_inclusive(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(min_rating=4.2))

        assert set(titles(result)) == {"Wireless Headphones", "Gaming Mouse"}

    async def test_price_bounds_are_inclusive(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(min_price=29.99, max_price=79.99))

        assert set(titles(result)) == {"iPhone Case Premium", "Gaming Mouse"}
        assert result.total == 2

    async def test_inverted_price_bounds_match_nothing(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(min_price=100, max_price=50))

        assert result.products == []
        assert result.total == 0

    async def test_query_is_case_insensitive_substring(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(query="HEADPHONE"))

        assert titles(result) == ["Wireless Headphones"]

    async def test_query_wildcards_are_literal(self, db, catalog):
        await add_product(db, "100% Cotton Tee", "Apparel", "12.00", offset=10)

        result = await CatalogService.search(db, SearchCriteria(query="%"))

        assert titles(result) == ["100% Cotton Tee"]

    async def test_competition_level(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(competition_level="low"))

        assert titles(result) == ["Gaming Mouse"]

    async def test_all_filters_are_anded(self, db, catalog):
        result = await CatalogService.search(
            db, SearchCriteria(category="Electronics", competition_level="medium", max_price=50, query="case")
        )

        assert titles(result) == ["iPhone Case Premium"]
        assert result.total == 1

    async def test_empty_catalog(self, db):
        result = await CatalogService.search(db, SearchCriteria(query="anything"))

        assert result.products == []
        assert result.total == 0


class TestSearchPagination:
    async def test_second_page_holds_the_remainder(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(page=2, limit=2))

        assert titles(result) == ["iPhone Case Premium"]
        assert result.total == 3

    async def test_page_past_the_end_is_empty_but_total_stays(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(page=5, limit=2))

        assert result.products == []
        assert result.total == 3

    async def test_pages_partition_the_ordered_result(self, db):
        for i in range(7):
            await add_product(db, f"Item {i}", "Toys", "5.00", offset=i)

        full = await CatalogService.search(db, SearchCriteria(limit=100))
        paged = []
        for page in range(1, 4):
            result = await CatalogService.search(db, SearchCriteria(page=page, limit=3))
            assert len(result.products) <= 3
            assert result.total == 7
            paged.extend(titles(result))

        assert paged == titles(full)

    async def test_same_created_at_keeps_insertion_order(self, db):
        await add_product(db, "Newest", "Toys", "5.00", offset=60)
        for i in range(8):
            await add_product(db, f"T{i}", "Toys", "5.00", offset=0)

        first = await CatalogService.search(db, SearchCriteria(limit=5))
        second = await CatalogService.search(db, SearchCriteria(page=2, limit=5))

        assert titles(first) + titles(second) == ["Newest"] + [f"T{i}" for i in range(8)]

    async def test_total_counts_filtered_rows_only(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(category="Electronics", limit=1))

        assert len(result.products) == 1
        assert result.total == 2

    def test_limit_is_capped(self):
        assert SearchCriteria(limit=500).limit == MAX_PAGE_SIZE

    @pytest.mark.parametrize("field", ["page", "limit"])
    def test_non_positive_page_or_limit_rejected(self, field):
        with pytest.raises(ValueError):
            SearchCriteria(**{field: 0})


class TestProductNormalization:
    async def test_numbers_and_keywords_are_plain_python(self, db, catalog):
        result = await CatalogService.search(db, SearchCriteria(query="Wireless"))
        product = result.products[0]

        assert isinstance(product.price, float)
        assert product.price == pytest.approx(199.99)
        assert isinstance(product.rating, float)
        assert product.rating == pytest.approx(4.8)
        assert product.keywords == ["wireless", "headphones"]

    async def test_missing_rating_stays_none(self, db, catalog):
        product = await CatalogService.get_product(db, catalog["A"].id)

        assert product.rating is None
        assert product.keywords == ["phone", "case", "premium"]

    async def test_ingested_row_without_timestamps_gets_store_defaults(self, db):
        product_id = uuid.uuid4()
        await db.execute(
            sa.text(
                "INSERT INTO products (id, asin, title, category, price) "
                "VALUES (:id, :asin, :title, :category, :price)"
            ),
            {"id": product_id.hex, "asin": "B0INGEST01", "title": "Bulk Mug", "category": "Kitchen", "price": 12.5},
        )
        await db.commit()

        product = await CatalogService.get_product(db, product_id)

        assert product.title == "Bulk Mug"
        assert product.keywords == []
        assert product.created_at is not None
        assert product.updated_at is not None

    async def test_get_product_unknown_id(self, db, catalog):
        assert await CatalogService.get_product(db, uuid.uuid4()) is None


async def test_unreachable_store_raises_store_unavailable():
    broken = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/merchnexus/catalog.db")
    try:
        async with async_sessionmaker(bind=broken, class_=AsyncSession)() as session:
            with pytest.raises(StoreUnavailable):
                await CatalogService.search(session, SearchCriteria())
    finally:
        await broken.dispose()
