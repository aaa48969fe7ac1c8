import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.session import get_db
from merchnexus.schemas import DEFAULT_PAGE_SIZE, ProductOut, SearchCriteria, SearchResult
from merchnexus.services.auth_service import AuthService
from merchnexus.services.catalog_service import CatalogService
from merchnexus.utils.types import CompetitionLevel

router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(AuthService.get_current_user_id)],
)


@router.get("/", response_model=SearchResult)
async def search_products(
    query: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None),
    max_price: Optional[float] = Query(None),
    min_rating: Optional[float] = Query(None),
    competition_level: Optional[CompetitionLevel] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    db: AsyncSession = Depends(get_db),
):
    criteria = SearchCriteria(
        query=query,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        competition_level=competition_level,
        page=page,
        limit=limit,
    )
    return await CatalogService.search(db, criteria)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    product = await CatalogService.get_product(db, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
    return product
