import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.session import get_db
from merchnexus.schemas import SavedProductCreate, SavedProductOut, SavedProductUpdate
from merchnexus.services.auth_service import AuthService
from merchnexus.services.saved_product_service import SavedProductService

router = APIRouter(prefix="/saved-products", tags=["saved-products"])


@router.post("/", response_model=SavedProductOut, status_code=status.HTTP_201_CREATED)
async def save_product(
    saved_data: SavedProductCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await SavedProductService.save(db, user_id, saved_data)


@router.get("/", response_model=List[SavedProductOut])
async def list_saved_products(
    collection_id: Optional[uuid.UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await SavedProductService.list(db, user_id, collection_id)


@router.patch("/{saved_product_id}", response_model=SavedProductOut)
async def update_saved_product(
    saved_product_id: uuid.UUID,
    saved_update: SavedProductUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await SavedProductService.update(db, user_id, saved_product_id, saved_update)


@router.delete("/{saved_product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_saved_product(
    saved_product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    await SavedProductService.remove(db, user_id, saved_product_id)
    return None
