import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from merchnexus.db.session import get_db
from merchnexus.schemas import CollectionCreate, CollectionOut, CollectionUpdate
from merchnexus.services.auth_service import AuthService
from merchnexus.services.collection_service import CollectionService

router = APIRouter(prefix="/collections", tags=["collections"])


@router.post("/", response_model=CollectionOut, status_code=status.HTTP_201_CREATED)
async def create_collection(
    collection_data: CollectionCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await CollectionService.create(db, user_id, collection_data)


@router.get("/", response_model=List[CollectionOut])
async def list_collections(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await CollectionService.list(db, user_id)


@router.patch("/{collection_id}", response_model=CollectionOut)
async def update_collection(
    collection_id: uuid.UUID,
    collection_update: CollectionUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    return await CollectionService.update(db, user_id, collection_id, collection_update)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collection(
    collection_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(AuthService.get_current_user_id),
):
    await CollectionService.delete(db, user_id, collection_id)
    return None
