"""
Request and response models shared by the services and routers.

Partial updates (``*Update``) rely on pydantic's field-set tracking: a field
the caller never sent is absent from ``changes()``, while a field sent as
``null`` is present with value ``None``. Services only ever write what
``changes()`` returns.
"""
import datetime
import uuid
from typing import Any, Dict, List, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from merchnexus.utils.types import CompetitionLevel, SubscriptionTier

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

_URL = TypeAdapter(AnyUrl)


class PartialUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# Inputs

class SearchCriteria(BaseModel):
    query: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_rating: Optional[float] = None
    competition_level: Optional[CompetitionLevel] = None
    page: int = Field(default=1, gt=0)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, value: int) -> int:
        return min(value, MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class CollectionCreate(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None


class CollectionUpdate(PartialUpdate):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class SavedProductCreate(BaseModel):
    product_id: uuid.UUID
    collection_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None


class SavedProductUpdate(PartialUpdate):
    collection_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None


class UserProfileUpdate(PartialUpdate):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("avatar_url")
    @classmethod
    def avatar_url_is_url(cls, value: Optional[str]) -> Optional[str]:
        # Validated as a URL but stored exactly as sent.
        if value is not None:
            _URL.validate_python(value)
        return value


# Outputs

class _FromRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def _empty_if_none(value: Optional[List[str]]) -> List[str]:
    return [] if value is None else list(value)


class UserOut(_FromRow):
    id: uuid.UUID
    email: str
    full_name: Optional[str]
    avatar_url: Optional[str]
    subscription_tier: SubscriptionTier
    created_at: datetime.datetime
    updated_at: datetime.datetime


class ProductOut(_FromRow):
    id: uuid.UUID
    asin: str
    title: str
    brand: Optional[str]
    category: str
    subcategory: Optional[str]
    price: float
    sales_rank: Optional[int]
    rating: Optional[float]
    review_count: Optional[int]
    image_url: Optional[str]
    keywords: List[str]
    estimated_monthly_sales: Optional[int]
    competition_level: Optional[CompetitionLevel]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @field_validator("keywords", mode="before")
    @classmethod
    def keywords_never_null(cls, value):
        return _empty_if_none(value)


class SearchResult(BaseModel):
    products: List[ProductOut]
    total: int


class CollectionOut(_FromRow):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: Optional[str]
    color: Optional[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime


class SavedProductOut(_FromRow):
    id: uuid.UUID
    user_id: uuid.UUID
    product_id: uuid.UUID
    collection_id: Optional[uuid.UUID]
    notes: Optional[str]
    tags: List[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @field_validator("tags", mode="before")
    @classmethod
    def tags_never_null(cls, value):
        return _empty_if_none(value)
