from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Tuple
from datetime import datetime
from looply.modules.users.schemas import OwnerSummary

ItemMode = Literal["gift", "barter", "sell", "buy"]
ItemCondition = Literal["new", "excellent", "good", "fair", "poor"]
ListingStatus = Literal["available", "claimed", "inactive"]
SortOption = Literal["newest", "oldest", "price-low", "price-high", "distance"]

DEFAULT_PRICE_RANGE = (0.0, 10000.0)


class ItemCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10)
    category: str = Field(..., min_length=1)
    condition: ItemCondition
    mode: ItemMode
    price: Optional[float] = Field(None, ge=0)
    desired_tags: Optional[List[str]] = None
    desired_text: Optional[str] = None
    tags: List[str] = Field(..., min_length=1)
    location: str = Field(..., min_length=3)
    images: List[str] = []

    @model_validator(mode="after")
    def mode_specific_fields(self):
        if self.mode == "sell" and self.price is None:
            raise ValueError("Price is required for items listed for sale")
        if self.mode != "sell":
            self.price = None
        if self.mode != "barter":
            self.desired_tags = None
            self.desired_text = None
        return self


class ItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10)
    category: Optional[str] = None
    condition: Optional[ItemCondition] = None
    mode: Optional[ItemMode] = None
    price: Optional[float] = Field(None, ge=0)
    desired_tags: Optional[List[str]] = None
    desired_text: Optional[str] = None
    tags: Optional[List[str]] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=3)
    images: Optional[List[str]] = None


class ItemStatusUpdate(BaseModel):
    status: ListingStatus


class ItemResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    images: List[str] = []
    tags: List[str] = []
    category: Optional[str] = None
    condition: Optional[str] = None
    mode: str = "gift"
    price: Optional[float] = None
    desired_tags: Optional[List[str]] = None
    desired_text: Optional[str] = None
    location: Optional[str] = None
    status: str
    views: int = 0
    user_id: str
    owner: Optional[OwnerSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @model_validator(mode="before")
    @classmethod
    def null_arrays(cls, data):
        if isinstance(data, dict):
            for key in ("images", "tags"):
                if data.get(key) is None:
                    data[key] = []
        return data


class SearchFilters(BaseModel):
    query: str = ""
    categories: List[str] = []
    modes: List[ItemMode] = []
    price_range: Tuple[float, float] = DEFAULT_PRICE_RANGE
    condition: List[ItemCondition] = []
    owner_types: List[Literal["user", "ngo"]] = []
    sort_by: SortOption = "newest"
    max_distance: Optional[float] = 50

    @property
    def active_filter_count(self) -> int:
        count = 0
        if self.categories:
            count += 1
        if self.modes:
            count += 1
        if self.condition:
            count += 1
        if self.owner_types:
            count += 1
        if self.price_range[0] > DEFAULT_PRICE_RANGE[0] or self.price_range[1] < DEFAULT_PRICE_RANGE[1]:
            count += 1
        return count


class FilterOptionsResponse(BaseModel):
    defaults: SearchFilters
    active_filter_count: int
    modes: List[str]
    conditions: List[str]
    categories: List[str]
    owner_types: List[str]
    sort_options: List[str]


class LikeToggleResponse(BaseModel):
    listing_id: str
    liked: bool


class ImageUploadResponse(BaseModel):
    listing_id: str
    url: str
    images: List[str]
