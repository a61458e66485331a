"""Realm request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from plexrbac.schemas.pagination import PaginatedResponse


class RealmCreate(BaseModel):
    """Body for POST /realms."""

    realm_name: str = Field(min_length=1, max_length=100)


class RealmResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    realm_name: str
    created_at: datetime


RealmListResponse = PaginatedResponse[RealmResponse]
