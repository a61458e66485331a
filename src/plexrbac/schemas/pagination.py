"""Generic pagination types shared by list endpoints.

PaginatedResponse[T]: Pydantic model for HTTP responses (serializable).
Paginated[T]        : plain dataclass for service-layer returns.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated HTTP response.

    ``from_attributes`` lets ``model_validate`` read a ``Paginated`` dataclass
    (and the ORM rows inside it) directly::

        RealmListResponse = PaginatedResponse[RealmResponse]
        return RealmListResponse.model_validate(await get_realms(db, skip, limit))
    """

    model_config = {"from_attributes": True}

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass
class Paginated(Generic[T]):
    """A page of results inside the service layer, free of Pydantic."""

    items: list[T]
    total: int
    skip: int
    limit: int
