"""Realm endpoints."""

from fastapi import APIRouter, Query

from plexrbac.dependencies import DB
from plexrbac.schemas.realm import RealmCreate, RealmListResponse, RealmResponse
from plexrbac.services import realm as realm_service

router = APIRouter(prefix="/realms", tags=["realms"])


@router.post("", response_model=RealmResponse, status_code=201)
async def create_realm(db: DB, body: RealmCreate) -> RealmResponse:
    realm = await realm_service.create_realm(db, body.realm_name)
    return RealmResponse.model_validate(realm)


@router.get("", response_model=RealmListResponse, status_code=200)
async def list_realms(
    db: DB,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> RealmListResponse:
    """List realms ordered by id."""
    result = await realm_service.get_realms(db, skip, limit)
    return RealmListResponse.model_validate(result)


@router.get("/by-name/{realm_name}", response_model=RealmResponse)
async def get_realm_by_name(db: DB, realm_name: str) -> RealmResponse:
    realm = await realm_service.get_realm_by_name(db, realm_name)
    return RealmResponse.model_validate(realm)


@router.get("/{realm_id}", response_model=RealmResponse)
async def get_realm(db: DB, realm_id: int) -> RealmResponse:
    realm = await realm_service.get_realm(db, realm_id)
    return RealmResponse.model_validate(realm)


@router.put("/{realm_id}", response_model=RealmResponse)
async def update_realm(db: DB, realm_id: int) -> RealmResponse:
    """Always fails for existing realms: they are immutable, so no body is read."""
    realm = await realm_service.update_realm(db, realm_id)
    return RealmResponse.model_validate(realm)


@router.delete("/{realm_id}", status_code=204)
async def delete_realm(db: DB, realm_id: int) -> None:
    """Always fails for existing realms: they are immutable."""
    await realm_service.delete_realm(db, realm_id)
