"""Realm business logic.

Orchestrates repository calls. Realms are write-once, so updates and deletes
are refused with PersistenceError after the target is confirmed to exist.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from plexrbac.logging import get_logger
from plexrbac.models import Realm
from plexrbac.repositories import realm as realm_repository
from plexrbac.schemas.pagination import Paginated

logger = get_logger(__name__)


async def get_realms(db: AsyncSession, skip: int, limit: int) -> Paginated[Realm]:
    items = await realm_repository.list_realms(db, skip, limit)
    total = await realm_repository.count_realms(db)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def get_realm(db: AsyncSession, realm_id: int) -> Realm:
    return await realm_repository.find_by_id(db, realm_id)


async def get_realm_by_name(db: AsyncSession, realm_name: str) -> Realm:
    return await realm_repository.find_by_name(db, realm_name)


async def create_realm(db: AsyncSession, realm_name: str) -> Realm:
    realm = await realm_repository.save(db, Realm(realm_name=realm_name))
    logger.info("realm_created", realm_id=realm.id, realm_name=realm.realm_name)
    return realm


async def update_realm(db: AsyncSession, realm_id: int) -> Realm:
    realm = await realm_repository.find_by_id(db, realm_id)
    # save() refuses rows that already have an id
    return await realm_repository.save(db, realm)


async def delete_realm(db: AsyncSession, realm_id: int) -> None:
    await realm_repository.find_by_id(db, realm_id)
    await realm_repository.remove_by_id(db, realm_id)
