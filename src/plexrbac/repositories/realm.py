"""Realm data-access layer.

Pure query functions with no business logic and no HTTP concerns.
Each function takes a session and returns models or scalars. Driver failures
surface as PersistenceError; the original exception is chained as __cause__.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plexrbac.exceptions import ConflictError, NotFoundError, PersistenceError
from plexrbac.models import Realm


@asynccontextmanager
async def _translate_errors(action: str) -> AsyncIterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise ConflictError(f"Could not {action} due to {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not {action} due to {exc}") from exc


async def list_realms(db: AsyncSession, skip: int, limit: int) -> list[Realm]:
    """Return a page of realms ordered by id."""
    stmt = select(Realm).order_by(Realm.id).offset(skip).limit(limit)
    async with _translate_errors("list realms"):
        result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_realms(db: AsyncSession) -> int:
    """Return total number of realms."""
    async with _translate_errors("count realms"):
        result = await db.execute(select(func.count(Realm.id)))
    return result.scalar_one()


async def find_by_id(db: AsyncSession, realm_id: int) -> Realm:
    async with _translate_errors(f"find realm with id {realm_id}"):
        realm = await db.get(Realm, realm_id)
    if realm is None:
        raise NotFoundError("Realm", realm_id)
    return realm


async def find_by_name(db: AsyncSession, realm_name: str) -> Realm:
    stmt = select(Realm).where(Realm.realm_name == realm_name)
    async with _translate_errors(f"find realm with name {realm_name}"):
        realm = (await db.execute(stmt)).scalar_one_or_none()
    if realm is None:
        raise NotFoundError("Realm", realm_name)
    return realm


async def save(db: AsyncSession, realm: Realm) -> Realm:
    """Insert a new realm and flush so its id is assigned.

    Realms are immutable: passing one that already has an id is an error.
    """
    if realm.id is not None:
        raise PersistenceError(f"Realm is immutable and cannot be updated {realm}")

    async with _translate_errors(f"add {realm}"):
        existing = await db.execute(select(Realm.id).where(Realm.realm_name == realm.realm_name))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(f"Realm {realm.realm_name} already exists")
        db.add(realm)
        await db.flush()
        # load server-side defaults (created_at) without a lazy load later
        await db.refresh(realm)
    return realm


async def remove_by_id(db: AsyncSession, realm_id: int) -> None:
    raise PersistenceError(f"Realm is immutable and cannot be deleted {realm_id}")
