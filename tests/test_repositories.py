"""Realm repository tests, including driver failures surfacing as PersistenceError."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from plexrbac.exceptions import ConflictError, NotFoundError, PersistenceError
from plexrbac.models import Realm
from plexrbac.repositories import realm as realm_repository
from tests.factories import BrokenSession, disk_error, make_realm


@pytest.mark.asyncio
async def test_save_assigns_id(db: AsyncSession) -> None:
    realm = await realm_repository.save(db, make_realm(realm_name="mydomain"))

    assert realm.id is not None
    assert (await realm_repository.find_by_id(db, realm.id)).realm_name == "mydomain"


@pytest.mark.asyncio
async def test_find_by_name(db: AsyncSession) -> None:
    await realm_repository.save(db, make_realm(realm_name="anotherdomain"))

    realm = await realm_repository.find_by_name(db, "anotherdomain")

    assert realm.realm_name == "anotherdomain"


@pytest.mark.asyncio
async def test_find_missing_raises_not_found(db: AsyncSession) -> None:
    with pytest.raises(NotFoundError) as info:
        await realm_repository.find_by_id(db, 404)

    assert info.value.entity == "Realm"
    assert info.value.identifier == 404


@pytest.mark.asyncio
async def test_save_duplicate_raises_conflict(db: AsyncSession) -> None:
    await realm_repository.save(db, make_realm(realm_name="banking"))

    with pytest.raises(ConflictError, match="banking already exists"):
        await realm_repository.save(db, make_realm(realm_name="banking"))


@pytest.mark.asyncio
async def test_save_existing_realm_raises_persistence_error(db: AsyncSession) -> None:
    realm = await realm_repository.save(db, make_realm(realm_name="banking"))

    with pytest.raises(PersistenceError, match="immutable and cannot be updated"):
        await realm_repository.save(db, realm)


@pytest.mark.asyncio
async def test_remove_raises_persistence_error(db: AsyncSession) -> None:
    with pytest.raises(PersistenceError) as info:
        await realm_repository.remove_by_id(db, 1)

    assert info.value.name == "PersistenceError"
    assert info.value.message == "Realm is immutable and cannot be deleted 1"


@pytest.mark.asyncio
async def test_driver_failure_becomes_persistence_error() -> None:
    session = BrokenSession(disk_error())

    with pytest.raises(PersistenceError) as info:
        await realm_repository.list_realms(session, 0, 10)  # type: ignore[arg-type]

    error = info.value
    assert error.message.startswith("Could not list realms due to")
    assert "disk I/O error" in error.message
    assert isinstance(error.__cause__, OperationalError)
    assert error.stack


@pytest.mark.asyncio
async def test_driver_failure_on_lookup_becomes_persistence_error() -> None:
    session = BrokenSession(disk_error())

    with pytest.raises(PersistenceError, match="find realm with id 3"):
        await realm_repository.find_by_id(session, 3)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_integrity_failure_becomes_conflict() -> None:
    session = BrokenSession(IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))

    with pytest.raises(ConflictError):
        await realm_repository.count_realms(session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_persistence_error_stack_points_at_repository(db: AsyncSession) -> None:
    realm = Realm(realm_name="x")
    realm.id = 1

    with pytest.raises(PersistenceError) as info:
        await realm_repository.save(db, realm)

    assert info.value.stack is not None
    assert "in save\n" in info.value.stack
