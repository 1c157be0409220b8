"""Tests for the generic RecordStore."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from ivrflow.core.exceptions import StorageError
from ivrflow.db.store import RecordStore
from ivrflow.models import Project


class TestRecordStore:
    """CRUD primitives against the in-memory database."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamps(self, db_session, test_user):
        store = RecordStore(db_session, Project)

        project = await store.create(user_id=test_user.id, name="Bank IVR")

        assert project.id is not None
        assert project.created_at is not None
        assert project.updated_at is not None

    @pytest.mark.asyncio
    async def test_find_many_filters_by_criteria(self, db_session, test_user, other_user):
        store = RecordStore(db_session, Project)
        await store.create(user_id=test_user.id, name="B line")
        await store.create(user_id=test_user.id, name="A line")
        await store.create(user_id=other_user.id, name="Vendor line")

        mine = await store.find_many(order_by=["name"], user_id=test_user.id)

        assert [p.name for p in mine] == ["A line", "B line"]

    @pytest.mark.asyncio
    async def test_find_many_without_criteria_returns_all(self, db_session, test_user):
        store = RecordStore(db_session, Project)
        await store.create(user_id=test_user.id, name="One")
        await store.create(user_id=test_user.id, name="Two")

        assert len(await store.find_many()) == 2

    @pytest.mark.asyncio
    async def test_find_unique(self, db_session, test_user):
        store = RecordStore(db_session, Project)
        project = await store.create(user_id=test_user.id, name="Bank IVR")

        assert (await store.find_unique(id=project.id)).name == "Bank IVR"
        assert await store.find_unique(id=uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_merges_fields_and_touches_updated_at(self, db_session, test_user):
        store = RecordStore(db_session, Project)
        project = await store.create(user_id=test_user.id, name="Old", description="keep")
        before = project.updated_at

        updated = await store.update({"id": project.id}, {"name": "New"})

        assert updated.name == "New"
        assert updated.description == "keep"
        assert updated.updated_at >= before

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        store = RecordStore(db_session, Project)

        assert await store.update({"id": uuid4()}, {"name": "x"}) is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_anything_matched(self, db_session, test_user):
        store = RecordStore(db_session, Project)
        project = await store.create(user_id=test_user.id, name="Doomed")

        assert await store.delete(id=project.id) is True
        assert await store.find_unique(id=project.id) is None
        assert await store.delete(id=project.id) is False

    @pytest.mark.asyncio
    async def test_create_many(self, db_session, test_user):
        store = RecordStore(db_session, Project)

        created = await store.create_many(
            [
                {"user_id": test_user.id, "name": "One"},
                {"user_id": test_user.id, "name": "Two"},
            ]
        )

        assert [p.name for p in created] == ["One", "Two"]
        assert all(p.id is not None for p in created)

    @pytest.mark.asyncio
    async def test_update_where_only_touches_matching_rows(self, db_session, test_user):
        store = RecordStore(db_session, Project)
        project = await store.create(user_id=test_user.id, name="Old")

        assert await store.update_where({"id": project.id, "name": "Other"}, {"name": "New"}) == 0
        assert await store.update_where({"id": project.id, "name": "Old"}, {"name": "New"}) == 1

        reloaded = await store.reload(id=project.id)
        assert reloaded is project
        assert project.name == "New"

    @pytest.mark.asyncio
    async def test_reload_missing_returns_none(self, db_session):
        store = RecordStore(db_session, Project)

        assert await store.reload(id=uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_in(self, db_session, test_user, other_user):
        store = RecordStore(db_session, Project)
        mine = await store.create(user_id=test_user.id, name="Mine")
        theirs = await store.create(user_id=other_user.id, name="Theirs")
        await store.create(user_id=test_user.id, name="Also mine")

        found = await store.find_in("id", [mine.id, theirs.id])

        assert {p.name for p in found} == {"Mine", "Theirs"}
        assert await store.find_in("id", []) == []


class TestRecordStoreErrors:
    @pytest.mark.asyncio
    async def test_unknown_criteria_rejected(self, db_session):
        store = RecordStore(db_session, Project)

        with pytest.raises(StorageError, match="Unknown Project field"):
            await store.find_many(colour="red")

    @pytest.mark.asyncio
    async def test_unknown_field_on_create_rejected(self, db_session, test_user):
        store = RecordStore(db_session, Project)

        with pytest.raises(StorageError) as exc_info:
            await store.create(user_id=test_user.id, name="x", owner="me")

        assert exc_info.value.details["fields"] == ["owner"]
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_database_errors_are_wrapped(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        store = RecordStore(session, Project)

        with pytest.raises(StorageError, match="find_many on Project"):
            await store.find_many()
