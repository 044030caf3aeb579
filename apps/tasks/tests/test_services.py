"""
Tests for TaskStore persistence operations.
"""
from datetime import timedelta
from unittest.mock import patch

from django.db import DatabaseError
from django.db.models.query import QuerySet
from django.test import TestCase
from django.utils import timezone

from apps.core.exceptions import StorageError
from apps.tasks.models import Task
from apps.tasks.services import TaskDTO, TaskStore


class TaskStoreTest(TestCase):
    """Test the store against the test database."""

    def setUp(self):
        self.store = TaskStore()

    async def _create_at(self, title, minutes_ago, completed=False):
        stamp = timezone.now() - timedelta(minutes=minutes_ago)
        return await Task.objects.acreate(
            title=title, completed=completed, created_at=stamp, updated_at=stamp
        )

    async def test_insert_assigns_id_and_equal_timestamps(self):
        task = await self.store.insert("Buy milk", "Semi-skimmed", False)

        self.assertIsInstance(task, TaskDTO)
        self.assertGreater(task.id, 0)
        self.assertEqual(task.title, "Buy milk")
        self.assertEqual(task.description, "Semi-skimmed")
        self.assertFalse(task.completed)
        self.assertEqual(task.created_at, task.updated_at)

        row = await Task.objects.aget(id=task.id)
        self.assertEqual(row.created_at, row.updated_at)

    async def test_insert_never_reuses_ids(self):
        first = await self.store.insert("First", None, False)
        await self.store.delete_by_id(first.id)
        second = await self.store.insert("Second", None, False)
        self.assertGreater(second.id, first.id)

    async def test_get_by_id_missing_returns_none(self):
        self.assertIsNone(await self.store.get_by_id(9999))

    async def test_list_page_orders_newest_first(self):
        await self._create_at("Oldest", 30)
        await self._create_at("Middle", 20)
        await self._create_at("Newest", 10)

        tasks = await self.store.list_page(limit=10, offset=0)
        self.assertEqual([t.title for t in tasks], ["Newest", "Middle", "Oldest"])

    async def test_list_page_filters_by_completed(self):
        await self._create_at("Open", 5)
        await self._create_at("Done", 4, completed=True)

        done = await self.store.list_page(completed=True)
        self.assertEqual([t.title for t in done], ["Done"])

        still_open = await self.store.list_page(completed=False)
        self.assertEqual([t.title for t in still_open], ["Open"])

    async def test_list_page_applies_limit_and_offset(self):
        for minutes in range(5, 0, -1):
            await self._create_at(f"Task {minutes}", minutes)

        page = await self.store.list_page(limit=2, offset=1)
        self.assertEqual([t.title for t in page], ["Task 2", "Task 3"])

    async def test_update_replaces_fields_and_bumps_updated_at(self):
        row = await self._create_at("Draft", 60)

        changed = await self.store.update(row.id, "Final", None, True)
        self.assertTrue(changed)

        task = await self.store.get_by_id(row.id)
        self.assertEqual(task.title, "Final")
        self.assertIsNone(task.description)
        self.assertTrue(task.completed)
        self.assertEqual(task.created_at, row.created_at)
        self.assertGreater(task.updated_at, task.created_at)

    async def test_update_missing_returns_false(self):
        self.assertFalse(await self.store.update(9999, "Nope", None, False))
        self.assertEqual(await Task.objects.acount(), 0)

    async def test_delete_is_physical(self):
        task = await self.store.insert("Temporary", None, False)

        self.assertTrue(await self.store.delete_by_id(task.id))
        self.assertFalse(await Task.objects.filter(id=task.id).aexists())
        # Second delete finds nothing
        self.assertFalse(await self.store.delete_by_id(task.id))

    async def test_database_errors_surface_as_storage_error(self):
        with patch.object(Task.objects, "acreate", side_effect=DatabaseError("disk I/O error")):
            with self.assertRaises(StorageError) as ctx:
                await self.store.insert("Broken", None, False)

        self.assertEqual(ctx.exception.operation, "insert")
        self.assertIsInstance(ctx.exception.__cause__, DatabaseError)

    async def test_update_errors_surface_as_storage_error(self):
        with patch.object(QuerySet, "aupdate", side_effect=DatabaseError("database is locked")):
            with self.assertRaises(StorageError):
                await self.store.update(1, "Title", None, False)
