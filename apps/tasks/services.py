from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from django.db import DatabaseError
from django.utils import timezone

from apps.core.exceptions import StorageError
from .models import Task


@dataclass(frozen=True)
class TaskDTO:
    """Immutable snapshot of a Task row handed out by the store."""
    id: int
    title: str
    description: Optional[str]
    completed: bool
    created_at: datetime
    updated_at: datetime


@contextmanager
def _storage_errors(operation: str):
    try:
        yield
    except DatabaseError as e:
        raise StorageError(operation) from e


class TaskStore:
    """
    Persistence for the ``tasks`` table.

    One instance is created at startup and passed to the API router.
    Every method issues a single statement; database failures surface
    as StorageError and are never retried.
    """

    @staticmethod
    def _to_dto(task: Task) -> TaskDTO:
        return TaskDTO(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    async def insert(self, title: str, description: Optional[str], completed: bool) -> TaskDTO:
        now = timezone.now()
        with _storage_errors("insert"):
            task = await Task.objects.acreate(
                title=title,
                description=description,
                completed=completed,
                created_at=now,
                updated_at=now,
            )
        return self._to_dto(task)

    async def list_page(
        self,
        completed: Optional[bool] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[TaskDTO]:
        """
        Return one page of tasks, newest first.
        Bounds on limit/offset are the caller's responsibility.
        """
        queryset = Task.objects.all()
        if completed is not None:
            queryset = queryset.filter(completed=completed)
        queryset = queryset.order_by('-created_at', '-id')[offset:offset + limit]

        with _storage_errors("list"):
            return [self._to_dto(task) async for task in queryset]

    async def get_by_id(self, task_id: int) -> Optional[TaskDTO]:
        with _storage_errors("get"):
            try:
                task = await Task.objects.aget(id=task_id)
            except Task.DoesNotExist:
                return None
        return self._to_dto(task)

    async def update(
        self,
        task_id: int,
        title: str,
        description: Optional[str],
        completed: bool,
    ) -> bool:
        """Full replace of the mutable fields. False if no row matched."""
        with _storage_errors("update"):
            changed = await Task.objects.filter(id=task_id).aupdate(
                title=title,
                description=description,
                completed=completed,
                updated_at=timezone.now(),
            )
        return changed > 0

    async def delete_by_id(self, task_id: int) -> bool:
        with _storage_errors("delete"):
            deleted, _ = await Task.objects.filter(id=task_id).adelete()
        return deleted > 0
