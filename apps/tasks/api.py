"""
Tasks API endpoints.

Provides CRUD operations for task records with completion filtering and
offset pagination. The router is built around an injected TaskStore so the
same handlers can run against any store instance.
"""
import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest
from ninja import Query, Router
from ninja.errors import HttpError

from .dtos import MessageOut, TaskAck, TaskEnvelope, TaskIn, TaskOut, TaskPage
from .services import TaskStore

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Task not found"

# SQLite LIMIT/OFFSET are signed 64-bit integers
MAX_SQL_INTEGER = 2**63 - 1


def build_router(store: TaskStore) -> Router:
    router = Router(tags=["Tasks"])
    default_page_size = settings.TASKS_DEFAULT_PAGE_SIZE
    max_page_size = settings.TASKS_MAX_PAGE_SIZE
    max_offset = MAX_SQL_INTEGER - max_page_size

    @router.post("", response={201: TaskOut})
    async def create_task(request: HttpRequest, payload: TaskIn):
        """
        Create a new task.

        `completed` defaults to false when omitted.
        """
        task = await store.insert(payload.title, payload.description, payload.completed)
        logger.info(f"Created task {task.id}")
        return 201, task

    @router.get("", response=TaskPage)
    async def list_tasks(
        request: HttpRequest,
        completed: Optional[str] = None,
        limit: int = Query(default_page_size, ge=1, le=max_page_size),
        offset: int = Query(0, ge=0, le=max_offset),
    ):
        """
        List tasks, newest first.

        Query Parameters:
        - completed: "true" for completed tasks only; any other value for open tasks only
        - limit: page size (1 to TASKS_MAX_PAGE_SIZE)
        - offset: number of tasks to skip
        """
        completed_filter = None if completed is None else completed == "true"
        tasks = await store.list_page(completed_filter, limit=limit, offset=offset)
        return {"tasks": tasks, "count": len(tasks)}

    @router.get("/{task_id}", response={200: TaskEnvelope, 404: MessageOut})
    async def get_task(request: HttpRequest, task_id: int):
        task = await store.get_by_id(task_id)
        if not task:
            raise HttpError(404, NOT_FOUND_MESSAGE)
        return {"task": task}

    @router.put("/{task_id}", response={200: TaskAck, 404: MessageOut}, by_alias=True)
    async def update_task(request: HttpRequest, task_id: int, payload: TaskIn):
        """
        Replace title, description and completed of an existing task.
        """
        changed = await store.update(task_id, payload.title, payload.description, payload.completed)
        if not changed:
            logger.warning(f"Update of missing task {task_id}")
            raise HttpError(404, NOT_FOUND_MESSAGE)
        logger.info(f"Updated task {task_id}")
        return {"message": "Task updated", "taskId": task_id}

    @router.delete("/{task_id}", response={200: TaskAck, 404: MessageOut}, by_alias=True)
    async def delete_task(request: HttpRequest, task_id: int):
        """
        Permanently delete a task. Repeating the call yields 404.
        """
        deleted = await store.delete_by_id(task_id)
        if not deleted:
            logger.warning(f"Delete of missing task {task_id}")
            raise HttpError(404, NOT_FOUND_MESSAGE)
        logger.info(f"Deleted task {task_id}")
        return {"message": "Task deleted", "taskId": task_id}

    return router
