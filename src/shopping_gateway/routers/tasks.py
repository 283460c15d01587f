"""
Task endpoints.

POST /api/tasks runs the create-task pipeline; GET /api/tasks scans the
task table.
"""

from __future__ import annotations

from fastapi import APIRouter

from shopping_gateway.config import get_settings
from shopping_gateway.core.exceptions import BackingServiceError
from shopping_gateway.core.state import get_app_state
from shopping_gateway.schemas import TaskListResponse, TaskRequest, TaskSavedResponse
from shopping_gateway.services.task_pipeline import TaskPipeline

router = APIRouter(prefix="/api/tasks")


@router.post("", response_model=TaskSavedResponse)
async def create_task(request: TaskRequest) -> TaskSavedResponse:
    """
    Save a task and announce it.

    Image upload, document write, queue send and topic publish run in that
    order. A failure in any of them is returned as a 500 and nothing that
    already succeeded is undone.
    """
    settings = get_settings()
    state = get_app_state()

    pipeline = TaskPipeline(
        object_store=state.object_store,
        document_store=state.document_store,
        queue=state.queue,
        topic=state.topic,
        notification_subject=settings.messaging.notification_subject,
    )
    record = await pipeline.run(request)

    return TaskSavedResponse(success=True, message="Task saved successfully", task=record)


@router.get("", response_model=TaskListResponse)
async def list_tasks() -> TaskListResponse:
    """Return every task found by a single table scan."""
    state = get_app_state()
    try:
        tasks = await state.document_store.scan()
    except BackingServiceError as e:
        raise BackingServiceError("Failed to fetch tasks", details=e.details) from e

    return TaskListResponse(success=True, tasks=tasks)
