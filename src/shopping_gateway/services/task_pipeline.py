"""
Create-task pipeline.

Saving a task is an ordered sequence of named steps:

1. upload_image          - decode and store the inline image, if any
2. save_task             - write the task record to the document store
3. enqueue_event         - send a "task_created" message to the queue
4. publish_notification  - publish a "task_created" notification

Each step runs only if the previous one succeeded. The first failure aborts
the sequence and is raised as TaskPipelineError. Steps that already ran are
not undone: an uploaded image stays in the bucket even if the document
write fails afterwards.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from shopping_gateway.core.exceptions import BackingServiceError
from shopping_gateway.logging import get_logger
from shopping_gateway.schemas import TaskRecord
from shopping_gateway.utils.images import (
    JPEG_CONTENT_TYPE,
    decode_image_payload,
    inline_image_key,
    now_millis,
)

if TYPE_CHECKING:
    from shopping_gateway.clients import (
        DocumentStoreClient,
        ObjectStoreClient,
        QueueClient,
        TopicClient,
    )
    from shopping_gateway.schemas import TaskRequest

TASK_CREATED = "task_created"


class TaskPipelineError(BackingServiceError):
    """
    A create-task step failed.

    Attributes:
        step: Name of the step that failed
        completed_steps: Names of the steps that finished before it
    """

    def __init__(self, step: str, completed_steps: list[str], cause: Exception) -> None:
        super().__init__(
            error="Failed to save task",
            details=getattr(cause, "details", None) or str(cause),
            service=getattr(cause, "service", None),
            operation=getattr(cause, "operation", None),
        )
        self.step = step
        self.completed_steps = completed_steps


@dataclass
class TaskContext:
    """Values produced and consumed while a task moves through the steps."""

    request: TaskRequest
    image_url: str | None = None
    image_key: str | None = None
    record: TaskRecord | None = None
    outputs: dict[str, Any] = field(default_factory=dict)


Step = Callable[[TaskContext], Awaitable[None]]


@dataclass(frozen=True)
class PipelineStep:
    name: str
    run: Step


class TaskPipeline:
    """Runs the create-task steps against the backing service clients."""

    def __init__(
        self,
        object_store: ObjectStoreClient,
        document_store: DocumentStoreClient,
        queue: QueueClient,
        topic: TopicClient,
        notification_subject: str,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.object_store = object_store
        self.document_store = document_store
        self.queue = queue
        self.topic = topic
        self.notification_subject = notification_subject
        self.clock = clock
        self.steps: tuple[PipelineStep, ...] = (
            PipelineStep("upload_image", self._upload_image),
            PipelineStep("save_task", self._save_task),
            PipelineStep("enqueue_event", self._enqueue_event),
            PipelineStep("publish_notification", self._publish_notification),
        )

    async def run(self, request: TaskRequest) -> TaskRecord:
        """
        Execute every step in order.

        Args:
            request: Parsed create-task request

        Returns:
            The task record as written to the document store

        Raises:
            TaskPipelineError: On the first failing step
        """
        logger = get_logger("services.task_pipeline")
        context = TaskContext(request=request)
        completed: list[str] = []

        for step in self.steps:
            started = time.perf_counter()
            try:
                await step.run(context)
            except Exception as e:
                logger.error(
                    "Create-task step failed",
                    extra={
                        "task_id": request.id,
                        "step": step.name,
                        "completed_steps": completed,
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )
                raise TaskPipelineError(step.name, list(completed), e) from e

            completed.append(step.name)
            logger.debug(
                "Create-task step completed",
                extra={
                    "task_id": request.id,
                    "step": step.name,
                    "time_ms": (time.perf_counter() - started) * 1000,
                },
            )

        if context.record is None:
            raise RuntimeError("save_task step did not produce a record")

        logger.info(
            "Task saved",
            extra={
                "task_id": request.id,
                "image_key": context.image_key,
                "message_id": context.outputs.get("message_id"),
                "notification_id": context.outputs.get("notification_id"),
            },
        )
        return context.record

    async def _upload_image(self, context: TaskContext) -> None:
        payload = context.request.image_base64
        if not payload:
            return

        body = decode_image_payload(payload)
        key = inline_image_key(context.request.id, None, self.clock())
        context.image_url = await self.object_store.put_image(key, body, JPEG_CONTENT_TYPE)
        context.image_key = key

    async def _save_task(self, context: TaskContext) -> None:
        request = context.request
        now = self.clock()
        record = TaskRecord(
            id=request.id,
            title=request.title,
            description=request.description,
            image_url=context.image_url,
            location=request.location,
            created_at=request.created_at if request.created_at is not None else now,
            updated_at=now,
        )
        await self.document_store.put_item(record.model_dump(by_alias=True))
        context.record = record

    async def _enqueue_event(self, context: TaskContext) -> None:
        event = {
            "action": TASK_CREATED,
            "taskId": context.request.id,
            "timestamp": self.clock(),
        }
        context.outputs["message_id"] = await self.queue.send_event(event)

    async def _publish_notification(self, context: TaskContext) -> None:
        event = {
            "event": TASK_CREATED,
            "taskId": context.request.id,
            "title": context.request.title,
            "timestamp": self.clock(),
        }
        context.outputs["notification_id"] = await self.topic.publish_event(
            event, self.notification_subject
        )
