"""JSON-file implementation of TaskRepository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskflow.adapters.jsonfile.collection_store import JsonCollectionStore
from taskflow.adapters.jsonfile.utils import (
    find_index,
    now_utc,
    record_to_model,
    records_to_models,
)
from taskflow.errors import NotFoundError
from taskflow.models import Task, TaskCreate, TaskUpdate, parse_model
from taskflow.repositories import TaskRepository
from taskflow.utils.id_utils import generate_id

TASKS_COLLECTION = "tasks"


def _belongs_to(record: Any, project_id: str) -> bool:
    return isinstance(record, dict) and record.get("projectId") == project_id


class JsonTaskRepository(TaskRepository):
    """Task repository backed by the ``tasks`` collection."""

    collection = TASKS_COLLECTION

    def __init__(self, store: JsonCollectionStore):
        """Initialize the repository.

        Args:
            store: Collection store holding the tasks collection
        """
        self.store = store

    async def list_all(self, project_id: str | None = None) -> list[Task]:
        """List tasks, optionally filtered by project."""
        records = await self.store.load(self.collection)
        if project_id is not None:
            records = [r for r in records if _belongs_to(r, project_id)]
        return records_to_models(Task, records, self.collection)

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        records = await self.store.load(self.collection)
        index = find_index(records, task_id)
        if index < 0:
            raise NotFoundError("Task", task_id)
        return record_to_model(Task, records[index], self.collection)

    async def create(self, task_data: TaskCreate | Mapping[str, Any]) -> Task:
        """Create a new task."""
        data = parse_model(TaskCreate, task_data)
        task = Task(
            id=generate_id(),
            created_at=now_utc(),
            **data.model_dump(),
        )

        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            records.append(task.to_record())
            await self.store.save(self.collection, records)

        return task

    async def update(
        self, task_id: str, updates: TaskUpdate | Mapping[str, Any]
    ) -> Task:
        """Apply a sparse patch to a task."""
        patch = parse_model(TaskUpdate, updates)
        changes = patch.changes()

        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            index = find_index(records, task_id)
            if index < 0:
                raise NotFoundError("Task", task_id)

            current = record_to_model(Task, records[index], self.collection)
            if not changes:
                return current

            updated = current.model_copy(update=changes)
            records[index] = updated.to_record()
            await self.store.save(self.collection, records)

        return updated

    async def delete(self, task_id: str) -> bool:
        """Delete a task."""
        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            remaining = [
                r for r in records if not (isinstance(r, dict) and r.get("id") == task_id)
            ]
            if len(remaining) == len(records):
                raise NotFoundError("Task", task_id)
            await self.store.save(self.collection, remaining)

        return True

    async def delete_by_project(self, project_id: str) -> int:
        """Delete every task of a project."""
        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            remaining = [r for r in records if not _belongs_to(r, project_id)]
            removed = len(records) - len(remaining)
            if removed:
                await self.store.save(self.collection, remaining)

        return removed
